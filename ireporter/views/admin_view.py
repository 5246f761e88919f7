"""
Administrator view - every report, triaged through status changes.
"""

from typing import List
import logging

from ireporter.core.exceptions import PolicyViolationError
from ireporter.models.report import Report, ReportStatus
from ireporter.services.sync_controller import SyncResult
from ireporter.views.base import ReportView

logger = logging.getLogger(__name__)


class AdminView(ReportView):
    """Dashboard over all reports."""

    def __init__(self, session, transport, policy=None):
        if not session.is_admin:
            raise PolicyViolationError(f"User {session.user_id} is not an administrator")
        super().__init__(session, transport, policy=policy)

    def status_options(self, report: Report) -> List[ReportStatus]:
        """Statuses offered in the report's status selector."""
        if self.controller.is_busy(report.id):
            return [report.status]
        return self.policy.status_options(report.status, self.session.role)

    async def change_status(self, report_id: str, new_status: ReportStatus) -> SyncResult:
        return await self.controller.change_status(report_id, new_status)
