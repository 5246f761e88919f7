"""
Submitter view - a citizen's own reports: create, track, edit, delete.
"""

from typing import Any, Optional
import logging

from ireporter.core.session import SessionContext
from ireporter.models.forms import EditSession, ReportForm
from ireporter.models.report import Report
from ireporter.services.geolocation import GeolocationProvider, get_geolocation_provider
from ireporter.services.lifecycle_policy import LifecyclePolicy
from ireporter.services.sync_controller import SyncResult
from ireporter.views.base import ReportView

logger = logging.getLogger(__name__)


class SubmitterView(ReportView):
    """Reports of session.user_id, with the create form and edit dialog."""

    def __init__(
        self,
        session: SessionContext,
        transport: Any,
        policy: Optional[LifecyclePolicy] = None,
        geolocation: Optional[GeolocationProvider] = None,
    ):
        super().__init__(session, transport, policy=policy)
        self.form = ReportForm()
        self.edit = EditSession()
        self.geolocation = geolocation if geolocation is not None else get_geolocation_provider()
        self.location_error: Optional[str] = None

    def can_edit(self, report: Report) -> bool:
        """Whether the edit and delete controls are enabled."""
        return self.policy.can_mutate(report) and not self.controller.is_busy(report.id)

    def use_current_location(self) -> bool:
        """
        Fill latitude/longitude from the geolocation provider.
        Failure is recorded in location_error and leaves the form usable.
        """
        self.location_error = None
        location = self.geolocation.current_location()
        if location is None:
            self.location_error = "Failed to get location. Please ensure location services are enabled."
            logger.info("Current location unavailable; manual entry still possible")
            return False
        self.form.latitude = location.latitude
        self.form.longitude = location.longitude
        return True

    async def submit(self) -> SyncResult:
        return await self.controller.create(self.form)

    def start_edit(self, report_id: str) -> bool:
        report = self.store.get(report_id)
        if report is None or not self.can_edit(report):
            return False
        self.edit.open_for(report)
        return True

    async def save_edit(self) -> SyncResult:
        return await self.controller.save_edit(self.edit)

    async def delete(self, report_id: str) -> SyncResult:
        return await self.controller.delete(report_id)
