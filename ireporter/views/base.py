"""
Shared view plumbing: store ownership, filter inputs and projection.
"""

from typing import Any, List, Optional, Union
import logging

from ireporter.core.session import SessionContext
from ireporter.models.report import ALL_STATUSES, Report, ReportStatus, StatusFacet
from ireporter.services.lifecycle_policy import LifecyclePolicy
from ireporter.services.report_store import ReportStore
from ireporter.services.sync_controller import Notification, SyncController, SyncResult
from ireporter.services.view_filter import project

logger = logging.getLogger(__name__)


class ReportView:
    """A mounted screen over one report collection."""

    def __init__(self, session: SessionContext, transport: Any, policy: Optional[LifecyclePolicy] = None):
        self.session = session
        self.store = ReportStore()
        self.controller = SyncController(session, transport, store=self.store, policy=policy)
        self.search_term = ""
        self.status_facet: StatusFacet = ALL_STATUSES

    @property
    def policy(self) -> LifecyclePolicy:
        return self.controller.policy

    @property
    def loading(self) -> bool:
        return self.controller.loading

    @property
    def error(self) -> Optional[str]:
        return self.controller.error

    async def mount(self) -> SyncResult:
        """Initial full fetch."""
        return await self.controller.fetch()

    async def retry(self) -> SyncResult:
        return await self.controller.retry_fetch()

    def close(self) -> None:
        """Navigate away: drop the store and ignore late responses."""
        self.controller.close()
        self.store.clear()

    def set_search(self, term: str) -> None:
        self.search_term = term or ""

    def set_status_facet(self, facet: Union[StatusFacet, str]) -> None:
        self.status_facet = ALL_STATUSES if facet == ALL_STATUSES else ReportStatus(facet)

    def visible_reports(self) -> List[Report]:
        """Recomputed on every call from the current store and filter inputs."""
        return project(self.store, self.search_term, self.status_facet)

    def notifications(self) -> List[Notification]:
        return self.controller.drain_notifications()
