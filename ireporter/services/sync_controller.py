"""
Sync Controller - orchestrates Report Service calls and reconciles the
confirmed results into a Report Store.

DESIGN NOTE:
- Confirm-then-apply: no report's status or existence changes in the store
  before the Report Service has accepted the change
- Create rebuilds the new report locally from the form plus the server id
- Update trusts the submitted values once confirmed (last writer wins)
- At most one in-flight mutation per report id
- Nothing raises to the caller; every outcome is a SyncResult plus a
  notification
"""

import asyncio
import functools
import logging
from datetime import date
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Set

from pydantic import BaseModel, Field, ValidationError

from ireporter.core.exceptions import PolicyViolationError, RemoteServiceError, ReportValidationError
from ireporter.core.session import SessionContext
from ireporter.models.forms import EditSession, ReportForm
from ireporter.models.report import Report, ReportStatus, ReportUpdate, Role
from ireporter.services.lifecycle_policy import LifecyclePolicy, get_lifecycle_policy
from ireporter.services.report_store import ReportStore

logger = logging.getLogger(__name__)


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    POLICY = "policy"
    REMOTE = "remote"
    DISCARDED = "discarded"


class NotificationLevel(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"


class Notification(BaseModel):
    """Transient user-facing message."""
    level: NotificationLevel
    message: str


class SyncResult(BaseModel):
    """Outcome of one controller operation."""
    success: bool
    message: str = ""
    error_kind: Optional[ErrorKind] = None
    errors: Dict[str, str] = Field(default_factory=dict, description="Per-field validation errors")
    report: Optional[Report] = None


class SyncController:
    """
    Runs report operations for one view against the Report Service.

    The transport is blocking (see ReportServiceClient); calls are
    awaited through the event loop's default executor.
    """

    def __init__(
        self,
        session: SessionContext,
        transport: Any,
        store: Optional[ReportStore] = None,
        policy: Optional[LifecyclePolicy] = None,
    ):
        self.session = session
        self.transport = transport
        self.store = store if store is not None else ReportStore()
        self.policy = policy if policy is not None else get_lifecycle_policy()
        self.loading = False
        self.error: Optional[str] = None
        self.closed = False
        self.notifications: List[Notification] = []
        self._in_flight: Set[str] = set()
        self._submitting = False

    # ------------------------------------------------------------------
    # helpers

    def notify(self, level: NotificationLevel, message: str) -> None:
        self.notifications.append(Notification(level=level, message=message))

    def drain_notifications(self) -> List[Notification]:
        pending, self.notifications = self.notifications, []
        return pending

    def is_busy(self, report_id: str) -> bool:
        return report_id in self._in_flight

    def close(self) -> None:
        """Detach from the view; late responses are dropped."""
        self.closed = True

    async def _call(self, func: Callable, *args) -> Any:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, functools.partial(func, *args))

    def _failure(self, kind: ErrorKind, message: str, errors: Optional[Dict[str, str]] = None) -> SyncResult:
        self.notify(NotificationLevel.ERROR, message)
        return SyncResult(success=False, message=message, error_kind=kind, errors=errors or {})

    def _discarded(self) -> SyncResult:
        logger.debug("Discarding fetch outcome for closed view")
        return SyncResult(success=False, message="View closed", error_kind=ErrorKind.DISCARDED)

    def _fetch_failed(self) -> SyncResult:
        if self.closed:
            return self._discarded()
        self.error = "Failed to fetch reports. Please try again later."
        return self._failure(ErrorKind.REMOTE, self.error)

    def _claim(self, report_id: str) -> None:
        if report_id in self._in_flight:
            raise PolicyViolationError(f"Report {report_id} already has a request in progress")
        self._in_flight.add(report_id)

    def _target(self, report_id: str) -> Report:
        report = self.store.get(report_id)
        if report is None:
            raise PolicyViolationError(f"Report {report_id} is not in this view")
        return report

    # ------------------------------------------------------------------
    # operations

    async def fetch(self) -> SyncResult:
        """
        Replace the store with the Report Service's collection.

        Administrators get every report; submitters get their own. On
        failure the store keeps its last good contents and error is set.
        """
        self.loading = True
        try:
            if self.session.role is Role.ADMINISTRATOR:
                reports = await self._call(self.transport.list_reports)
            else:
                reports = await self._call(self.transport.list_user_reports, self.session.user_id)
        except RemoteServiceError as e:
            logger.warning(f"Fetch failed for user {self.session.user_id}: {e}")
            return self._fetch_failed()
        except Exception as e:
            logger.error(f"Unexpected fetch failure: {e}", exc_info=True)
            return self._fetch_failed()
        finally:
            self.loading = False

        if self.closed:
            return self._discarded()

        self.store.load(reports)
        self.error = None
        logger.info(f"Loaded {len(self.store)} reports")
        return SyncResult(success=True, message=f"Loaded {len(self.store)} reports")

    async def retry_fetch(self) -> SyncResult:
        return await self.fetch()

    async def create(self, form: ReportForm) -> SyncResult:
        """
        Submit the create form.

        On success the new report (server id, PENDING) is appended and the
        form is reset. On any failure store and form are untouched.
        """
        try:
            form.validate_for_submit()
        except ReportValidationError as e:
            logger.info(f"Create rejected by validation: {e.errors}")
            return self._failure(ErrorKind.VALIDATION, str(e), e.errors)

        if self._submitting:
            return self._failure(ErrorKind.POLICY, "A report is already being submitted")

        submitted = form.model_copy(deep=True)
        try:
            payload = submitted.to_create_request(self.session.user_id)
        except ValidationError as e:
            logger.info(f"Create rejected while building the request: {e}")
            errors = {".".join(str(p) for p in err["loc"]) or "form": err["msg"] for err in e.errors()}
            return self._failure(ErrorKind.VALIDATION, "; ".join(errors.values()), errors)
        self._submitting = True
        try:
            new_report = await self._call(self.transport.create_report, payload)
        except RemoteServiceError as e:
            logger.warning(f"Create failed: {e}")
            return self._failure(ErrorKind.REMOTE, str(e) or "Failed to submit the report")
        except Exception as e:
            logger.error(f"Unexpected create failure: {e}", exc_info=True)
            return self._failure(ErrorKind.REMOTE, "An unexpected error occurred. Please try again.")
        finally:
            self._submitting = False

        created_from, created_to = self.policy.CREATION_TRANSITION
        report = submitted.to_report(str(new_report["id"]), created_to)
        self.store.insert(report)
        form.reset()
        logger.info(f"Report {report.id} created ({created_from.value} → {created_to.value})")
        self.notify(NotificationLevel.SUCCESS, "Report submitted successfully")
        return SyncResult(success=True, message="Report submitted successfully", report=report)

    async def update(self, report_id: str, update: ReportUpdate) -> SyncResult:
        """
        Send edited fields; apply them locally only once confirmed.
        """
        changes = update.changes()
        if not changes:
            return self._failure(ErrorKind.VALIDATION, "No data to update")
        incident_date = changes.get("incident_date")
        if incident_date is not None and incident_date > date.today():
            message = "Incident date cannot be in the future"
            return self._failure(ErrorKind.VALIDATION, message, {"incident_date": message})

        try:
            report = self._target(report_id)
            self.policy.ensure_mutable(report, "edit")
            self._claim(report_id)
        except PolicyViolationError as e:
            logger.warning(str(e))
            return self._failure(ErrorKind.POLICY, str(e))

        try:
            await self._call(self.transport.update_report, report_id, update)
        except RemoteServiceError as e:
            logger.warning(f"Update of report {report_id} failed: {e}")
            return self._failure(ErrorKind.REMOTE, str(e) or "Failed to update report")
        except Exception as e:
            logger.error(f"Unexpected update failure for report {report_id}: {e}", exc_info=True)
            return self._failure(ErrorKind.REMOTE, "Failed to update report")
        finally:
            self._in_flight.discard(report_id)

        self.store.patch(report_id, changes)
        logger.info(f"Report {report_id} updated: {sorted(changes)}")
        self.notify(NotificationLevel.SUCCESS, "Report updated successfully")
        return SyncResult(success=True, message="Report updated successfully", report=self.store.get(report_id))

    async def save_edit(self, edit_session: EditSession) -> SyncResult:
        """Submit an open edit dialog; it closes only on success."""
        if not edit_session.is_open or edit_session.report_id is None:
            return self._failure(ErrorKind.VALIDATION, "No report is being edited")
        try:
            update = edit_session.to_update()
        except ReportValidationError as e:
            return self._failure(ErrorKind.VALIDATION, str(e), e.errors)

        result = await self.update(edit_session.report_id, update)
        if result.success:
            edit_session.close()
        return result

    async def delete(self, report_id: str) -> SyncResult:
        """Remove the report from the store only after the service confirms."""
        try:
            report = self._target(report_id)
            self.policy.ensure_mutable(report, "delete")
            self._claim(report_id)
        except PolicyViolationError as e:
            logger.warning(str(e))
            return self._failure(ErrorKind.POLICY, str(e))

        try:
            await self._call(self.transport.delete_report, report_id)
        except RemoteServiceError as e:
            logger.warning(f"Delete of report {report_id} failed: {e}")
            return self._failure(ErrorKind.REMOTE, str(e) or "Failed to delete report. Please try again.")
        except Exception as e:
            logger.error(f"Unexpected delete failure for report {report_id}: {e}", exc_info=True)
            return self._failure(ErrorKind.REMOTE, "Failed to delete report. Please try again.")
        finally:
            self._in_flight.discard(report_id)

        self.store.remove(report_id)
        logger.info(f"Report {report_id} deleted")
        self.notify(NotificationLevel.SUCCESS, "Report deleted successfully")
        return SyncResult(success=True, message="Report deleted successfully", report=report)

    async def change_status(self, report_id: str, new_status: ReportStatus) -> SyncResult:
        """
        Administrator status change. The store keeps the previous status
        until the Report Service confirms the new one.
        """
        try:
            new_status = ReportStatus(new_status)
            report = self._target(report_id)
            if report.status == new_status:
                return SyncResult(success=True, message="Status unchanged", report=report)
            self.policy.validate_transition(report.status, new_status, self.session.role)
            self._claim(report_id)
        except ValueError as e:
            logger.warning(f"Status change refused for report {report_id}: {e}")
            return self._failure(ErrorKind.POLICY, str(e))

        try:
            await self._call(self.transport.change_status, report_id, new_status)
        except RemoteServiceError as e:
            logger.warning(f"Status change of report {report_id} failed: {e}")
            return self._failure(ErrorKind.REMOTE, f"Failed to update status: {e}")
        except Exception as e:
            logger.error(f"Unexpected status change failure for report {report_id}: {e}", exc_info=True)
            return self._failure(ErrorKind.REMOTE, "Failed to update status. Please try again.")
        finally:
            self._in_flight.discard(report_id)

        self.store.patch(report_id, {"status": new_status})
        logger.info(f"Report {report_id} status: {report.status.value} → {new_status.value}")
        self.notify(NotificationLevel.SUCCESS, "Status updated successfully")
        return SyncResult(success=True, message="Status updated successfully", report=self.store.get(report_id))
