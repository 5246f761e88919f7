"""
Report repository - in-memory storage behind the local Report Service.

This side is the authoritative enforcer of the lifecycle:
- new reports start at PENDING
- only PENDING reports may be edited or deleted
- status changes must follow the lifecycle graph
"""

from datetime import date
from typing import Dict, List, Optional
import logging
import threading
import uuid

from ireporter.core.exceptions import PolicyViolationError, ReportValidationError
from ireporter.models.report import Report, ReportCreateRequest, ReportStatus, ReportUpdate, Role
from ireporter.services.lifecycle_policy import LifecyclePolicy

logger = logging.getLogger(__name__)


class ReportNotFoundError(LookupError):
    """No report with the given id."""


class ReportRepository:
    """Reports keyed by id, each remembering its owner."""

    def __init__(self, policy: Optional[LifecyclePolicy] = None):
        self.policy = policy or LifecyclePolicy(strict=True)
        self._lock = threading.Lock()
        self._reports: Dict[str, Report] = {}
        self._owners: Dict[str, str] = {}

    def _get(self, report_id: str) -> Report:
        report = self._reports.get(report_id)
        if report is None:
            raise ReportNotFoundError(f"Report {report_id} not found")
        return report

    def create(self, payload: ReportCreateRequest) -> Report:
        """
        Store a new report.

        Raises:
            ReportValidationError: If the incident date is in the future
        """
        if payload.incident_date > date.today():
            raise ReportValidationError({"incidentDate": "Date of incident cannot be in the future"})

        report = Report(
            id=uuid.uuid4().hex,
            type=payload.type,
            status=ReportStatus.PENDING,
            title=payload.title,
            description=payload.description,
            location=payload.location.to_location(),
            incident_date=payload.incident_date,
            report_date=payload.report_date,
        )
        with self._lock:
            self._reports[report.id] = report
            self._owners[report.id] = payload.user_id

        logger.info(f"Report saved: {report.id} (owner {payload.user_id})")
        return report

    def list_all(self) -> List[Report]:
        return list(self._reports.values())

    def list_for_user(self, user_id: str) -> List[Report]:
        return [r for r in self._reports.values() if self.owner_of(r.id) == user_id]

    def owner_of(self, report_id: str) -> Optional[str]:
        return self._owners.get(report_id)

    def update(self, report_id: str, update: ReportUpdate) -> Report:
        """
        Raises:
            ReportNotFoundError: Unknown id
            PolicyViolationError: Report no longer editable
            ReportValidationError: Future incident date
        """
        with self._lock:
            report = self._get(report_id)
            self.policy.ensure_mutable(report, "edit")
            changes = update.changes()
            incident_date = changes.get("incident_date")
            if incident_date is not None and incident_date > date.today():
                raise ReportValidationError({"incidentDate": "Date of incident cannot be in the future"})
            updated = report.model_copy(update=changes)
            self._reports[report_id] = updated

        logger.info(f"Report {report_id} updated: {sorted(changes)}")
        return updated

    def change_status(self, report_id: str, new_status: ReportStatus) -> Report:
        """
        Raises:
            ReportNotFoundError: Unknown id
            PolicyViolationError: Transition not on the lifecycle graph
        """
        with self._lock:
            report = self._get(report_id)
            if new_status is ReportStatus.DRAFT:
                raise PolicyViolationError("Reports cannot be moved back to draft")
            self.policy.validate_transition(report.status, new_status, Role.ADMINISTRATOR)
            updated = report.model_copy(update={"status": new_status})
            self._reports[report_id] = updated

        logger.info(f"Report {report_id} status {report.status.value} → {new_status.value}")
        return updated

    def delete(self, report_id: str) -> None:
        """
        Raises:
            ReportNotFoundError: Unknown id
            PolicyViolationError: Report no longer deletable
        """
        with self._lock:
            report = self._get(report_id)
            self.policy.ensure_mutable(report, "delete")
            del self._reports[report_id]
            self._owners.pop(report_id, None)

        logger.info(f"Report {report_id} deleted")

    def clear(self) -> None:
        with self._lock:
            self._reports.clear()
            self._owners.clear()


# Global repository instance
_report_repository = None


def get_report_repository() -> ReportRepository:
    """Get or create ReportRepository singleton."""
    global _report_repository
    if _report_repository is None:
        _report_repository = ReportRepository()
    return _report_repository
