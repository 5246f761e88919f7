"""
Lifecycle Policy - report status state machine.

DESIGN PRINCIPLES:
- No backward transitions
- Terminal states (RESOLVED, REJECTED) have no outbound edges
- draft -> PENDING only happens on successful remote creation
- Only draft and PENDING reports may be edited or deleted by the submitter
- The Report Service is the final enforcer; the client checks pre-flight
"""

from typing import Dict, List, Optional, Union
import logging

from ireporter.core.exceptions import PolicyViolationError
from ireporter.models.report import Report, ReportStatus, Role

logger = logging.getLogger(__name__)


MUTABLE_STATUSES = frozenset({ReportStatus.DRAFT, ReportStatus.PENDING})
TERMINAL_STATUSES = frozenset({ReportStatus.RESOLVED, ReportStatus.REJECTED})

# Statuses an administrator may pick (draft never leaves the client)
ADMIN_STATUSES: List[ReportStatus] = [
    ReportStatus.PENDING,
    ReportStatus.UNDER_INVESTIGATION,
    ReportStatus.RESOLVED,
    ReportStatus.REJECTED,
]


def _as_status(value: Union[str, ReportStatus]) -> Optional[ReportStatus]:
    try:
        return ReportStatus(value)
    except ValueError:
        return None


class LifecyclePolicy:
    """
    Transition rules per role.

    Rules:
    - Submitters never pick a status; creation moves draft to PENDING
    - Administrators move reports forward along ADMIN_TRANSITIONS
    - strict=False reproduces the loose selector that offers every
      non-draft status from any non-draft status
    """

    # Allowed transitions map: {from_status: [to_status, ...]}
    ADMIN_TRANSITIONS: Dict[ReportStatus, List[ReportStatus]] = {
        ReportStatus.DRAFT: [],
        ReportStatus.PENDING: [
            ReportStatus.UNDER_INVESTIGATION,
            ReportStatus.RESOLVED,
            ReportStatus.REJECTED,
        ],
        ReportStatus.UNDER_INVESTIGATION: [
            ReportStatus.RESOLVED,
            ReportStatus.REJECTED,
        ],
        ReportStatus.RESOLVED: [],   # Terminal
        ReportStatus.REJECTED: [],   # Terminal
    }

    # Fired by the Sync Controller on a confirmed create, never user-selected
    CREATION_TRANSITION = (ReportStatus.DRAFT, ReportStatus.PENDING)

    def __init__(self, strict: bool = True):
        self.strict = strict

    @staticmethod
    def can_mutate(report: Report) -> bool:
        """True iff the submitter may still edit or delete the report."""
        status = ReportStatus(report.status)
        if status in MUTABLE_STATUSES:
            return True
        if status is ReportStatus.UNDER_INVESTIGATION or status in TERMINAL_STATUSES:
            return False
        raise AssertionError(f"Unhandled report status: {status!r}")

    @staticmethod
    def is_terminal(status: Union[str, ReportStatus]) -> bool:
        return _as_status(status) in TERMINAL_STATUSES

    def allowed_transitions(self, current_status: Union[str, ReportStatus], role: Role) -> List[ReportStatus]:
        """
        Get the statuses reachable in one step from current_status.

        Args:
            current_status: Current status
            role: Acting role

        Returns:
            List of allowed next statuses (empty for unknown statuses)
        """
        current = _as_status(current_status)
        if current is None:
            return []

        if role is Role.SUBMITTER:
            return []
        if role is Role.ADMINISTRATOR:
            if not self.strict and current is not ReportStatus.DRAFT:
                return [s for s in ADMIN_STATUSES if s is not current]
            return list(self.ADMIN_TRANSITIONS.get(current, []))
        raise AssertionError(f"Unhandled role: {role!r}")

    def is_valid_transition(
        self,
        from_status: Union[str, ReportStatus],
        to_status: Union[str, ReportStatus],
        role: Role,
    ) -> bool:
        """
        Check if a status transition is valid for the role.

        Same status is always valid (no-op).
        """
        from_enum = _as_status(from_status)
        to_enum = _as_status(to_status)
        if from_enum is None or to_enum is None:
            return False

        if from_enum == to_enum:
            return True

        return to_enum in self.allowed_transitions(from_enum, role)

    def validate_transition(
        self,
        from_status: Union[str, ReportStatus],
        to_status: Union[str, ReportStatus],
        role: Role,
    ) -> None:
        """
        Raises:
            PolicyViolationError: If the transition is not allowed
        """
        if not self.is_valid_transition(from_status, to_status, role):
            allowed = [s.value for s in self.allowed_transitions(from_status, role)]
            from_label = getattr(from_status, "value", from_status)
            to_label = getattr(to_status, "value", to_status)
            raise PolicyViolationError(
                f"Invalid status transition: {from_label} → {to_label}. "
                f"Allowed transitions from {from_label}: {allowed}"
            )

    def ensure_mutable(self, report: Report, action: str) -> None:
        """
        Raises:
            PolicyViolationError: If the report can no longer be edited or deleted
        """
        if not self.can_mutate(report):
            raise PolicyViolationError(
                f"Cannot {action} report {report.id}: status {report.status.value} is no longer editable"
            )

    def status_options(self, current_status: Union[str, ReportStatus], role: Role) -> List[ReportStatus]:
        """Statuses a status selector should offer, current first."""
        current = _as_status(current_status)
        if current is None:
            return []
        return [current] + self.allowed_transitions(current, role)


# Global policy instance
_policy: Optional[LifecyclePolicy] = None


def get_lifecycle_policy() -> LifecyclePolicy:
    """Get or create the LifecyclePolicy singleton configured from settings."""
    global _policy
    if _policy is None:
        from ireporter.core.settings import settings
        _policy = LifecyclePolicy(strict=settings.STRICT_ADMIN_TRANSITIONS)
        logger.info(f"Lifecycle policy initialized (strict={_policy.strict})")
    return _policy
