"""
Error taxonomy for report synchronization.

- ReportValidationError: input rejected before any remote call
- PolicyViolationError: lifecycle policy forbids the action
- RemoteServiceError: transport failure or non-success response
"""

from typing import Dict, Optional


class ReportValidationError(ValueError):
    """Missing required field or future-dated incident."""

    def __init__(self, errors: Dict[str, str]):
        self.errors = dict(errors)
        super().__init__("; ".join(self.errors.values()))


class PolicyViolationError(ValueError):
    """Action not permitted for the report's current status or role."""


class RemoteServiceError(RuntimeError):
    """
    The Report Service did not confirm the request.

    status_code is None when no response was received at all.
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)
