"""
Shared fixtures: fabricated sessions, a scriptable fake transport and a
clean local Report Service.
"""

import threading
from datetime import date
from typing import Dict, List, Optional

import pytest

from ireporter.core.exceptions import RemoteServiceError
from ireporter.core.session import SessionContext
from ireporter.models.report import Report, ReportStatus, ReportType
from ireporter.services.lifecycle_policy import LifecyclePolicy
from ireporter.services.report_repository import get_report_repository
from ireporter.services.report_store import ReportStore
from ireporter.services.sync_controller import SyncController
from ireporter.services.user_service import get_user_service


def make_report(report_id: str, status: ReportStatus = ReportStatus.PENDING, title: str = "Report",
                description: str = "Something happened", **extra) -> Report:
    return Report(
        id=report_id,
        type=extra.pop("type", ReportType.RED_FLAG),
        status=status,
        title=title,
        description=description,
        incident_date=extra.pop("incident_date", date(2024, 5, 1)),
        report_date=extra.pop("report_date", date(2024, 5, 2)),
        **extra,
    )


class FakeTransport:
    """
    Records every call. Set `fail[name]` to a RemoteServiceError to make that
    call fail, or `gates[name]` to a threading.Event to block it until set.
    """

    def __init__(self, reports: Optional[List[Report]] = None):
        self.reports = list(reports or [])
        self.calls: List[tuple] = []
        self.fail: Dict[str, Exception] = {}
        self.gates: Dict[str, threading.Event] = {}
        self.hooks: Dict[str, object] = {}
        self.next_id = 100

    def _enter(self, name: str, *args):
        self.calls.append((name,) + args)
        hook = self.hooks.get(name)
        if hook is not None:
            hook(*args)
        gate = self.gates.get(name)
        if gate is not None:
            gate.wait(timeout=5)
        if name in self.fail:
            raise self.fail[name]

    def list_reports(self):
        self._enter("list_reports")
        return list(self.reports)

    def list_user_reports(self, user_id):
        self._enter("list_user_reports", user_id)
        return list(self.reports)

    def create_report(self, payload):
        self._enter("create_report", payload)
        self.next_id += 1
        return {"id": self.next_id, "status": "PENDING"}

    def update_report(self, report_id, update):
        self._enter("update_report", report_id, update)

    def change_status(self, report_id, status):
        self._enter("change_status", report_id, status)

    def delete_report(self, report_id):
        self._enter("delete_report", report_id)

    def names(self) -> List[str]:
        return [call[0] for call in self.calls]


@pytest.fixture
def submitter_session():
    return SessionContext(user_id="user-1", token="token-1", is_admin=False)


@pytest.fixture
def admin_session():
    return SessionContext(user_id="admin-1", token="token-admin", is_admin=True)


@pytest.fixture
def strict_policy():
    return LifecyclePolicy(strict=True)


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def sample_store():
    return ReportStore([
        make_report("1", ReportStatus.PENDING, title="Pothole", description="Deep hole on Allen Avenue"),
        make_report("2", ReportStatus.RESOLVED, title="Bribery", description="Cash demanded at checkpoint"),
    ])


@pytest.fixture
def submitter_controller(submitter_session, transport, sample_store, strict_policy):
    return SyncController(submitter_session, transport, store=sample_store, policy=strict_policy)


@pytest.fixture
def admin_controller(admin_session, transport, sample_store, strict_policy):
    return SyncController(admin_session, transport, store=sample_store, policy=strict_policy)


@pytest.fixture
def remote_error():
    return RemoteServiceError("Report Service unavailable", status_code=503)


@pytest.fixture(autouse=True)
def clean_report_service():
    """Local Report Service state is module-global; reset around every test."""
    get_report_repository().clear()
    get_user_service().clear()
    yield
    get_report_repository().clear()
    get_user_service().clear()
