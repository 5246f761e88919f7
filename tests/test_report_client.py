"""
Tests for the HTTP transport: status handling, error messages and
all-or-nothing parsing, using a stub session.
"""

import pytest
import requests

from ireporter.core.exceptions import RemoteServiceError
from ireporter.models.report import ReportStatus, ReportUpdate
from ireporter.services.report_client import ReportServiceClient, error_message
from tests.test_models import filled_form


class StubResponse:
    def __init__(self, status_code, body=None, text=""):
        self.status_code = status_code
        self._body = body
        self.text = text

    def json(self):
        if self._body is None:
            raise ValueError("no json")
        return self._body


class StubSession:
    def __init__(self, response=None, exc=None):
        self.response = response
        self.exc = exc
        self.requests = []

    def request(self, method, url, **kwargs):
        self.requests.append((method, url, kwargs))
        if self.exc is not None:
            raise self.exc
        return self.response


def client_with(response=None, exc=None, token="tok"):
    session = StubSession(response, exc)
    return ReportServiceClient(base_url="http://reports.test/", token=token, timeout=2, session=session), session


@pytest.mark.parametrize("body,expected", [
    ({"message": "Title is required"}, "Title is required"),
    ({"error": "Report not found"}, "Report not found"),
    ({"detail": "Invalid status"}, "Invalid status"),
])
def test_error_message_fields(body, expected):
    assert error_message(StubResponse(400, body), "fallback") == expected


def test_error_message_falls_back():
    assert error_message(StubResponse(500, None, text=""), "fallback") == "fallback"


def test_list_user_reports_sends_auth_and_timeout():
    client, session = client_with(StubResponse(200, {"reports": []}))
    assert client.list_user_reports("u-1") == []
    method, url, kwargs = session.requests[0]
    assert (method, url) == ("GET", "http://reports.test/report/u-1")
    assert kwargs["headers"]["Authorization"] == "Bearer tok"
    assert kwargs["timeout"] == 2


def test_malformed_report_rejects_whole_fetch():
    body = {"reports": [
        {"id": 1, "type": "RED_FLAG", "status": "PENDING", "title": "ok", "description": "ok",
         "incidentDate": "2024-05-01", "reportDate": "2024-05-01"},
        {"id": 2, "type": "UNKNOWN"},
    ]}
    client, _ = client_with(StubResponse(200, body))
    with pytest.raises(RemoteServiceError):
        client.list_reports()


def test_create_requires_201():
    client, _ = client_with(StubResponse(200, {"newReport": {"id": "x"}}))
    with pytest.raises(RemoteServiceError) as exc:
        client.create_report(filled_form().to_create_request("u-1"))
    assert exc.value.status_code == 200


def test_create_requires_new_report_id():
    client, _ = client_with(StubResponse(201, {"newReport": {}}))
    with pytest.raises(RemoteServiceError):
        client.create_report(filled_form().to_create_request("u-1"))


def test_update_sends_camel_case_patch():
    client, session = client_with(StubResponse(200, {"message": "ok"}))
    client.update_report("7", ReportUpdate(title="New", incident_date="2024-05-03"))
    method, url, kwargs = session.requests[0]
    assert method == "PATCH"
    assert kwargs["json"] == {"title": "New", "incidentDate": "2024-05-03"}


def test_status_change_is_put():
    client, session = client_with(StubResponse(200, {}))
    client.change_status("7", ReportStatus.REJECTED)
    method, url, kwargs = session.requests[0]
    assert method == "PUT" and kwargs["json"] == {"status": "REJECTED"}


def test_network_error_becomes_remote_error():
    client, _ = client_with(exc=requests.ConnectionError("refused"))
    with pytest.raises(RemoteServiceError) as exc:
        client.delete_report("7")
    assert exc.value.status_code is None


def test_no_token_no_auth_header():
    client, session = client_with(StubResponse(200, {"reports": []}), token=None)
    client.list_reports()
    assert "Authorization" not in session.requests[0][2]["headers"]
