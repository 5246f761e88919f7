"""
Report Service transport - blocking HTTP client over requests.

Implements the REST contract the Sync Controller relies on:
- GET    /reports            all reports (administrator)
- GET    /report/{userId}    one submitter's reports
- POST   /report             create, 201 is the only success
- PATCH  /report/{id}        edit fields, 200
- PUT    /report/{id}        change status, 200
- DELETE /report/{id}        delete, 200

Any other outcome raises RemoteServiceError carrying the server's message.
"""

import logging
from typing import Any, Dict, List, Optional

import requests
from pydantic import ValidationError

from ireporter.core.exceptions import RemoteServiceError
from ireporter.core.settings import settings
from ireporter.models.report import Report, ReportCreateRequest, ReportStatus, ReportUpdate, StatusUpdateRequest

logger = logging.getLogger(__name__)


def error_message(response: Any, fallback: str) -> str:
    """
    Human-readable message from an error response.
    Looks at message, error, then FastAPI's detail.
    """
    try:
        data = response.json()
    except ValueError:
        data = None

    if isinstance(data, dict):
        for key in ("message", "error", "detail"):
            value = data.get(key)
            if value:
                return value if isinstance(value, str) else str(value)

    text = getattr(response, "text", "") or ""
    return text.strip() or fallback


class ReportServiceClient:
    """
    HTTP client for the Report Service.

    session may be any object with a requests-style request() method,
    e.g. requests.Session or a FastAPI TestClient.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        token: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Any = None,
    ):
        self.base_url = (base_url or settings.REPORT_SERVICE_URL).rstrip("/")
        self.token = token
        self.timeout = timeout if timeout is not None else settings.REQUEST_TIMEOUT_SECONDS
        self.session = session if session is not None else requests.Session()

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def _request(
        self,
        method: str,
        path: str,
        expected_status: int,
        failure: str,
        json: Optional[Dict[str, Any]] = None,
    ) -> Any:
        url = f"{self.base_url}{path}"
        try:
            response = self.session.request(
                method, url, json=json, headers=self._headers(), timeout=self.timeout
            )
        except requests.RequestException as e:
            logger.warning(f"{method} {path} failed: {e}")
            raise RemoteServiceError(f"{failure}: {e}") from e

        if response.status_code != expected_status:
            message = error_message(response, failure)
            logger.warning(f"{method} {path} returned {response.status_code}: {message}")
            raise RemoteServiceError(message, status_code=response.status_code)

        try:
            return response.json()
        except ValueError:
            return None

    def _parse_reports(self, data: Any, failure: str) -> List[Report]:
        # All-or-nothing: one malformed entry rejects the whole payload
        if not isinstance(data, dict) or not isinstance(data.get("reports"), list):
            raise RemoteServiceError(f"{failure}: malformed response")
        try:
            return [Report.model_validate(item) for item in data["reports"]]
        except ValidationError as e:
            raise RemoteServiceError(f"{failure}: malformed report data ({e.error_count()} errors)") from e

    def list_reports(self) -> List[Report]:
        failure = "Failed to fetch reports"
        return self._parse_reports(self._request("GET", "/reports", 200, failure), failure)

    def list_user_reports(self, user_id: str) -> List[Report]:
        failure = "Failed to fetch reports"
        return self._parse_reports(self._request("GET", f"/report/{user_id}", 200, failure), failure)

    def create_report(self, payload: ReportCreateRequest) -> Dict[str, Any]:
        """
        Returns:
            The newReport object; always contains an id
        """
        failure = "Failed to submit the report"
        data = self._request(
            "POST", "/report", 201, failure, json=payload.model_dump(mode="json", by_alias=True)
        )
        new_report = data.get("newReport") if isinstance(data, dict) else None
        if not isinstance(new_report, dict) or new_report.get("id") in (None, ""):
            raise RemoteServiceError(f"{failure}: response did not include the new report id", status_code=201)
        return new_report

    def update_report(self, report_id: str, update: ReportUpdate) -> None:
        self._request("PATCH", f"/report/{report_id}", 200, "Failed to update report", json=update.to_wire())

    def change_status(self, report_id: str, status: ReportStatus) -> None:
        body = StatusUpdateRequest(status=status).model_dump(mode="json")
        self._request("PUT", f"/report/{report_id}", 200, "Failed to update status", json=body)

    def delete_report(self, report_id: str) -> None:
        self._request("DELETE", f"/report/{report_id}", 200, "Failed to delete report")
