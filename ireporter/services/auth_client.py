"""
Identity client - register and log in against the Report Service's
/auth endpoints and turn a login into a SessionContext.
"""

import logging
from typing import Any, Optional

import requests
from pydantic import ValidationError

from ireporter.core.exceptions import RemoteServiceError
from ireporter.core.session import SessionContext
from ireporter.core.settings import settings
from ireporter.models.user import AuthResponse, LoginRequest, UserCreate
from ireporter.services.report_client import error_message

logger = logging.getLogger(__name__)


class AuthClient:
    """Client for POST /auth/register and POST /auth/login."""

    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None, session: Any = None):
        self.base_url = (base_url or settings.REPORT_SERVICE_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.REQUEST_TIMEOUT_SECONDS
        self.session = session if session is not None else requests.Session()

    def _post(self, path: str, body: dict, failure: str):
        try:
            response = self.session.post(f"{self.base_url}{path}", json=body, timeout=self.timeout)
        except requests.RequestException as e:
            raise RemoteServiceError(f"{failure}: {e}") from e
        if not 200 <= response.status_code < 300:
            raise RemoteServiceError(error_message(response, failure), status_code=response.status_code)
        return response.json()

    def register(self, name: str, email: str, password: str) -> None:
        user = UserCreate(name=name, email=email, password=password)
        self._post("/auth/register", user.model_dump(), "Registration failed")
        logger.info(f"Registered user {email}")

    def login(self, email: str, password: str) -> SessionContext:
        """
        Raises:
            RemoteServiceError: Credentials rejected or service unreachable
        """
        credentials = LoginRequest(email=email, password=password)
        data = self._post("/auth/login", credentials.model_dump(), "Login failed")
        try:
            auth = AuthResponse.model_validate(data)
        except ValidationError as e:
            raise RemoteServiceError(f"Login failed: malformed response ({e.error_count()} errors)") from e
        if auth.user is None:
            raise RemoteServiceError("Login failed: response did not include a user")

        logger.info(f"Logged in as {auth.user.email} (admin={auth.user.is_admin})")
        return SessionContext(
            user_id=auth.user.user_id,
            token=auth.token,
            is_admin=auth.user.is_admin,
            name=auth.user.name,
            email=auth.user.email,
        )
