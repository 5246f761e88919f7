"""
User Service - in-memory users and sessions for the local Report Service.
"""

from ireporter.core.settings import settings
from ireporter.models.user import UserCreate, UserResponse
from ireporter.utils.security import generate_token, hash_password, verify_password
from typing import Dict, Optional, Tuple
import logging
import threading
import uuid

logger = logging.getLogger(__name__)


class UserService:
    """Registers users, checks credentials and issues tokens."""

    def __init__(self):
        self._lock = threading.Lock()
        self._users: Dict[str, Dict] = {}     # email -> user record

    def _admin_emails(self):
        return {e.strip().lower() for e in settings.ADMIN_EMAILS.split(",") if e.strip()}

    def _to_response(self, user: Dict) -> UserResponse:
        return UserResponse(
            user_id=user["user_id"],
            name=user["name"],
            email=user["email"],
            is_admin=user["is_admin"],
        )

    def create_user(self, user_data: UserCreate, is_admin: bool = False) -> UserResponse:
        """
        Raises:
            ValueError: If the email is already registered
        """
        email = user_data.email.strip().lower()
        with self._lock:
            if email in self._users:
                raise ValueError(f"User with email {email} already exists")
            user = {
                "user_id": uuid.uuid4().hex,
                "name": user_data.name,
                "email": email,
                "password_hash": hash_password(user_data.password),
                "is_admin": is_admin or email in self._admin_emails(),
            }
            self._users[email] = user

        logger.info(f"Created user {user['user_id']} (admin={user['is_admin']})")
        return self._to_response(user)

    def authenticate(self, email: str, password: str) -> Optional[Tuple[UserResponse, str]]:
        """Returns (user, token) or None if the credentials are wrong."""
        user = self._users.get(email.strip().lower())
        if user is None or not verify_password(password, user["password_hash"]):
            return None

        return self._to_response(user), generate_token()

    def clear(self) -> None:
        with self._lock:
            self._users.clear()


# Global service instance
_user_service = None


def get_user_service() -> UserService:
    """Get or create UserService singleton."""
    global _user_service
    if _user_service is None:
        _user_service = UserService()
    return _user_service
