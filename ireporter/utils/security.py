"""
Security utilities for the local Report Service: password hashing and
session tokens.
"""

import logging
import secrets

import bcrypt

logger = logging.getLogger(__name__)


def hash_password(password: str) -> str:
    """
    Hash a password with bcrypt and a fresh salt.

    Args:
        password: Plain password

    Returns:
        bcrypt hash as text (salt embedded)
    """
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt()).decode()


def verify_password(password: str, stored: str) -> bool:
    """Check a password against a stored bcrypt hash."""
    if not stored:
        return False
    try:
        return bcrypt.checkpw(password.encode(), stored.encode())
    except ValueError:
        logger.warning("Stored password hash is not a valid bcrypt hash")
        return False


def generate_token() -> str:
    """Opaque bearer token."""
    return secrets.token_urlsafe(32)
