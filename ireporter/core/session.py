"""
Session context handed to controllers at construction.

Token and user id come from the identity collaborator and are opaque:
they are attached to requests and never parsed.
"""

from pydantic import BaseModel, Field
from typing import Optional

from ireporter.models.report import Role


class SessionContext(BaseModel):
    """Authenticated session for one user."""
    user_id: str = Field(..., description="Submitter identifier")
    token: Optional[str] = Field(None, description="Bearer token")
    is_admin: bool = Field(default=False, description="Administrator privileges")
    name: Optional[str] = None
    email: Optional[str] = None

    @property
    def role(self) -> Role:
        return Role.ADMINISTRATOR if self.is_admin else Role.SUBMITTER

    class Config:
        frozen = True
