"""
User models for registration and login against the identity endpoints.
"""

from pydantic import BaseModel, Field
from typing import Optional


class UserCreate(BaseModel):
    """Model for registering a new user."""
    name: str = Field(..., min_length=1, max_length=100, description="Display name")
    email: str = Field(..., min_length=3, max_length=254, description="Login email")
    password: str = Field(..., min_length=6, max_length=128, description="Plain password (hashed server-side)")


class LoginRequest(BaseModel):
    """Credentials for POST /auth/login."""
    email: str = Field(..., min_length=3, max_length=254)
    password: str = Field(..., min_length=1, max_length=128)


class UserResponse(BaseModel):
    """Public user representation (wire names are camelCase)."""
    user_id: str = Field(..., alias="userId", description="User identifier")
    name: Optional[str] = None
    email: str
    is_admin: bool = Field(default=False, alias="isAdmin")

    class Config:
        populate_by_name = True


class AuthResponse(BaseModel):
    """Login response."""
    message: str
    token: Optional[str] = None
    user: Optional[UserResponse] = None
