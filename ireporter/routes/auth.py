"""
Authentication endpoints - email + password registration and login.
"""

from fastapi import APIRouter, HTTPException, status
from ireporter.models.user import AuthResponse, LoginRequest, UserCreate
from ireporter.services.user_service import get_user_service
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(user: UserCreate):
    """
    Register a new user.

    Returns:
        Success message and the public user record
    """
    try:
        created = get_user_service().create_user(user)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))

    return {
        "message": "User registered successfully",
        "user": created.model_dump(by_alias=True),
    }


@router.post("/login")
async def login(credentials: LoginRequest):
    """
    Check credentials and issue a session token.

    Returns:
        AuthResponse with token and user (userId, name, email, isAdmin)
    """
    result = get_user_service().authenticate(credentials.email, credentials.password)
    if result is None:
        logger.info(f"Failed login for {credentials.email}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password"
        )

    user, token = result
    response = AuthResponse(message="Login successful", token=token, user=user)
    return response.model_dump(by_alias=True)
