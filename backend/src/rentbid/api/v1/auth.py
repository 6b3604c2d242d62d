"""Authentication API endpoints."""

import logging

from fastapi import APIRouter, HTTPException, status

from rentbid.api.deps import CurrentBidder, DbSession
from rentbid.core.config import settings
from rentbid.core.security import create_access_token
from rentbid.schemas.user import TokenResponse, UserLogin, UserRegister, UserResponse
from rentbid.services.admission import UNAUTHENTICATED_MESSAGE
from rentbid.services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register(user_data: UserRegister, db: DbSession):
    """Register a new user.

    Raises:
        400: Email already registered
    """
    user_service = UserService(db)

    try:
        user = await user_service.create_user(user_data)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )

    logger.info(f"Registered user {user.user_id}")
    return user


@router.post("/login", response_model=TokenResponse)
async def login(user_data: UserLogin, db: DbSession):
    """Login and get a bearer access token.

    Raises:
        401: Invalid credentials
    """
    user_service = UserService(db)
    user = await user_service.authenticate(user_data.email, user_data.password)

    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    access_token = create_access_token(data={"sub": str(user.user_id), "email": user.email})

    return TokenResponse(
        access_token=access_token,
        token_type="bearer",
        expires_in=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
    )


@router.get("/me", response_model=UserResponse)
async def get_me(current_bidder: CurrentBidder, db: DbSession):
    """Get current user information. Requires authentication."""
    user = None
    if current_bidder is not None:
        user = await UserService(db).get_by_id(current_bidder.user_id)

    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=UNAUTHENTICATED_MESSAGE,
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user
