"""Authentication router for registration, login and guest sessions"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.db import get_db
from app.models import User
from app.schemas.auth import AuthResponse, LoginRequest, RegisterRequest, UserPublic
from app.services.auth import auth_service, get_current_user
from app.services.guest_pool import GuestPoolService, get_guest_pool_service

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    body: RegisterRequest,
    db: AsyncSession = Depends(get_db),
):
    """Create an account and return a session token for it."""
    return await auth_service.register(body.email, body.username, body.password, db)


@router.post("/login", response_model=AuthResponse)
async def login(
    body: LoginRequest,
    db: AsyncSession = Depends(get_db),
):
    """
    Log in with email or username.

    The ``email`` field accepts either; unknown user and wrong password both
    return 401 "Invalid credentials".
    """
    return await auth_service.login(body.email, body.password, db)


@router.post("/guest", response_model=AuthResponse)
async def login_as_guest(
    guest_pool: GuestPoolService = Depends(get_guest_pool_service),
):
    """
    Start a throwaway guest session.

    A pre-seeded account is taken from the guest pool when one is available,
    otherwise a fresh guest is created and filled with demo data in the
    background. Guest accounts are deleted 24 hours after they are claimed.
    """
    return await guest_pool.login_as_guest()


@router.get("/me", response_model=UserPublic)
async def get_me(user: User = Depends(get_current_user)):
    """Get current authenticated user's information."""
    return UserPublic.model_validate(user)
