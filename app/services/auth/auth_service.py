"""Registration and password login"""

from fastapi import HTTPException, status
from sqlalchemy import func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import User
from app.schemas.auth import AuthResponse
from app.services.auth.passwords import hash_password, verify_password
from app.services.auth.token_service import TokenService, token_service
from app.services.guest_pool.guest_naming import AccountKind, classify_account
from app.utils.logger import get_logger

logger = get_logger("auth")

INVALID_CREDENTIALS = "Invalid credentials"


def normalize_email(email: str) -> str:
    return email.lower().strip()


class AuthService:
    """Password login and registration.

    Guest login lives in the guest pool service; both hand back the same
    token response.
    """

    def __init__(self, tokens: TokenService | None = None):
        self.tokens = tokens or token_service

    async def register(
        self,
        email: str,
        username: str,
        password: str,
        db: AsyncSession,
    ) -> AuthResponse:
        """Create an account and log it in.

        Raises:
            HTTPException: 409 if the (normalized) email is already taken,
                422 if it follows the reserved guest naming convention
        """
        normalized_email = normalize_email(email)

        if classify_account(normalized_email) is not AccountKind.PERMANENT:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail="Email address is reserved",
            )

        result = await db.execute(select(User.id).where(User.email == normalized_email))
        if result.first() is not None:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="User already exists")

        user = User(
            email=normalized_email,
            username=username.strip(),
            password_hash=await hash_password(password),
        )
        db.add(user)
        try:
            await db.commit()
        except IntegrityError:
            # Lost a race with a concurrent registration for the same email
            await db.rollback()
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="User already exists")
        await db.refresh(user)

        logger.info(f"Registered user {user.id}")
        return self.tokens.build_auth_response(user)

    async def login(self, identifier: str, password: str, db: AsyncSession) -> AuthResponse:
        """Log in with email or username.

        Unknown user and wrong password produce the same 401.
        """
        value = identifier.lower().strip()

        result = await db.execute(
            select(User)
            .where(or_(User.email == value, func.lower(User.username) == value))
            .order_by(User.id.asc())
            .limit(1)
        )
        user = result.scalar_one_or_none()

        if user is None or not await verify_password(password, user.password_hash):
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=INVALID_CREDENTIALS)

        return self.tokens.build_auth_response(user)


# Global instance
auth_service = AuthService()
