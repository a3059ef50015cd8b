"""JWT issuance and validation for bearer tokens"""

from datetime import datetime, timedelta, timezone

import jwt
from fastapi import HTTPException, status
from pydantic import ValidationError

from app.config import settings
from app.models.user import User
from app.schemas.auth import AuthResponse, TokenPayload, UserPublic


class TokenService:
    """Sign ``{sub, email}`` into HS256 tokens and read them back."""

    def __init__(
        self,
        secret: str | None = None,
        *,
        algorithm: str = "HS256",
        expires_in_days: int | None = None,
    ) -> None:
        self.secret = secret or settings.effective_jwt_secret
        self.algorithm = algorithm
        self.expires_in_days = expires_in_days or settings.jwt_expires_in_days

    def _build_payload(self, user: User) -> TokenPayload:
        now = datetime.now(timezone.utc)
        return TokenPayload(
            sub=str(user.id),
            email=user.email,
            iat=int(now.timestamp()),
            exp=int((now + timedelta(days=self.expires_in_days)).timestamp()),
        )

    def create_access_token(self, user: User) -> str:
        """Create a signed token for the given user."""
        payload = self._build_payload(user)
        return jwt.encode(payload.model_dump(), self.secret, algorithm=self.algorithm)

    def decode_token(self, token: str) -> TokenPayload:
        """Validate a token and return its claims.

        Raises:
            HTTPException: 401 if the token is expired, tampered or malformed
        """
        try:
            decoded = jwt.decode(token, self.secret, algorithms=[self.algorithm])
            return TokenPayload(**decoded)
        except jwt.ExpiredSignatureError:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Token has expired")
        except (jwt.InvalidTokenError, ValidationError):
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")

    def build_auth_response(self, user: User) -> AuthResponse:
        """Token plus public user projection, as returned by every login path."""
        return AuthResponse(
            access_token=self.create_access_token(user),
            user=UserPublic.model_validate(user),
        )


# Global instance
token_service = TokenService()
