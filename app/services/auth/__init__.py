"""Authentication: password login, registration and bearer tokens."""

from app.services.auth.auth_service import AuthService, auth_service
from app.services.auth.dependencies import get_current_user, get_token_from_header
from app.services.auth.token_service import TokenService, token_service

__all__ = [
    "AuthService",
    "auth_service",
    "get_current_user",
    "get_token_from_header",
    "TokenService",
    "token_service",
]
