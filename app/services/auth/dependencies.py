"""Bearer token authentication dependencies"""

from fastapi import Depends, HTTPException, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.db import get_db
from app.models.user import User
from app.services.auth.token_service import token_service
from app.utils.sentry_utils import set_user_context


def get_token_from_header(request: Request) -> str:
    """
    Extract Bearer token from Authorization header.

    Raises:
        HTTPException: If Authorization header is missing or invalid
    """
    auth_header = request.headers.get("Authorization")

    if not auth_header:
        raise HTTPException(status_code=401, detail="Authorization header missing")

    if not auth_header.startswith("Bearer "):
        raise HTTPException(
            status_code=401, detail="Invalid authorization header format. Expected 'Bearer <token>'"
        )

    return auth_header.split("Bearer ", 1)[1].strip()


async def get_current_user(
    request: Request, db: AsyncSession = Depends(get_db)
) -> User:
    """
    FastAPI dependency to get the current authenticated user.

    This dependency:
    1. Extracts the Bearer token from the Authorization header
    2. Verifies the token signature and expiry
    3. Loads the user named by the token subject

    A guest whose account was removed by the expiry sweep gets a 401 here.
    """
    token = get_token_from_header(request)
    payload = token_service.decode_token(token)

    try:
        user_id = int(payload.sub)
    except ValueError:
        raise HTTPException(status_code=401, detail="Invalid token")

    user = await db.get(User, user_id)
    if user is None:
        raise HTTPException(status_code=401, detail="User no longer exists")

    set_user_context(user.id, user.email)
    return user
