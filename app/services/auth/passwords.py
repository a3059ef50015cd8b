"""bcrypt password hashing, offloaded from the event loop."""

import asyncio

import bcrypt

from app.config import settings

# bcrypt only looks at the first 72 bytes of a password
BCRYPT_MAX_BYTES = 72


def _encode(plain: str) -> bytes:
    return plain.encode("utf-8")[:BCRYPT_MAX_BYTES]


def _hash(plain: str, rounds: int) -> str:
    return bcrypt.hashpw(_encode(plain), bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def _verify(plain: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(_encode(plain), hashed.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


async def hash_password(plain: str, rounds: int | None = None) -> str:
    """Hash a password with bcrypt without blocking the event loop."""
    return await asyncio.to_thread(_hash, plain, rounds or settings.bcrypt_rounds)


async def verify_password(plain: str, hashed: str) -> bool:
    """Check a password against a stored bcrypt hash."""
    return await asyncio.to_thread(_verify, plain, hashed)
