"""Email/username conventions that encode guest account state.

An account's state is read from its email alone:

- ``guest_pool_<token>@demo.local``: pre-seeded, unclaimed pool account
- ``guest_<epoch_ms>_<rand>@demo.local``: claimed guest, creation time embedded
- anything else: permanent account
"""

import random
import re
import uuid
from enum import Enum

from app.utils.constants import (
    GUEST_EMAIL_DOMAIN,
    GUEST_EMAIL_PREFIX,
    GUEST_POOL_EMAIL_PREFIX,
    GUEST_POOL_USERNAME_PREFIX,
    GUEST_USERNAME_PREFIX,
)

CLAIMED_GUEST_EMAIL_RE = re.compile(
    rf"^{re.escape(GUEST_EMAIL_PREFIX)}(\d+)_\d+@{re.escape(GUEST_EMAIL_DOMAIN)}$"
)


class AccountKind(str, Enum):
    POOLED = "pooled"
    CLAIMED_GUEST = "claimed_guest"
    PERMANENT = "permanent"


def _random_suffix() -> int:
    return random.randint(1000, 9999)


def new_pool_identity(now_ms: int) -> tuple[str, str]:
    """Return (email, username) for a freshly created pool account."""
    token = f"{now_ms}_{_random_suffix()}_{uuid.uuid4().hex[:8]}"
    return (
        f"{GUEST_POOL_EMAIL_PREFIX}{token}@{GUEST_EMAIL_DOMAIN}",
        f"{GUEST_POOL_USERNAME_PREFIX}{token}",
    )


def new_guest_identity(now_ms: int) -> tuple[str, str]:
    """Return (email, username) for a claimed guest created at ``now_ms``."""
    token = f"{now_ms}_{_random_suffix()}"
    return (
        f"{GUEST_EMAIL_PREFIX}{token}@{GUEST_EMAIL_DOMAIN}",
        f"{GUEST_USERNAME_PREFIX}{token}",
    )


def parse_guest_created_at_ms(email: str) -> int | None:
    """Epoch millis embedded in a claimed-guest email, or None for any other email."""
    match = CLAIMED_GUEST_EMAIL_RE.match(email)
    if not match:
        return None
    return int(match.group(1))


def classify_account(email: str) -> AccountKind:
    if email.startswith(GUEST_POOL_EMAIL_PREFIX):
        return AccountKind.POOLED
    if parse_guest_created_at_ms(email) is not None:
        return AccountKind.CLAIMED_GUEST
    return AccountKind.PERMANENT


def is_expired_guest(email: str, now_ms: int, retention_ms: int) -> bool:
    """True when ``email`` is a claimed guest at least ``retention_ms`` old."""
    created_at_ms = parse_guest_created_at_ms(email)
    if created_at_ms is None:
        return False
    return now_ms - created_at_ms >= retention_ms
