"""
Guest account pool.

Keeps a standing pool of pre-seeded, unclaimed guest accounts so that a guest
login never waits on demo data seeding, and removes claimed guest accounts
once they are older than the retention window.

Claiming is an optimistic compare-and-swap on the row: the candidate is read
without a lock and rewritten with ``UPDATE ... WHERE id = :id AND email = :old``.
Only the caller whose update affects exactly one row owns the account, which
holds across processes sharing one database.
"""

import asyncio
import secrets
import time
from contextlib import AbstractAsyncContextManager
from typing import Any, Callable, Coroutine, Optional

from sqlalchemy import and_, delete, func, or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.db import get_db_session
from app.models import Category, Note, User, note_categories
from app.schemas.auth import AuthResponse
from app.services.auth.passwords import hash_password
from app.services.auth.token_service import TokenService, token_service
from app.services.demo_data import DemoDataService, demo_data_service
from app.services.guest_pool.guest_naming import (
    is_expired_guest,
    new_guest_identity,
    new_pool_identity,
)
from app.utils.constants import (
    GUEST_CLAIM_RETRIES,
    GUEST_EMAIL_DOMAIN,
    GUEST_EMAIL_PREFIX,
    GUEST_POOL_EMAIL_PREFIX,
    GUEST_POOL_TARGET_SIZE,
    GUEST_RETENTION_SECONDS,
)
from app.utils.logger import get_logger
from app.utils.sentry_utils import capture_exception

logger = get_logger("guest_pool")

SessionFactory = Callable[[], AbstractAsyncContextManager[AsyncSession]]


def _email_matches(prefix: str):
    """Full guest naming convention: reserved prefix and the demo domain."""
    return and_(
        User.email.startswith(prefix, autoescape=True),
        User.email.endswith(f"@{GUEST_EMAIL_DOMAIN}", autoescape=True),
    )


class GuestPoolService:
    """
    Owns guest pool sizing, the claim protocol, guest expiry and the
    maintenance sweep that ties them together.

    Every unit of work opens its own session through ``session_factory``,
    which must commit on success and roll back on error.
    """

    def __init__(
        self,
        session_factory: SessionFactory = get_db_session,
        seeder: Optional[DemoDataService] = None,
        tokens: Optional[TokenService] = None,
        *,
        pool_target_size: int = GUEST_POOL_TARGET_SIZE,
        guest_retention_seconds: int = GUEST_RETENTION_SECONDS,
        claim_retries: int = GUEST_CLAIM_RETRIES,
        clock: Callable[[], float] = time.time,
    ):
        self._session_factory = session_factory
        self._seeder = seeder or demo_data_service
        self._tokens = tokens or token_service
        self._clock = clock

        self.pool_target_size = pool_target_size
        self.guest_retention_ms = guest_retention_seconds * 1000
        self.claim_retries = claim_retries

        self._pool_password_hash: Optional[str] = None
        self._pool_password_lock = asyncio.Lock()
        self._top_up_lock = asyncio.Lock()
        self._background_tasks: set[asyncio.Task] = set()

        self.maintenance_running = False
        self.sweep_count = 0

    def _now_ms(self) -> int:
        return int(self._clock() * 1000)

    # ------------------------------------------------------------------
    # Guest login
    # ------------------------------------------------------------------

    async def login_as_guest(self) -> AuthResponse:
        """Hand out a guest session, preferring a pre-seeded pooled account.

        Falls back to creating a guest on demand when the pool is empty; its
        demo data is seeded in the background. The pool is refilled in the
        background either way.
        """
        user = await self.claim_pooled_account()

        if user is None:
            user = await self._create_guest_account()
            logger.info(f"Guest pool empty, created on-demand guest {user.id}")
            self._spawn(
                self._seed_on_demand_guest(user.id),
                "seed demo data for on-demand guest",
            )
        else:
            logger.info(f"Claimed pooled guest account {user.id}")

        self._spawn(self.ensure_guest_pool(), "refill guest pool")

        return self._tokens.build_auth_response(user)

    async def claim_pooled_account(self) -> Optional[User]:
        """Atomically take the oldest pooled account and rename it to a guest.

        Returns:
            The claimed user, or None when the pool is empty or every attempt
            lost its candidate to a concurrent claimant.
        """
        for attempt in range(1, self.claim_retries + 1):
            async with self._session_factory() as db:
                candidate = await self._select_pool_candidate(db)
                if candidate is None:
                    return None

                candidate_id, candidate_email = candidate
                email, username = new_guest_identity(self._now_ms())

                try:
                    result = await db.execute(
                        update(User)
                        .where(User.id == candidate_id, User.email == candidate_email)
                        .values(email=email, username=username)
                        .execution_options(synchronize_session=False)
                    )
                except IntegrityError:
                    # Generated guest email collided with an existing one
                    await db.rollback()
                    logger.warning(
                        f"Guest identity collision while claiming {candidate_id} "
                        f"(attempt {attempt}/{self.claim_retries})"
                    )
                    continue

                if result.rowcount == 1:
                    await db.commit()
                    return await db.get(User, candidate_id, populate_existing=True)

                await db.rollback()

            logger.debug(
                f"Pooled guest {candidate_id} was claimed concurrently "
                f"(attempt {attempt}/{self.claim_retries})"
            )

        logger.warning(f"No pooled guest claimed after {self.claim_retries} attempts")
        return None

    async def _select_pool_candidate(self, db: AsyncSession):
        """Oldest pooled account as an ``(id, email)`` row, read without a lock."""
        result = await db.execute(
            select(User.id, User.email)
            .where(_email_matches(GUEST_POOL_EMAIL_PREFIX))
            .order_by(User.id.asc())
            .limit(1)
        )
        return result.first()

    async def _create_guest_account(self) -> User:
        email, username = new_guest_identity(self._now_ms())
        password_hash = await self._get_pool_password_hash()

        async with self._session_factory() as db:
            user = User(email=email, username=username, password_hash=password_hash)
            db.add(user)
            await db.flush()
            await db.refresh(user)
        return user

    async def _seed_on_demand_guest(self, user_id: int) -> None:
        async with self._session_factory() as db:
            await self._seeder.seed_demo_data(user_id, db)
        logger.info(f"Seeded demo data for on-demand guest {user_id}")

    # ------------------------------------------------------------------
    # Pool top-up
    # ------------------------------------------------------------------

    async def count_pooled_accounts(self) -> int:
        async with self._session_factory() as db:
            result = await db.execute(
                select(func.count(User.id)).where(_email_matches(GUEST_POOL_EMAIL_PREFIX))
            )
            return result.scalar_one()

    async def ensure_guest_pool(self) -> int:
        """Create pooled accounts until the pool reaches its target size.

        Best effort: a failed account is logged and the loop moves on, the
        next sweep tries again.

        Returns:
            Number of pooled accounts created
        """
        # Serialized within the process so concurrent refills don't overshoot
        async with self._top_up_lock:
            pool_count = await self.count_pooled_accounts()
            missing = max(0, self.pool_target_size - pool_count)
            if missing == 0:
                return 0

            created = 0
            for _ in range(missing):
                try:
                    user_id = await self._create_pooled_account()
                    created += 1
                    logger.debug(f"Created pooled guest account {user_id}")
                except Exception as e:
                    logger.error(f"Failed to create pooled guest account: {e}", exc_info=True)
                    capture_exception(e)

            logger.info(f"Guest pool top-up created {created}/{missing} account(s)")
            return created

    async def _create_pooled_account(self) -> int:
        """Create one pooled account and seed it in the same transaction.

        The row only becomes visible to claimants once it is fully seeded.
        """
        password_hash = await self._get_pool_password_hash()
        email, username = new_pool_identity(self._now_ms())

        async with self._session_factory() as db:
            user = User(email=email, username=username, password_hash=password_hash)
            db.add(user)
            await db.flush()
            await self._seeder.seed_demo_data(user.id, db)
            return user.id

    async def _get_pool_password_hash(self) -> str:
        """Hash shared by all generated guest accounts, computed once per process."""
        async with self._pool_password_lock:
            if self._pool_password_hash is None:
                self._pool_password_hash = await hash_password(
                    f"guest_pool_{secrets.token_urlsafe(32)}"
                )
            return self._pool_password_hash

    # ------------------------------------------------------------------
    # Expiry
    # ------------------------------------------------------------------

    async def cleanup_expired_guests(self) -> int:
        """Delete claimed guests older than the retention window with their data.

        All expired accounts go in one transaction; on failure nothing is
        deleted and the next sweep retries.

        Returns:
            Number of accounts deleted
        """
        now_ms = self._now_ms()

        async with self._session_factory() as db:
            result = await db.execute(
                select(User.id, User.email).where(_email_matches(GUEST_EMAIL_PREFIX))
            )
            candidates = result.all()

        expired_ids = [
            user_id
            for user_id, email in candidates
            if is_expired_guest(email, now_ms, self.guest_retention_ms)
        ]
        if not expired_ids:
            return 0

        try:
            async with self._session_factory() as db:
                await self._delete_accounts(db, expired_ids)
        except Exception as e:
            logger.error(
                f"Failed to delete {len(expired_ids)} expired guest account(s): {e}",
                exc_info=True,
            )
            capture_exception(e)
            return 0

        logger.info(f"Deleted {len(expired_ids)} expired guest users")
        return len(expired_ids)

    async def _delete_accounts(self, db: AsyncSession, user_ids: list[int]) -> None:
        """Delete accounts and everything they own, dependents first."""
        note_ids = select(Note.id).where(Note.user_id.in_(user_ids))
        category_ids = select(Category.id).where(Category.user_id.in_(user_ids))

        await db.execute(
            delete(note_categories).where(
                or_(
                    note_categories.c.note_id.in_(note_ids),
                    note_categories.c.category_id.in_(category_ids),
                )
            )
        )
        await db.execute(
            delete(Note)
            .where(Note.user_id.in_(user_ids))
            .execution_options(synchronize_session=False)
        )
        await db.execute(
            delete(Category)
            .where(Category.user_id.in_(user_ids))
            .execution_options(synchronize_session=False)
        )
        await db.execute(
            delete(User)
            .where(User.id.in_(user_ids))
            .execution_options(synchronize_session=False)
        )

    # ------------------------------------------------------------------
    # Maintenance
    # ------------------------------------------------------------------

    async def run_maintenance_sweep_once(self) -> bool:
        """Expire stale guests, then top up the pool.

        Returns:
            False if a sweep was already in progress and this call was skipped
        """
        if self.maintenance_running:
            logger.debug("Guest maintenance already running, skipping")
            return False

        self.maintenance_running = True
        try:
            self.sweep_count += 1
            await self.cleanup_expired_guests()
            await self.ensure_guest_pool()
        finally:
            self.maintenance_running = False
        return True

    # ------------------------------------------------------------------
    # Fire-and-forget work
    # ------------------------------------------------------------------

    def _spawn(self, coro: Coroutine[Any, Any, Any], description: str) -> asyncio.Task:
        task = asyncio.create_task(coro)
        self._background_tasks.add(task)
        task.add_done_callback(lambda done: self._on_background_done(done, description))
        return task

    def _on_background_done(self, task: asyncio.Task, description: str) -> None:
        self._background_tasks.discard(task)
        if task.cancelled():
            logger.warning(f"Background task cancelled: {description}")
            return
        error = task.exception()
        if error is not None:
            logger.error(f"Failed to {description}: {error}", exc_info=error)
            capture_exception(error)

    @property
    def pending_background_tasks(self) -> int:
        return len(self._background_tasks)

    async def wait_for_background_tasks(self) -> None:
        """Wait until all fire-and-forget work (seeding, refills) has finished."""
        while self._background_tasks:
            await asyncio.gather(*list(self._background_tasks), return_exceptions=True)


# Global instance
guest_pool_service = GuestPoolService()


def get_guest_pool_service() -> GuestPoolService:
    """FastAPI dependency returning the process-wide guest pool."""
    return guest_pool_service
