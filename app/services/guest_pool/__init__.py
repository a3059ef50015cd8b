"""Guest account pool: claiming, refilling and expiring guest accounts."""

from app.services.guest_pool.guest_pool_service import (
    GuestPoolService,
    guest_pool_service,
    get_guest_pool_service,
)

__all__ = ["GuestPoolService", "guest_pool_service", "get_guest_pool_service"]
