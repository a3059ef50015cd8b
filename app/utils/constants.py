"""Application-wide constants."""

# API Configuration
API_PREFIX = "/api"

# Guest account pool policy
GUEST_POOL_TARGET_SIZE = 3
GUEST_RETENTION_SECONDS = 24 * 60 * 60    # 24 hours
GUEST_SWEEP_INTERVAL_SECONDS = 60 * 60    # 1 hour
GUEST_CLAIM_RETRIES = 3

# Guest account naming
GUEST_EMAIL_DOMAIN = "demo.local"
GUEST_POOL_EMAIL_PREFIX = "guest_pool_"
GUEST_EMAIL_PREFIX = "guest_"
GUEST_POOL_USERNAME_PREFIX = "GuestPool_"
GUEST_USERNAME_PREFIX = "Guest_"

# Pagination defaults
DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100

# Notes
DEFAULT_NOTE_COLOR = "transparent"
NOTE_COLORS = ["red", "orange", "yellow", "green", "teal", "blue", "purple", "pink"]
MIN_PASSWORD_LENGTH = 6
