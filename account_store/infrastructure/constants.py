"""Application-wide constants and limits."""


class AccountLimits:
    """Field limits for account records."""

    MAX_USERNAME_LENGTH = 100  # Maximum username length
    MAX_EMAIL_LENGTH = 255  # Maximum email length
    MIN_PASSWORD_LENGTH = 8  # Minimum password length
    MAX_PASSWORD_BYTES = 72  # bcrypt ignores anything past 72 bytes
    MAX_PROFILE_PICTURE_URL_LENGTH = 2048
    MAX_BIO_LENGTH = 5000


class PaginationDefaults:
    """Default values for pagination."""

    DEFAULT_PAGE = 1  # First page
    DEFAULT_PAGE_SIZE = 10  # Default number of items per page


class CacheDefaults:
    """Default cache settings."""

    DEFAULT_TTL = 300  # Default cache TTL in seconds (5 minutes)
    DEFAULT_MAX_SIZE = 1024  # Maximum number of cached accounts
    KEY_PREFIX = "account"


class StoreDefaults:
    """Default record store settings."""

    STATEMENT_TIMEOUT = 5.0  # Seconds allowed per store call
    PASSWORD_HASH_ROUNDS = 12  # bcrypt work factor
