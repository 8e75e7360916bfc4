"""Sanitization utilities for structured logs.

Used by the ``sanitize_sensitive_data`` structlog processor so that account
credentials, hashes and connection strings never reach log output.
"""

from typing import Any


# Sensitive field patterns that should be redacted
SENSITIVE_PATTERNS = {
    # Credentials
    "password",
    "passwd",
    "pwd",
    "secret",
    "token",
    "authorization",
    "credential",
    # Database
    "connection_string",
    "database_url",
    "db_password",
}

REDACTED = "***REDACTED***"


def is_sensitive_key(key: str, patterns: set[str] | None = None) -> bool:
    """Check if a key matches any sensitive pattern.

    Args:
        key: The key to check (case-insensitive, normalized)
        patterns: Optional custom patterns (defaults to SENSITIVE_PATTERNS)

    Returns:
        True if key matches any sensitive pattern, False otherwise

    Example:
        >>> is_sensitive_key("password_hash")
        True
        >>> is_sensitive_key("username")
        False
    """
    if patterns is None:
        patterns = SENSITIVE_PATTERNS

    normalized_key = key.lower().replace("-", "_").replace(".", "_").replace(" ", "_")

    return any(pattern in normalized_key for pattern in patterns)


def sanitize_dict(
    data: dict[str, Any],
    patterns: set[str] | None = None,
    recursive: bool = True,
) -> dict[str, Any]:
    """Return a copy of ``data`` with sensitive values redacted.

    Args:
        data: Dictionary to sanitize
        patterns: Optional custom patterns (defaults to SENSITIVE_PATTERNS)
        recursive: Whether to recursively sanitize nested dicts/lists

    Returns:
        New dictionary with sensitive values redacted

    Example:
        >>> sanitize_dict({"password": "secret", "username": "john"})
        {'password': '***REDACTED***', 'username': 'john'}
    """
    sanitized: dict[str, Any] = {}

    for key, value in data.items():
        if is_sensitive_key(str(key), patterns):
            sanitized[key] = REDACTED
        elif recursive and isinstance(value, dict):
            sanitized[key] = sanitize_dict(value, patterns, recursive)
        elif recursive and isinstance(value, list):
            sanitized[key] = [
                sanitize_dict(item, patterns, recursive) if isinstance(item, dict) else item
                for item in value
            ]
        else:
            sanitized[key] = value

    return sanitized
