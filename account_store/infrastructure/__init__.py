"""Infrastructure layer containing implementations."""

__all__ = [
    "cache",
    "config",
    "logging",
    "persistence",
    "repositories",
    "security",
]
