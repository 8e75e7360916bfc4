"""One-way credential hashing with bcrypt."""

import bcrypt

from account_store.domain.exceptions import ValidationError
from account_store.domain.interfaces import ICredentialHasher
from account_store.infrastructure.constants import AccountLimits, StoreDefaults


class CredentialHasher(ICredentialHasher):
    """bcrypt-backed credential transform.

    bcrypt only reads the first 72 bytes of its input. Longer passwords are
    rejected instead of being silently truncated, so two passwords sharing a
    72-byte prefix never produce interchangeable hashes.

    Hashing is CPU-bound; async callers should run it in a worker thread
    (``asyncio.to_thread``).
    """

    def __init__(self, rounds: int = StoreDefaults.PASSWORD_HASH_ROUNDS) -> None:
        """Initialize hasher.

        Args:
            rounds: bcrypt work factor (log2 of the iteration count, 4-31)
        """
        self._rounds = rounds

    @staticmethod
    def _encode(password: str) -> bytes:
        encoded = password.encode("utf-8")
        if len(encoded) > AccountLimits.MAX_PASSWORD_BYTES:
            raise ValidationError(
                f"Password must be at most {AccountLimits.MAX_PASSWORD_BYTES} bytes",
                details=[{"field": "password", "message": "too long"}],
            )
        return encoded

    def hash(self, password: str) -> str:
        """Hash a password with a fresh salt.

        Raises:
            ValidationError: If the password exceeds 72 bytes
        """
        salt = bcrypt.gensalt(rounds=self._rounds)
        return bcrypt.hashpw(self._encode(password), salt).decode("utf-8")

