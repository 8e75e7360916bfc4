"""Account payload and snapshot schemas.

This module defines the Pydantic models the service validates payloads
against, plus the public read shape used for cache snapshots. Server-owned
fields (identifier, timestamps, deletion marker) are never accepted from a
payload: unknown keys are ignored.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from account_store.infrastructure.constants import AccountLimits


def _strip_control_chars(v: str | None) -> str | None:
    if v:
        v = "".join(c for c in v if ord(c) >= 32 or c in "\n\t")
    return v


class AccountProfile(BaseModel):
    """Identity and display fields shared by create and update payloads.

    Username and email are stored exactly as given and matched exactly
    (case-sensitive). The email is only checked for a local@domain shape.
    """

    model_config = ConfigDict(extra="ignore")

    username: str = Field(
        ...,
        min_length=1,
        max_length=AccountLimits.MAX_USERNAME_LENGTH,
        description="Username (up to 100 characters)",
    )
    email: str = Field(..., max_length=AccountLimits.MAX_EMAIL_LENGTH, description="Email address (local@domain)")
    profile_picture_url: str | None = Field(
        None,
        max_length=AccountLimits.MAX_PROFILE_PICTURE_URL_LENGTH,
        description="Profile picture URL",
    )
    bio: str | None = Field(None, max_length=AccountLimits.MAX_BIO_LENGTH, description="Free-form biography")

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        """Require a non-empty local part and domain around an "@"; keep the value as given."""
        local, at, domain = v.rpartition("@")
        if not at or not local or not domain or any(c.isspace() for c in v):
            raise ValueError("must be of the form local@domain")
        return v

    @field_validator("bio")
    @classmethod
    def validate_bio(cls, v: str | None) -> str | None:
        """Strip control characters other than newline and tab."""
        return _strip_control_chars(v)


class AccountCreate(AccountProfile):
    """Payload for creating an account.

    The password is accepted in plaintext and hashed before it reaches the
    store; it never appears in any response or log line.
    """

    password: str = Field(
        ...,
        min_length=AccountLimits.MIN_PASSWORD_LENGTH,
        repr=False,
        description="Plaintext credential (hashed before storage)",
    )

    model_config = ConfigDict(
        extra="ignore",
        json_schema_extra={
            "examples": [
                {
                    "username": "johndoe",
                    "email": "john.doe@example.com",
                    "password": "correct-horse-battery",
                    "profile_picture_url": "https://example.com/john.png",
                    "bio": "Hello!",
                }
            ]
        },
    )


class AccountUpdate(AccountProfile):
    """Payload for updating an account.

    Username and email are required; display fields are replaced with the
    given values (omitted means cleared). A password key, if present, is
    ignored: credential rotation is a separate concern.
    """


class AccountRead(BaseModel):
    """Public view of an account, without the credential.

    Also the snapshot shape stored by the read cache.
    """

    model_config = ConfigDict(from_attributes=True)

    id: UUID = Field(..., description="Unique account identifier (UUIDv7)")
    username: str
    email: str
    profile_picture_url: str | None = None
    bio: str | None = None
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last modification timestamp")
