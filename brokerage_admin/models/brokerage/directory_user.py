"""Identity directory user record."""

from dataclasses import dataclass


@dataclass
class DirectoryUser:
    """A user as reported by the identity directory (never persisted here)."""

    uid: str
    email: str | None = None
    display_name: str | None = None
    phone_number: str | None = None
    email_verified: bool = False
    disabled: bool = False
    creation_time: str | None = None
    last_sign_in_time: str | None = None
    custom_claims: dict | None = None
