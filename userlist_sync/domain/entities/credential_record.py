"""Credential record entity representing one userlist entry."""

from dataclasses import dataclass
from typing import Self

from ..exceptions import InvalidCredentialRecordError


def _has_control_chars(value: str) -> bool:
    return any(ord(ch) < 32 or ord(ch) == 127 for ch in value)


@dataclass(frozen=True, slots=True)
class CredentialRecord:
    """A username and its algorithm-tagged secret hash."""

    username: str
    secret_hash: str

    def __post_init__(self) -> None:
        """Reject values that cannot be written as a quoted pair."""
        if not self.username:
            msg = "Username must not be empty"
            raise InvalidCredentialRecordError(msg)
        if '"' in self.username or _has_control_chars(self.username):
            msg = f"Username {self.username!r} contains a quote or control character"
            raise InvalidCredentialRecordError(msg)
        if not self.secret_hash:
            msg = f"Secret for {self.username!r} must not be empty"
            raise InvalidCredentialRecordError(msg)
        if '"' in self.secret_hash or any(ch.isspace() for ch in self.secret_hash):
            msg = f"Secret for {self.username!r} contains a quote or whitespace"
            raise InvalidCredentialRecordError(msg)
        if _has_control_chars(self.secret_hash):
            msg = f"Secret for {self.username!r} contains a control character"
            raise InvalidCredentialRecordError(msg)

    @classmethod
    def create(cls, username: str, secret_hash: str) -> Self:
        """Factory method that trims the secret before validating; the username is kept as is."""
        return cls(username=username, secret_hash=secret_hash.strip())
