"""Authentication method value object."""

from enum import StrEnum
from typing import Self


class AuthMethod(StrEnum):
    """
    Authentication methods shared by PostgreSQL and PgBouncer.

    Used both for PostgreSQL's ``password_encryption`` setting and
    PgBouncer's ``auth_type``.
    """

    SCRAM_SHA_256 = "scram-sha-256"
    MD5 = "md5"
    PLAIN = "plain"
    TRUST = "trust"
    HBA = "hba"
    CERT = "cert"
    PAM = "pam"
    ANY = "any"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: str | None) -> Self | None:
        """Parse a raw setting value, returning None when empty or unknown."""
        if not value:
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None
