"""Domain exceptions."""


class DomainError(Exception):
    """Base exception for domain errors."""


class InvalidCredentialRecordError(DomainError):
    """Raised when a username or secret cannot be represented in a userlist."""


class InvalidSecretError(DomainError):
    """Raised when a secret hash cannot be re-tagged."""


class UserlistFormatError(DomainError):
    """Raised when a userlist line does not follow the quoted-pair format."""
