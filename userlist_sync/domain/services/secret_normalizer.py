"""Domain service for re-labelling secret hashes with an algorithm tag."""

import re

from ..exceptions import InvalidSecretError

DEFAULT_TAG = "SCRAM-SHA-256"
DELIMITER = ":"
_B64 = r"[A-Za-z0-9+/=]+"


class SecretNormalizer:
    """
    Normalize stored secret hashes into the tagged format PgBouncer expects.

    This is string re-labelling only: nothing is hashed or verified.
    """

    def __init__(self, expected_tag: str = DEFAULT_TAG) -> None:
        """Initialize normalizer with the algorithm tag to enforce."""
        if not expected_tag:
            msg = "Expected algorithm tag must not be empty"
            raise ValueError(msg)
        self._tag = expected_tag
        self._verifier = re.compile(
            rf"^{re.escape(expected_tag)}\$\d+:{_B64}\${_B64}:{_B64}$"
        )

    @property
    def expected_tag(self) -> str:
        """Algorithm tag every normalized secret starts with."""
        return self._tag

    def is_tagged(self, secret: str) -> bool:
        """Check if the secret already carries the expected tag."""
        return secret.startswith(self._tag)

    def normalize(self, secret: str) -> str:
        """
        Return ``secret`` carrying the expected algorithm tag.

        Already-tagged secrets pass through unchanged. Otherwise the tag
        replaces everything before the first ``:``, keeping the delimiter and
        the suffix after it untouched.

        Raises:
            InvalidSecretError: If an untagged secret has no ``:`` delimiter.
        """
        if self.is_tagged(secret):
            return secret
        index = secret.find(DELIMITER)
        if index < 0:
            msg = f"Secret has neither the {self._tag} tag nor a '{DELIMITER}' delimiter"
            raise InvalidSecretError(msg)
        return f"{self._tag}{secret[index:]}"

    def is_valid(self, secret: str) -> bool:
        """Check if the secret has the full verifier shape ``TAG$iter:salt$stored:server``."""
        return bool(self._verifier.match(secret))
