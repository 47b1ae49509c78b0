"""Software version value object."""

import re
from dataclasses import dataclass
from typing import Self

_VERSION_PATTERN = re.compile(r"(\d+(?:\.\d+)+)")


@dataclass(frozen=True, slots=True, order=True)
class SoftwareVersion:
    """A dotted numeric version such as ``1.21.0``."""

    parts: tuple[int, ...]

    def __str__(self) -> str:
        return ".".join(str(p) for p in self.parts)

    @classmethod
    def parse(cls, text: str) -> Self:
        """
        Extract the first dotted version number from arbitrary text.

        Args:
            text: Raw text, e.g. the output of ``pgbouncer --version``.

        Returns:
            The parsed version.

        Raises:
            ValueError: If no version number is present.
        """
        match = _VERSION_PATTERN.search(text)
        if not match:
            msg = f"No version number found in {text!r}"
            raise ValueError(msg)
        parts = tuple(int(p) for p in match.group(1).split("."))
        # Pad to major.minor.patch so 1.18 == 1.18.0
        while len(parts) < 3:
            parts = (*parts, 0)
        return cls(parts)
