"""Userlist aggregate root."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from ..exceptions import InvalidCredentialRecordError
from ..services.userlist_codec import decode_line, encode_line
from .credential_record import CredentialRecord


@dataclass(slots=True)
class Userlist:
    """Ordered set of credential records as written to ``userlist.txt``."""

    records: list[CredentialRecord] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Ensure every username appears once."""
        seen: set[str] = set()
        duplicates: list[str] = []
        for record in self.records:
            if record.username in seen:
                duplicates.append(record.username)
            seen.add(record.username)
        if duplicates:
            msg = f"Duplicate usernames: {', '.join(sorted(set(duplicates)))}"
            raise InvalidCredentialRecordError(msg)

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[CredentialRecord]:
        return iter(self.records)

    @property
    def usernames(self) -> list[str]:
        """Usernames in file order."""
        return [r.username for r in self.records]

    def render(self) -> str:
        """Render the file content, one quoted pair per line."""
        return "".join(f"{encode_line(r.username, r.secret_hash)}\n" for r in self.records)

    def to_bytes(self) -> bytes:
        """Render the file content as UTF-8."""
        return self.render().encode("utf-8")

    @classmethod
    def from_records(cls, records: Iterable[CredentialRecord]) -> Userlist:
        """Build a userlist from any iterable of records."""
        return cls(records=list(records))

    @classmethod
    def parse(cls, text: str) -> Userlist:
        """
        Parse userlist file content.

        Blank lines are ignored.

        Raises:
            UserlistFormatError: If a line is not a quoted pair.
            InvalidCredentialRecordError: If a username repeats.
        """
        return cls(
            records=[
                CredentialRecord(*decode_line(line))
                for line in text.splitlines()
                if line.strip()
            ]
        )
