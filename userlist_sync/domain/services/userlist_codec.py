"""Encoder and decoder for the PgBouncer userlist line format.

Each line holds two double-quoted fields separated by whitespace::

    "username" "SCRAM-SHA-256$4096:salt$stored_key:server_key"
"""

import re

from ..exceptions import UserlistFormatError

_LINE_PATTERN = re.compile(r'^"(?P<username>[^"]*)"\s+"(?P<secret>[^"]*)"$')
_ESCAPED_QUOTE = re.compile(r'\\+"')


def encode_line(username: str, secret_hash: str) -> str:
    """Format one userlist line without the trailing newline."""
    return f'"{username}" "{secret_hash}"'


def decode_line(line: str) -> tuple[str, str]:
    """
    Parse one userlist line.

    Args:
        line: A single line, with or without surrounding whitespace.

    Returns:
        The ``(username, secret_hash)`` pair.

    Raises:
        UserlistFormatError: If the line is not a quoted pair.
    """
    match = _LINE_PATTERN.match(line.strip())
    if not match:
        msg = f"Malformed userlist line: {line!r}"
        raise UserlistFormatError(msg)
    return match.group("username"), match.group("secret")


def sanitize_line(line: str) -> str:
    """Collapse backslash-escaped quotes and trim surrounding whitespace."""
    return _ESCAPED_QUOTE.sub('"', line).strip()


def sanitize(text: str) -> str:
    """Sanitize every line of ``text`` and drop blank lines."""
    lines = (sanitize_line(line) for line in text.splitlines())
    return "".join(f"{line}\n" for line in lines if line)
