"""Tests for domain value objects."""

from __future__ import annotations

import pytest

from userlist_sync.domain.value_objects import AuthMethod, SoftwareVersion


class TestSoftwareVersion:
    """Tests for SoftwareVersion value object."""

    def test_parse_pgbouncer_output(self) -> None:
        """The version is extracted from ``pgbouncer --version`` output."""
        output = "PgBouncer 1.21.0\nlibevent 2.1.12-stable\nadns: c-ares 1.19.1\ntls: OpenSSL 3.0.11"
        assert SoftwareVersion.parse(output) == SoftwareVersion((1, 21, 0))

    def test_short_version_is_padded(self) -> None:
        """``1.18`` equals ``1.18.0``."""
        assert SoftwareVersion.parse("1.18") == SoftwareVersion.parse("1.18.0")

    def test_ordering_is_numeric(self) -> None:
        """Versions compare numerically, not lexically."""
        assert SoftwareVersion.parse("1.9.0") < SoftwareVersion.parse("1.18.0")
        assert SoftwareVersion.parse("1.21.0") > SoftwareVersion.parse("1.18.0")

    def test_str(self) -> None:
        """The string form is dotted."""
        assert str(SoftwareVersion.parse("v1.18.0")) == "1.18.0"

    def test_no_version(self) -> None:
        """Text without a version raises ValueError."""
        with pytest.raises(ValueError, match="No version number"):
            SoftwareVersion.parse("pgbouncer: command not found")


class TestAuthMethod:
    """Tests for AuthMethod value object."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("scram-sha-256", AuthMethod.SCRAM_SHA_256),
            (" SCRAM-SHA-256\n", AuthMethod.SCRAM_SHA_256),
            ("md5", AuthMethod.MD5),
            ("kerberos", None),
            ("", None),
            (None, None),
        ],
    )
    def test_parse(self, raw: str | None, expected: AuthMethod | None) -> None:
        """Raw settings parse case-insensitively; unknown values give None."""
        assert AuthMethod.parse(raw) == expected

