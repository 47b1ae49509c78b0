"""Domain services - Stateless operations on domain objects."""

from .secret_normalizer import SecretNormalizer
from .userlist_codec import decode_line, encode_line, sanitize, sanitize_line

__all__ = [
    "SecretNormalizer",
    "decode_line",
    "encode_line",
    "sanitize",
    "sanitize_line",
]
