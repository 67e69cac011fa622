"""Incremental SHA-1 message digest."""

from .engine import SHA1Engine
from .errors import DisposedError, IllegalStateError, InvalidArgumentError, SHA1Error
from .hasher import SHA1Hasher, hash_file, sha1, sha1_hex

__all__ = [
    "DisposedError",
    "IllegalStateError",
    "InvalidArgumentError",
    "SHA1Engine",
    "SHA1Error",
    "SHA1Hasher",
    "hash_file",
    "sha1",
    "sha1_hex",
]
