"""FNV-1a hashing of keys by their byte representation."""

from __future__ import annotations

import struct
from typing import Any

FNV_OFFSET_BASIS = 0x811C9DC5
FNV_PRIME = 0x01000193
_U32 = 0xFFFFFFFF


def fnv1a(data: bytes | bytearray | memoryview) -> int:
    """32-bit FNV-1a hash of a byte sequence."""
    result = FNV_OFFSET_BASIS
    for byte in bytes(data):
        result = ((result ^ byte) * FNV_PRIME) & _U32
    return result


def _int_bytes(value: int) -> bytes:
    for width in (4, 8):
        try:
            return value.to_bytes(width, "little", signed=True)
        except OverflowError:
            continue
    width = (value.bit_length() + 8) // 8
    return value.to_bytes(width, "little", signed=True)


def _key_bytes(key: Any) -> bytes:
    if isinstance(key, str):
        return key.encode("utf-8")
    if isinstance(key, (bytes, bytearray, memoryview)):
        return bytes(key)
    if isinstance(key, bool):
        return bytes((int(key),))
    if isinstance(key, int):
        return _int_bytes(key)
    if isinstance(key, float):
        return struct.pack("<d", key)
    if isinstance(key, tuple):
        return b"".join(_key_bytes(item) for item in key)
    raise TypeError(f"cannot hash value of type {type(key).__name__}")


def hash_value(key: Any) -> int:
    """FNV-1a hash of a key: strings by their characters, numbers by their bytes."""
    return fnv1a(_key_bytes(key))