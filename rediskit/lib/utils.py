"""Small helpers for building command lines and comparing values."""

from __future__ import annotations

from typing import Any


def to_cmd_line(*args: str) -> list[bytes]:
    """Convert strings to a command line of byte strings."""
    return [arg.encode() for arg in args]


def to_cmd_line2(command_name: str, *args: str) -> list[bytes]:
    """Build a command line from a command name and string arguments."""
    return [command_name.encode(), *(arg.encode() for arg in args)]


def to_cmd_line3(command_name: str, *args: bytes) -> list[bytes]:
    """Build a command line from a command name and byte-string arguments."""
    return [command_name.encode(), *args]


def bytes_equals(a: bytes | None, b: bytes | None) -> bool:
    """Compare two byte strings; ``None`` only equals ``None``."""
    if (a is None) != (b is None):
        return False
    if a is None:
        return True
    return bytes(a) == bytes(b)


def equals(a: Any, b: Any) -> bool:
    """Compare two values, treating byte strings by content."""
    byte_types = (bytes, bytearray, memoryview)
    if isinstance(a, byte_types) and isinstance(b, byte_types):
        return bytes_equals(a, b)
    return a == b