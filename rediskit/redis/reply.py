"""Replies of the redis serialization protocol."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

CRLF = "\r\n"
_CRLF = CRLF.encode()


class Reply(ABC):
    """A message that serializes to protocol bytes."""

    @abstractmethod
    def to_bytes(self) -> bytes:
        """Return the wire form of the reply."""


class PongReply(Reply):
    """``+PONG``."""

    def to_bytes(self) -> bytes:
        return b"+PONG\r\n"


class OkReply(Reply):
    """``+OK``."""

    def to_bytes(self) -> bytes:
        return b"+OK\r\n"


class NullBulkReply(Reply):
    """A nil bulk string."""

    def to_bytes(self) -> bytes:
        return b"$-1\r\n"


class EmptyMultiBulkReply(Reply):
    """An empty list."""

    def to_bytes(self) -> bytes:
        return b"*0\r\n"


class NoReply(Reply):
    """Nothing is sent, for commands such as SUBSCRIBE."""

    def to_bytes(self) -> bytes:
        return b""


class QueuedReply(Reply):
    """``+QUEUED``."""

    def to_bytes(self) -> bytes:
        return b"+QUEUED\r\n"


class ErrorReply(Reply):
    """A reply that carries an error message."""

    @abstractmethod
    def error(self) -> str:
        """Return the error message."""

    def to_bytes(self) -> bytes:
        return b"-" + self.error().encode() + _CRLF

    def __str__(self) -> str:
        return self.error()


class UnknownErrReply(ErrorReply):
    """An unspecified error."""

    def error(self) -> str:
        return "Err unknown"


@dataclass(frozen=True)
class ArgNumErrReply(ErrorReply):
    """Wrong number of arguments for a command."""

    cmd: str

    def error(self) -> str:
        return f"ERR wrong number of arguments for '{self.cmd}' command"


class SyntaxErrReply(ErrorReply):
    """Unexpected arguments."""

    def error(self) -> str:
        return "Err syntax error"


class WrongTypeErrReply(ErrorReply):
    """Operation against a key holding the wrong kind of value."""

    def error(self) -> str:
        return "WRONGTYPE Operation against a key holding the wrong kind of value"


@dataclass(frozen=True)
class ProtocolErrReply(ErrorReply):
    """An unexpected byte met while parsing a request."""

    msg: str

    def error(self) -> str:
        return f"ERR Protocol error: '{self.msg}"

    def to_bytes(self) -> bytes:
        return f"-ERR Protocol error: '{self.msg}'{CRLF}".encode()


@dataclass(frozen=True)
class StandardErrReply(ErrorReply):
    """A server error with a free-form status."""

    status: str

    def error(self) -> str:
        return self.status


@dataclass(frozen=True)
class BulkReply(Reply):
    """A binary-safe string; an empty one is sent as nil."""

    arg: bytes | None

    def to_bytes(self) -> bytes:
        if not self.arg:
            return b"$-1"
        return b"$" + str(len(self.arg)).encode() + _CRLF + bytes(self.arg) + _CRLF


def _bulk(arg: bytes | None) -> bytes:
    if arg is None:
        return b"$-1" + _CRLF
    return b"$" + str(len(arg)).encode() + _CRLF + bytes(arg) + _CRLF


@dataclass(frozen=True)
class MultiBulkReply(Reply):
    """A list of binary-safe strings; ``None`` entries are nil."""

    args: list[bytes | None] = field(default_factory=list)

    def to_bytes(self) -> bytes:
        head = b"*" + str(len(self.args)).encode() + _CRLF
        return head + b"".join(_bulk(arg) for arg in self.args)


@dataclass(frozen=True)
class MultiRawReply(Reply):
    """A list of nested replies, for example for GEOPOS."""

    replies: list[Reply] = field(default_factory=list)

    def to_bytes(self) -> bytes:
        head = b"*" + str(len(self.replies)).encode() + _CRLF
        return head + b"".join(reply.to_bytes() for reply in self.replies)


@dataclass(frozen=True)
class StatusReply(Reply):
    """A simple status string."""

    status: str

    def to_bytes(self) -> bytes:
        return f"+{self.status}{CRLF}".encode()


@dataclass(frozen=True)
class IntReply(Reply):
    """A 64-bit integer."""

    code: int

    def to_bytes(self) -> bytes:
        return f":{self.code}{CRLF}".encode()


def is_error_reply(reply: Reply) -> bool:
    """Return whether the reply is an error on the wire."""
    return reply.to_bytes()[:1] == b"-"