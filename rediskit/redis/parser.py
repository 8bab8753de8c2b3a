"""Streaming parser for the redis serialization protocol."""

from __future__ import annotations

import io
import re
from dataclasses import dataclass, field
from typing import BinaryIO, Iterator

from rediskit.redis.reply import (
    BulkReply,
    EmptyMultiBulkReply,
    IntReply,
    MultiBulkReply,
    NullBulkReply,
    Reply,
    StandardErrReply,
    StatusReply,
)

_UINT_RE = re.compile(rb"[0-9]+")
_INT_RE = re.compile(rb"[+-]?[0-9]+")
_MAX_UINT32 = (1 << 32) - 1
_MIN_INT64 = -(1 << 63)
_MAX_INT64 = (1 << 63) - 1


class ProtocolError(Exception):
    """Raised for bytes that do not follow the protocol."""


class _UnexpectedEOF(EOFError):
    """The stream ended in the middle of a message."""


@dataclass(frozen=True)
class Payload:
    """One parsed reply, or the error met while parsing it."""

    data: Reply | None = None
    err: BaseException | None = None


@dataclass
class _ReadState:
    reading_multi_line: bool = False
    expected_args_count: int = 0
    msg_type: bytes = b""
    args: list[bytes] = field(default_factory=list)
    bulk_len: int = 0

    def finished(self) -> bool:
        return self.expected_args_count > 0 and len(self.args) == self.expected_args_count


def _protocol_error(msg: bytes) -> ProtocolError:
    return ProtocolError("protocol error: " + msg.decode("utf-8", "replace"))


def _parse_uint32(text: bytes, msg: bytes) -> int:
    if not _UINT_RE.fullmatch(text):
        raise _protocol_error(msg)
    value = int(text)
    if value > _MAX_UINT32:
        raise _protocol_error(msg)
    return value


def _parse_int64(text: bytes, msg: bytes) -> int:
    if not _INT_RE.fullmatch(text):
        raise _protocol_error(msg)
    value = int(text)
    if not _MIN_INT64 <= value <= _MAX_INT64:
        raise _protocol_error(msg)
    return value


def _read_line(reader: BinaryIO, state: _ReadState) -> tuple[bytes, bool]:
    """Read one line, or one binary-safe bulk body when a length is pending."""
    if state.bulk_len == 0:
        line = reader.readline()
        if not line:
            raise EOFError("EOF")
        if not line.endswith(b"\n"):
            raise _UnexpectedEOF("unexpected EOF")
        if len(line) < 2 or line[-2:-1] != b"\r":
            raise _protocol_error(line)
        return line, False
    size = state.bulk_len + 2
    data = reader.read(size)
    if not data:
        raise EOFError("EOF")
    if len(data) < size:
        raise _UnexpectedEOF("unexpected EOF")
    if data[-2:] != b"\r\n":
        raise _protocol_error(data)
    state.bulk_len = 0
    return data, True


def _parse_multi_bulk_header(msg: bytes, state: _ReadState) -> None:
    expected = _parse_uint32(msg[1:-2], msg)
    if expected == 0:
        state.expected_args_count = 0
        return
    state.msg_type = msg[:1]
    state.reading_multi_line = True
    state.expected_args_count = expected
    state.args = []


def _parse_bulk_header(msg: bytes, state: _ReadState) -> None:
    state.bulk_len = _parse_int64(msg[1:-2], msg)
    if state.bulk_len == -1:
        return
    if state.bulk_len > 0:
        state.msg_type = msg[:1]
        state.reading_multi_line = True
        state.expected_args_count = 1
        state.args = []
        return
    raise _protocol_error(msg)


def _parse_single_line_reply(msg: bytes) -> Reply:
    body = msg[:-2] if msg.endswith(b"\r\n") else msg
    prefix = body[:1]
    if prefix == b"+":
        return StatusReply(body[1:].decode("utf-8", "replace"))
    if prefix == b"-":
        return StandardErrReply(body[1:].decode("utf-8", "replace"))
    if prefix == b":":
        return IntReply(_parse_int64(body[1:], msg))
    # inline command
    return MultiBulkReply(body.split(b" "))


def _read_body(msg: bytes, state: _ReadState, is_bulk: bool) -> None:
    line = msg[:-2]
    if is_bulk:
        state.args.append(line)
        return
    if not line:
        raise _protocol_error(msg)
    if line[:1] == b"$":
        state.bulk_len = _parse_int64(line[1:], msg)
        if state.bulk_len <= 0:
            # nil bulk inside a multi bulk
            state.args.append(b"")
            state.bulk_len = 0
    else:
        state.args.append(line)


def parse_stream(reader: BinaryIO) -> Iterator[Payload]:
    """Yield payloads parsed from a binary reader with ``readline`` and ``read``.

    Protocol errors are yielded and parsing goes on; an I/O error or end of
    stream is yielded last (end of stream as ``EOFError``).
    """
    state = _ReadState()
    while True:
        try:
            msg, is_bulk = _read_line(reader, state)
        except ProtocolError as exc:
            yield Payload(err=exc)
            state = _ReadState()
            continue
        except (EOFError, OSError, ValueError) as exc:
            yield Payload(err=exc)
            return

        if not state.reading_multi_line:
            prefix = msg[:1]
            if prefix == b"*":
                try:
                    _parse_multi_bulk_header(msg, state)
                except ProtocolError as exc:
                    yield Payload(err=exc)
                    state = _ReadState()
                    continue
                if state.expected_args_count == 0:
                    yield Payload(data=EmptyMultiBulkReply())
                    state = _ReadState()
            elif prefix == b"$":
                try:
                    _parse_bulk_header(msg, state)
                except ProtocolError as exc:
                    yield Payload(err=exc)
                    state = _ReadState()
                    continue
                if state.bulk_len == -1:
                    yield Payload(data=NullBulkReply())
                    state = _ReadState()
            else:
                try:
                    yield Payload(data=_parse_single_line_reply(msg))
                except ProtocolError as exc:
                    yield Payload(err=exc)
                state = _ReadState()
            continue

        try:
            _read_body(msg, state, is_bulk)
        except ProtocolError as exc:
            yield Payload(err=exc)
            state = _ReadState()
            continue
        if state.finished():
            if state.msg_type == b"*":
                yield Payload(data=MultiBulkReply(list(state.args)))
            else:
                yield Payload(data=BulkReply(state.args[0]))
            state = _ReadState()


def parse_bytes(data: bytes) -> list[Reply]:
    """Parse every reply in ``data``; raise the first error met."""
    results: list[Reply] = []
    for payload in parse_stream(io.BytesIO(data)):
        if payload.err is not None:
            if isinstance(payload.err, EOFError) and not isinstance(payload.err, _UnexpectedEOF):
                break
            raise payload.err
        results.append(payload.data)
    return results


def parse_one(data: bytes) -> Reply:
    """Parse and return the first reply in ``data``; raise its error if any."""
    payload = next(iter(parse_stream(io.BytesIO(data))), None)
    if payload is None:
        raise ProtocolError("no reply")
    if payload.err is not None:
        raise payload.err
    return payload.data