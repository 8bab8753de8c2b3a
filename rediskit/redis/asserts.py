"""Checks on replies that raise AssertionError on mismatch, for tests."""

from __future__ import annotations

from rediskit.lib.utils import bytes_equals
from rediskit.redis.reply import (
    BulkReply,
    EmptyMultiBulkReply,
    ErrorReply,
    IntReply,
    MultiBulkReply,
    NullBulkReply,
    Reply,
    StandardErrReply,
    StatusReply,
)


def _fail(message: str) -> None:
    raise AssertionError(message)


def assert_int_reply(actual: Reply, expected: int) -> None:
    """Check that ``actual`` is an integer reply holding ``expected``."""
    if not isinstance(actual, IntReply):
        _fail(f"expected int reply, actually {actual.to_bytes()!r}")
    if actual.code != expected:
        _fail(f"expected {expected}, actually {actual.code}")


def assert_bulk_reply(actual: Reply, expected: str) -> None:
    """Check that ``actual`` is a bulk reply holding ``expected``."""
    if not isinstance(actual, BulkReply):
        _fail(f"expected bulk reply, actually {actual.to_bytes()!r}")
    if not bytes_equals(actual.arg, expected.encode()):
        _fail(f"expected {expected}, actually {actual.to_bytes()!r}")


def assert_status_reply(actual: Reply, expected: str) -> None:
    """Check that ``actual`` is, or serializes like, a status reply of ``expected``."""
    if not isinstance(actual, StatusReply):
        if bytes_equals(actual.to_bytes(), StatusReply(expected).to_bytes()):
            return
        _fail(f"expected status reply, actually {actual.to_bytes()!r}")
    if actual.status != expected:
        _fail(f"expected {expected}, actually {actual.to_bytes()!r}")


def assert_err_reply(actual: Reply, expected: str) -> None:
    """Check that ``actual`` is, or serializes like, an error reply of ``expected``."""
    if not isinstance(actual, ErrorReply):
        if bytes_equals(actual.to_bytes(), StandardErrReply(expected).to_bytes()):
            return
        _fail(f"expected err reply, actually {actual.to_bytes()!r}")
    if actual.error() != expected:
        _fail(f"expected {expected}, actually {actual.to_bytes()!r}")


def assert_not_error(result: Reply | None) -> None:
    """Check that ``result`` is a non-empty reply that is not an error."""
    if result is None:
        _fail("result is None")
    data = result.to_bytes()
    if not data:
        _fail("result is empty")
    if data[:1] == b"-":
        _fail("result is err reply")


def assert_null_bulk(result: Reply | None) -> None:
    """Check that ``result`` serializes as a nil bulk string."""
    if result is None:
        _fail("result is None")
    data = result.to_bytes()
    if not data:
        _fail("result is empty")
    if not bytes_equals(NullBulkReply().to_bytes(), data):
        _fail("result is not null-bulk-reply")


def assert_multi_bulk_reply(actual: Reply, expected: list[str]) -> None:
    """Check that ``actual`` is a multi-bulk reply with exactly ``expected``."""
    if not isinstance(actual, MultiBulkReply):
        _fail(f"expected multi bulk reply, actually {actual.to_bytes()!r}")
    if len(actual.args) != len(expected):
        _fail(f"expected {len(expected)} elements, actually {len(actual.args)}")
    for arg, want in zip(actual.args, expected):
        got = (arg or b"").decode("utf-8", "replace")
        if got != want:
            _fail(f"expected {want}, actually {got}")


def assert_multi_bulk_reply_size(actual: Reply, expected: int) -> None:
    """Check that ``actual`` is a multi-bulk reply with ``expected`` elements."""
    if not isinstance(actual, MultiBulkReply):
        if expected == 0 and bytes_equals(
            actual.to_bytes(), EmptyMultiBulkReply().to_bytes()
        ):
            return
        _fail(f"expected multi bulk reply, actually {actual.to_bytes()!r}")
    if len(actual.args) != expected:
        _fail(f"expected {expected} elements, actually {len(actual.args)}")