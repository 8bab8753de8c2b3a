import io

import pytest

from rediskit.redis.parser import Payload, ProtocolError, parse_bytes, parse_one, parse_stream
from rediskit.redis.reply import (
    BulkReply,
    EmptyMultiBulkReply,
    IntReply,
    MultiBulkReply,
    NullBulkReply,
    StandardErrReply,
    StatusReply,
)


def _replies():
    return [
        IntReply(1),
        StatusReply("OK"),
        StandardErrReply("ERR unknown"),
        BulkReply(b"a\r\nb"),
        NullBulkReply(),
        MultiBulkReply([b"a", b"\r\n"]),
        EmptyMultiBulkReply(),
    ]


def test_parse_stream():
    replies = _replies()
    data = b"".join(r.to_bytes() for r in replies) + b"set a a\r\n"
    expected = replies + [MultiBulkReply([b"set", b"a", b"a"])]

    payloads = list(parse_stream(io.BytesIO(data)))
    assert isinstance(payloads[-1].err, EOFError)
    parsed = payloads[:-1]
    assert len(parsed) == len(expected)
    for exp, payload in zip(expected, parsed):
        assert payload.err is None
        assert payload.data.to_bytes() == exp.to_bytes()


@pytest.mark.parametrize("reply", _replies())
def test_parse_one(reply):
    result = parse_one(reply.to_bytes())
    assert result.to_bytes() == reply.to_bytes()


def test_parse_one_types():
    assert parse_one(b":1\r\n") == IntReply(1)
    assert parse_one(b"+OK\r\n") == StatusReply("OK")
    assert isinstance(parse_one(b"$-1\r\n"), NullBulkReply)
    assert isinstance(parse_one(b"*0\r\n"), EmptyMultiBulkReply)


def test_parse_bytes_all():
    replies = _replies()
    data = b"".join(r.to_bytes() for r in replies)
    result = parse_bytes(data)
    assert [r.to_bytes() for r in result] == [r.to_bytes() for r in replies]


def test_parse_bytes_empty():
    assert parse_bytes(b"") == []


def test_parse_bytes_truncated_raises():
    with pytest.raises(EOFError):
        parse_bytes(b"$5\r\nab")


def test_bad_multi_bulk_header():
    with pytest.raises(ProtocolError):
        parse_one(b"*x\r\n")


def test_negative_multi_bulk_header():
    with pytest.raises(ProtocolError):
        parse_one(b"*-1\r\n")


def test_bad_int_reply():
    with pytest.raises(ProtocolError):
        parse_one(b":abc\r\n")


def test_line_without_carriage_return():
    with pytest.raises(ProtocolError):
        parse_one(b"abc\n")


def test_zero_length_bulk_header_is_error():
    with pytest.raises(ProtocolError):
        parse_one(b"$0\r\n")


def test_stream_recovers_after_protocol_error():
    payloads = list(parse_stream(io.BytesIO(b":x\r\n:7\r\n")))
    assert isinstance(payloads[0].err, ProtocolError)
    assert payloads[1] == Payload(data=IntReply(7))
    assert isinstance(payloads[2].err, EOFError)


def test_bulk_starting_with_dollar_is_binary_safe():
    result = parse_one(BulkReply(b"$ab").to_bytes())
    assert result == BulkReply(b"$ab")


def test_nil_inside_multi_bulk():
    result = parse_one(b"*2\r\n$-1\r\n$1\r\nz\r\n")
    assert result == MultiBulkReply([b"", b"z"])


def test_parse_one_empty_input():
    with pytest.raises(EOFError):
        parse_one(b"")