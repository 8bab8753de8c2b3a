# rediskit

Parts a Redis-compatible server is made of, as a plain Python library with
no third-party dependencies. Python 3.10 or later is required.

- **RESP protocol**: reply objects that serialise themselves
  (`rediskit.redis.reply`) and a parser for replies and requests, including
  the inline text protocol (`rediskit.redis.parser`). `rediskit.redis.asserts`
  holds checks on replies that raise `AssertionError`, for use in tests.
- **Data structures** (`rediskit.datastruct`): a sharded thread-safe
  `ConcurrentDict` and a `SimpleDict`, a string `Set`, a doubly linked
  `LinkedList`, and a skiplist-backed `SortedSet` with score borders such as
  `(1.5`, `+inf` and `-inf`.
- **Key locks** (`rediskit.datastruct.lock`): a table of read/write locks
  that takes several keys in a fixed order, so multi-key operations cannot
  deadlock.
- **Utilities** (`rediskit.lib`): glob-style key patterns, consistent
  hashing with `{hash tag}` support, 64-bit geohash with neighbour search
  and distances, snowflake IDs, command-line helpers and a small logger.
- **Networking** (`rediskit.tcp.server`): a TCP accept loop with graceful
  shutdown that hands each connection to a `Handler`.

## Sorted sets

```python
from rediskit.datastruct.sortedset.sortedset import SortedSet
from rediskit.datastruct.sortedset.border import parse_score_border

zset = SortedSet()
zset.add("alice", 3)
zset.add("bob", 1)
zset.add("carol", 2)

zset.get_rank("alice", False)            # 2
low, high = parse_score_border("(1"), parse_score_border("+inf")
[e.member for e in zset.range_by_score(low, high, 0, -1, False)]
# ['carol', 'alice']
```

A negative `limit` returns every member from `offset` onwards.
`parse_score_border` raises `ValueError` for text that is not a number or
infinity.

## Parsing and writing RESP

```python
from rediskit.redis.parser import parse_one
from rediskit.redis.reply import MultiBulkReply

wire = MultiBulkReply([b"set", b"a", b"1"]).to_bytes()
# b'*3\r\n$3\r\nset\r\n$1\r\na\r\n$1\r\n1\r\n'
parse_one(wire).to_bytes() == wire       # True
```

`parse_stream(reader)` yields one `Payload` per message read from a binary
stream; a malformed message yields a payload carrying a `ProtocolError` and
parsing carries on with the next one. The end of the stream is yielded last
as an `EOFError`. `parse_bytes(data)` returns every reply in a byte string.

## Key locks

```python
from rediskit.datastruct.lock import Locks

locks = Locks(16)
with locks.locked("user:1", "user:2"):
    ...  # both keys held exclusively
```

`rw_locks(write_keys, read_keys)` and `rw_unlocks(...)` take exclusive and
shared locks together.

## Key patterns

```python
from rediskit.lib.wildcard import compile_pattern

pattern = compile_pattern("h[a-c]llo")
pattern.is_match("hbllo")   # True
pattern.is_match("hello")   # False
```

## Geohash

```python
from rediskit.lib import geohash

code = geohash.encode(48.669, -4.32913)
geohash.to_string(geohash.from_int(code))   # 'gbsuv7zt7zntw'
geohash.decode(code)                        # (48.669..., -4.32913...)
geohash.get_neighbours(48.669, -4.32913, 1000)  # nine (lower, upper) ranges
```

## Consistent hashing and IDs

```python
from rediskit.lib.consistenthash import ConsistentHash
from rediskit.lib.idgenerator import IDGenerator

ring = ConsistentHash(3, None)   # CRC-32 by default
ring.add_node("a", "b", "c", "d")
ring.pick_node("123{abc}")       # same node as "abc"

ids = IDGenerator("node-a")
ids.next_id()                    # increasing 64-bit IDs
```

## Serving TCP

`rediskit.tcp.server.listen_and_serve(listener, handler, close_event)`
accepts connections on a bound socket and hands each one to
`handler.handle(conn)` on its own thread until `close_event` is set; then it
closes the listener, calls `handler.close()` and waits for the connection
threads. `listen_and_serve_with_signal(address, handler)` binds
`host:port` itself and stops on SIGINT, SIGTERM, SIGHUP or SIGQUIT.

```python
from rediskit.tcp.server import Handler

class LineEcho(Handler):
    def handle(self, conn):
        with conn, conn.makefile("rb") as lines:
            for line in lines:
                conn.sendall(line)

    def close(self):
        pass
```

## What is not included

rediskit is a set of parts, not a finished server. It has no handler that
executes Redis commands and no keyspace or storage behind them, so nothing
here answers `PING` or `GET` over the network out of the box. It also has no
client for talking to a server, no publish/subscribe channels, no
connection object that tracks per-client state, no timer for delayed jobs
and no command to run. `Handler` is an interface you implement.