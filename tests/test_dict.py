import threading

import pytest

from rediskit.datastruct.dict import ConcurrentDict, SimpleDict, fnv32


def _run_threads(count, target):
    errors = []

    def wrapper(i):
        try:
            target(i)
        except AssertionError as exc:
            errors.append(exc)

    threads = [threading.Thread(target=wrapper, args=(i,)) for i in range(count)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    return errors


def test_fnv32_known_values():
    assert fnv32("") == 2166136261
    assert fnv32("a") == 0x050C5D7E


def test_concurrent_put():
    d = ConcurrentDict(0)

    def work(i):
        key = f"k{i}"
        assert d.put(key, i) == 1
        assert key in d
        assert d.get(key) == i

    assert _run_threads(100, work) == []
    assert len(d) == 100


def test_concurrent_put_if_absent():
    d = ConcurrentDict(0)

    def work(i):
        key = f"k{i}"
        assert d.put_if_absent(key, i) == 1
        assert d.get(key) == i
        assert d.put_if_absent(key, i * 10) == 0
        assert d.get(key) == i

    assert _run_threads(100, work) == []


def test_concurrent_put_if_exists():
    d = ConcurrentDict(0)

    def work(i):
        key = f"k{i}"
        assert d.put_if_exists(key, i) == 0
        d.put(key, i)
        d.put_if_exists(key, 10 * i)
        assert key in d
        assert d.get(key) == 10 * i

    assert _run_threads(100, work) == []


def test_concurrent_remove_head():
    d = ConcurrentDict(0)
    total = 100
    for i in range(total):
        d.put(f"k{i}", i)
    assert len(d) == total
    for i in range(total):
        key = f"k{i}"
        assert d.get(key) == i
        assert d.remove(key) == 1
        assert len(d) == total - i - 1
        assert key not in d
        assert d.remove(key) == 0
        assert len(d) == total - i - 1


def test_concurrent_remove_tail():
    d = ConcurrentDict(0)
    for i in range(100):
        d.put(f"k{i}", i)
    for i in range(9, -1, -1):
        key = f"k{i}"
        assert d.get(key) == i
        assert d.remove(key) == 1
        assert key not in d
        assert d.remove(key) == 0
    assert len(d) == 90


def test_concurrent_remove_middle():
    d = ConcurrentDict(0)
    d.put("head", 0)
    for i in range(10):
        d.put(f"k{i}", i)
    d.put("tail", 0)
    for i in range(9, -1, -1):
        key = f"k{i}"
        assert d.get(key) == i
        assert d.remove(key) == 1
        assert key not in d
        assert d.remove(key) == 0
    assert sorted(d.keys()) == ["head", "tail"]


def test_concurrent_for_each():
    d = ConcurrentDict(0)
    size = 100
    for i in range(size):
        d.put(f"k{i}", i)
    seen = []

    def consume(key, value):
        seen.append((key, value))
        return True

    d.for_each(consume)
    assert len(seen) == size
    assert all(key == f"k{value}" for key, value in seen)
    assert sorted(key for key, _ in seen) == sorted(d.keys())
    assert all(d.get(key) == value for key, value in seen)


def test_concurrent_for_each_stops():
    d = ConcurrentDict(0)
    for i in range(50):
        d.put(f"k{i}", i)
    calls = []
    d.for_each(lambda k, v: calls.append(k) and False)
    assert len(calls) == 1


def test_concurrent_random_keys():
    d = ConcurrentDict(0)
    for i in range(100):
        d.put(f"k{i}", i)
    result = d.random_keys(10)
    assert len(result) == 10
    assert all(key in d for key in result)
    distinct = d.random_distinct_keys(10)
    assert len(distinct) == 10
    assert len(set(distinct)) == 10


def test_concurrent_random_keys_over_limit_returns_all():
    d = ConcurrentDict(0)
    for i in range(5):
        d.put(f"k{i}", i)
    assert sorted(d.random_keys(10)) == [f"k{i}" for i in range(5)]
    assert sorted(d.random_distinct_keys(5)) == [f"k{i}" for i in range(5)]


def test_concurrent_keys():
    d = ConcurrentDict(0)
    for i in range(10):
        d.put(f"key{i}", f"val{i}")
    assert len(d.keys()) == 10


def test_concurrent_clear():
    d = ConcurrentDict(4)
    for i in range(10):
        d.put(f"k{i}", i)
    d.clear()
    assert len(d) == 0
    assert d.keys() == []
    assert d.put("k1", 1) == 1


def test_simple_keys():
    d = SimpleDict()
    for i in range(10):
        d.put(f"key{i}", f"val{i}")
    assert sorted(d.keys()) == sorted(f"key{i}" for i in range(10))


def test_simple_put_if_exists():
    d = SimpleDict()
    key = "abcde"
    val = key + "1"
    assert d.put_if_exists(key, val) == 0
    d.put(key, val)
    val = key + "2"
    assert d.put_if_exists(key, val) == 1
    assert d.get(key) == val


def test_simple_put_and_remove():
    d = SimpleDict()
    assert d.put("a", 1) == 1
    assert d.put("a", 2) == 0
    assert d.put_if_absent("a", 3) == 0
    assert d.get("a") == 2
    assert d.remove("a") == 1
    assert d.remove("a") == 0
    assert d.get("a") is None
    assert len(d) == 0


def test_simple_random_keys():
    d = SimpleDict()
    for i in range(5):
        d.put(f"k{i}", i)
    keys = d.random_keys(8)
    assert len(keys) == 8
    assert all(k in d for k in keys)
    distinct = d.random_distinct_keys(3)
    assert len(set(distinct)) == 3
    assert sorted(d.random_distinct_keys(10)) == [f"k{i}" for i in range(5)]


@pytest.mark.parametrize("factory", [SimpleDict, lambda: ConcurrentDict(0)])
def test_clear_empties(factory):
    d = factory()
    d.put("x", 1)
    d.clear()
    assert "x" not in d
    assert len(d) == 0