import random

from rediskit.datastruct.sortedset.border import parse_score_border
from rediskit.datastruct.sortedset.skiplist import Element, Skiplist

PAIRS = [("m%d" % i, float(i)) for i in range(1, 21)]
MEMBERS = [member for member, _ in PAIRS]


def build(pairs):
    shuffled = list(pairs)
    random.Random(7).shuffle(shuffled)
    skiplist = Skiplist()
    for member, score in shuffled:
        skiplist.insert(member, score)
    return skiplist


def walk(skiplist):
    return [skiplist.get_by_rank(rank).member for rank in range(1, len(skiplist) + 1)]


def walk_backward(skiplist):
    result = []
    node = skiplist.tail
    while node is not None:
        result.append(node.member)
        node = node.backward
    return result


def test_insert_orders_by_score():
    skiplist = build(PAIRS)
    assert len(skiplist) == len(PAIRS)
    assert walk(skiplist) == MEMBERS
    assert walk_backward(skiplist) == MEMBERS[::-1]


def test_same_score_orders_by_member():
    skiplist = Skiplist()
    for member in ["b", "c", "a"]:
        skiplist.insert(member, 1.0)
    assert walk(skiplist) == sorted(["b", "c", "a"])


def test_get_rank():
    skiplist = build(PAIRS)
    for rank, (member, score) in enumerate(PAIRS, start=1):
        assert skiplist.get_rank(member, score) == rank
    assert skiplist.get_rank("absent", 100.0) == 0


def test_get_by_rank_out_of_range():
    skiplist = build(PAIRS)
    assert skiplist.get_by_rank(len(PAIRS) + 1) is None
    assert skiplist.get_by_rank(1).element == Element(*PAIRS[0])


def test_remove():
    skiplist = build(PAIRS)
    member, score = PAIRS[4]
    assert skiplist.remove(member, score) is True
    assert skiplist.remove(member, score) is False
    assert len(skiplist) == len(PAIRS) - 1
    expected = MEMBERS[:4] + MEMBERS[5:]
    assert walk(skiplist) == expected
    assert walk_backward(skiplist) == expected[::-1]


def test_remove_with_wrong_score_is_noop():
    skiplist = build(PAIRS)
    member, score = PAIRS[0]
    assert skiplist.remove(member, score + 0.5) is False
    assert walk(skiplist) == MEMBERS


def test_score_range_lookup():
    skiplist = build(PAIRS)
    low = parse_score_border("(3")
    high = parse_score_border("7")
    assert skiplist.has_in_range(low, high) is True
    assert skiplist.get_first_in_score_range(low, high).member == MEMBERS[3]
    assert skiplist.get_last_in_score_range(low, high).member == MEMBERS[6]


def test_score_range_empty():
    skiplist = build(PAIRS)
    assert skiplist.has_in_range(parse_score_border("5"), parse_score_border("3")) is False
    assert skiplist.has_in_range(parse_score_border("(5"), parse_score_border("5")) is False
    assert skiplist.get_first_in_score_range(
        parse_score_border("100"), parse_score_border("+inf")
    ) is None
    assert Skiplist().get_last_in_score_range(
        parse_score_border("1"), parse_score_border("2")
    ) is None


def test_remove_range_by_score():
    skiplist = build(PAIRS)
    removed = skiplist.remove_range_by_score(parse_score_border("3"), parse_score_border("(6"))
    assert [element.member for element in removed] == MEMBERS[2:5]
    expected = MEMBERS[:2] + MEMBERS[5:]
    assert walk(skiplist) == expected
    assert walk_backward(skiplist) == expected[::-1]


def test_remove_range_by_rank():
    skiplist = build(PAIRS)
    removed = skiplist.remove_range_by_rank(2, 4)
    assert [element.member for element in removed] == MEMBERS[1:3]
    expected = MEMBERS[:1] + MEMBERS[3:]
    assert walk(skiplist) == expected
    for rank, member in enumerate(expected, start=1):
        assert skiplist.get_rank(member, dict(PAIRS)[member]) == rank


def test_random_inserts_and_removals_keep_invariants():
    rng = random.Random(42)
    pairs = [("k%d" % i, float(rng.randint(0, 50))) for i in range(300)]
    skiplist = Skiplist()
    for member, score in pairs:
        skiplist.insert(member, score)
    removed = rng.sample(pairs, 150)
    for member, score in removed:
        assert skiplist.remove(member, score) is True
    remaining = sorted(set(pairs) - set(removed), key=lambda p: (p[1], p[0]))
    assert len(skiplist) == len(remaining)
    assert walk(skiplist) == [member for member, _ in remaining]
    assert walk_backward(skiplist) == [member for member, _ in reversed(remaining)]
    for rank, (member, score) in enumerate(remaining, start=1):
        assert skiplist.get_rank(member, score) == rank