from rediskit.lib.idgenerator import IDGenerator


def test_generator_unique():
    gen = IDGenerator("a")
    size = 200_000
    ids = [gen.next_id() for _ in range(size)]
    assert len(set(ids)) == size


def test_ids_increase():
    gen = IDGenerator("node")
    ids = [gen.next_id() for _ in range(5000)]
    assert ids == sorted(ids)


def test_node_bits_are_stable():
    gen = IDGenerator("a")
    node_bits = {(gen.next_id() >> 10) & 0xFFF for _ in range(3000)}
    assert len(node_bits) == 1
    other = IDGenerator("a")
    assert (other.next_id() >> 10) & 0xFFF in node_bits


def test_sequence_within_limit():
    gen = IDGenerator("b")
    assert all((gen.next_id() & 0x3FF) <= 1023 for _ in range(3000))
    assert gen.next_id() > 0