"""Unit tests for the skip-list backed OrderedSet."""
import math
import random

import pytest

from skipset import OrderedSet


def check_structure(s):
    """Assert the lane invariants of `s` by walking every level."""
    header = s._header
    assert len(header.forward) == s.max_level
    lanes = []
    for i in range(s.max_level):
        lane = []
        x = header.forward[i]
        while x is not None:
            assert 1 <= len(x.forward) <= s.max_level
            assert len(x.forward) > i
            lane.append(x)
            x = x.forward[i]
        values = [n.value for n in lane]
        assert all(a < b for a, b in zip(values, values[1:])), f"lane {i} out of order"
        lanes.append(lane)
    for i in range(1, s.max_level):
        below = {id(n) for n in lanes[i - 1]}
        assert all(id(n) in below for n in lanes[i]), f"lane {i} not nested in lane {i - 1}"
    for i in range(s._level, s.max_level):
        assert not lanes[i]
    assert len(lanes[0]) == len(s) == s.length()


@pytest.fixture
def seeded():
    """An empty set with reproducible levels."""
    return OrderedSet(rng=random.Random(2024))


def test_add_iterates_sorted(seeded):
    """Test ascending iteration after out-of-order inserts."""
    for v in (5, 3, 7):
        seeded.add(v)
    assert list(seeded) == [3, 5, 7]
    assert seeded.length() == 3
    check_structure(seeded)


def test_duplicate_add(seeded):
    """Test that a repeated add is absorbed."""
    seeded.add(3)
    seeded.add(3)
    assert seeded.length() == 1
    assert seeded.contains(3)
    check_structure(seeded)


def test_remove_existing(seeded):
    """Test removal leaves other members untouched."""
    seeded.add(3)
    seeded.add(5)
    seeded.remove(3)
    assert not seeded.contains(3)
    assert seeded.contains(5)
    assert seeded.length() == 1
    check_structure(seeded)


def test_remove_from_empty(seeded):
    """Test removal of a missing value is a no-op."""
    seeded.remove(10)
    assert seeded.length() == 0
    assert not seeded.contains(10)
    assert not seeded


def test_remove_missing_value(seeded):
    """Test removal of a value between members is a no-op."""
    for v in (1, 3, 5):
        seeded.add(v)
    seeded.remove(4)
    assert list(seeded) == [1, 3, 5]
    check_structure(seeded)


def test_hundred_shuffled(seeded):
    """Test membership and order for 1..100 inserted in random order."""
    values = list(range(1, 101))
    random.Random(7).shuffle(values)
    for v in values:
        seeded.add(v)
    assert all(seeded.contains(k) for k in range(1, 101))
    assert not seeded.contains(0)
    assert not seeded.contains(101)
    assert list(seeded) == list(range(1, 101))
    check_structure(seeded)


def test_constructor_items():
    """Test bulk construction from an iterable with duplicates."""
    s = OrderedSet(["pear", "apple", "fig", "apple"])
    assert list(s) == ["apple", "fig", "pear"]
    assert len(s) == 3
    assert "fig" in s
    assert "kiwi" not in s


def test_discard_alias(seeded):
    """Test `discard` behaves like `remove`."""
    seeded.add(1)
    seeded.discard(1)
    seeded.discard(1)
    assert len(seeded) == 0


def test_add_remove_inverse():
    """add(v) then remove(v) restores length and every membership."""
    rnd = random.Random(11)
    s = OrderedSet(rnd.sample(range(1000), 200), rng=random.Random(3))
    before = list(s)
    for v in rnd.sample(range(1000, 2000), 50):
        s.add(v)
        s.remove(v)
        assert list(s) == before
    check_structure(s)


def test_random_operations_match_builtin_set():
    """Interleaved adds and removes agree with a plain set at every step."""
    rnd = random.Random(99)
    s = OrderedSet(rng=random.Random(100))
    reference = set()
    for step in range(3000):
        v = rnd.randrange(300)
        if rnd.random() < 0.6:
            s.add(v)
            reference.add(v)
        else:
            s.remove(v)
            reference.discard(v)
        assert len(s) == len(reference)
        if step % 250 == 0:
            check_structure(s)
    assert list(s) == sorted(reference)
    assert all(s.contains(v) == (v in reference) for v in range(300))
    check_structure(s)


def test_empty_after_removing_everything():
    """Test the set collapses back to a single lane when emptied."""
    s = OrderedSet(range(500), rng=random.Random(8))
    assert s._level > 1
    for v in range(500):
        s.remove(v)
    assert len(s) == 0
    assert list(s) == []
    assert s._level == 1
    assert all(link is None for link in s._header.forward)


def test_top_level_lowered_after_remove():
    """Test the active level drops once the tallest node is gone."""
    heights = iter([5, 1, 1])
    s = OrderedSet(level_generator=lambda: next(heights))
    for v in (20, 10, 30):
        s.add(v)
    assert s._level == 5
    s.remove(20)
    assert s._level == 1
    assert list(s) == [10, 30]
    check_structure(s)


def test_single_lane_generator():
    """A generator that never promotes still yields a correct set."""
    s = OrderedSet(level_generator=lambda: 1)
    for v in (9, 2, 7, 4):
        s.add(v)
    assert s._level == 1
    assert list(s) == [2, 4, 7, 9]
    s.remove(7)
    assert list(s) == [2, 4, 9]
    check_structure(s)


@pytest.mark.parametrize("bad", [0, 5, -1, 1.0, None])
def test_bad_level_generator(bad):
    """Out-of-range heights are rejected and leave the set unchanged."""
    s = OrderedSet(max_level=4, level_generator=lambda: bad)
    with pytest.raises(ValueError):
        s.add(1)
    assert len(s) == 0
    assert list(s) == []


def test_same_seed_same_shape():
    """Equal seeds build identical towers."""
    values = list(range(64))
    a = OrderedSet(values, rng=random.Random(5))
    b = OrderedSet(values, rng=random.Random(5))
    heights_a = [len(n.forward) for n in _nodes(a)]
    heights_b = [len(n.forward) for n in _nodes(b)]
    assert heights_a == heights_b


def _nodes(s):
    x = s._header.forward[0]
    while x is not None:
        yield x
        x = x.forward[0]


def test_properties():
    """Test the configuration is exposed read-only."""
    s = OrderedSet(probability=0.25, max_level=8)
    assert s.probability == 0.25
    assert s.max_level == 8
    assert len(s._header.forward) == 8
    with pytest.raises(AttributeError):
        s.max_level = 3


@pytest.mark.parametrize("kwargs", [{"probability": 0.0}, {"probability": 1.0}, {"max_level": 0}])
def test_invalid_configuration(kwargs):
    """Test construction rejects unusable parameters."""
    with pytest.raises(ValueError):
        OrderedSet(**kwargs)


def test_none_rejected(seeded):
    """Test None is refused by every operation."""
    with pytest.raises(TypeError):
        seeded.add(None)
    with pytest.raises(TypeError):
        seeded.contains(None)
    with pytest.raises(TypeError):
        seeded.remove(None)


def test_nan_rejected(seeded):
    """Test NaN, which cannot be ordered, is refused."""
    with pytest.raises(ValueError):
        seeded.add(math.nan)
    assert len(seeded) == 0


def test_unorderable_rejected(seeded):
    """Test values without an ordering are refused even on an empty set."""
    with pytest.raises(TypeError):
        seeded.add(object())
    assert len(seeded) == 0


def test_mixed_types_leave_set_intact(seeded):
    """Test a failed comparison does not corrupt the structure."""
    for v in (1, 2, 3):
        seeded.add(v)
    with pytest.raises(TypeError):
        seeded.add("two")
    with pytest.raises(TypeError):
        seeded.remove("two")
    assert list(seeded) == [1, 2, 3]
    check_structure(seeded)


def test_tuple_values():
    """Test composite values ordered lexicographically."""
    s = OrderedSet([(2, "b"), (1, "z"), (2, "a")])
    assert list(s) == [(1, "z"), (2, "a"), (2, "b")]


def test_repr():
    """Test the textual representation lists values in order."""
    assert repr(OrderedSet([3, 1, 2])) == "OrderedSet([1, 2, 3])"
    assert repr(OrderedSet()) == "OrderedSet([])"
