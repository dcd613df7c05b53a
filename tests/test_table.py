from __future__ import annotations

import pytest

from chainhash.core.table import DEFAULT_CAPACITY, HashTable, rolling_hash, verify_table


def _keys(count: int) -> list[str]:
    return [f"key-{i}" for i in range(count)]


def test_construct_from_pairs() -> None:
    table = HashTable([["apple", "red"], ["banana", "yellow"]])
    assert table.length() == 2
    assert len(table) == 2
    assert table.get("apple") == "red"
    assert table.get("banana") == "yellow"


def test_defaults() -> None:
    table = HashTable()
    assert table.capacity == DEFAULT_CAPACITY == 16
    assert table.length() == 0
    assert table.entries() == []
    assert table.get("anything") is None


def test_set_then_get_and_overwrite() -> None:
    table = HashTable()
    table.set("apple", "red")
    table.set("apple", "green")
    assert table.get("apple") == "green"
    assert table.length() == 1


def test_set_same_pair_twice_keeps_length() -> None:
    table = HashTable()
    table.set("k", "v")
    table.set("k", "v")
    assert table.length() == 1


def test_has_and_contains() -> None:
    table = HashTable([("apple", "red")])
    assert table.has("apple") is True
    assert table.has("pear") is False
    assert "apple" in table
    assert "pear" not in table
    assert 42 not in table


def test_remove() -> None:
    table = HashTable([("apple", "red"), ("banana", "yellow")])
    assert table.remove("apple") is True
    assert table.get("apple") is None
    assert table.has("apple") is False
    assert table.length() == 1
    assert table.remove("apple") is False
    assert table.length() == 1


def test_rolling_hash_known_values() -> None:
    assert rolling_hash("", 16) == 0
    assert rolling_hash("a", 16) == 97 % 16
    assert rolling_hash("ab", 16) == (31 * 97 + 98) % 16
    assert rolling_hash("apple", 16) == 10


def test_rolling_hash_matches_polynomial() -> None:
    for key in ("apple", "ice cream", "zebra", "elephant"):
        full = 0
        for ch in key:
            full = 31 * full + ord(ch)
        for capacity in (16, 32, 1024):
            assert rolling_hash(key, capacity) == full % capacity


def test_resize_after_thirteenth_insert() -> None:
    table = HashTable()
    keys = _keys(13)
    for key in keys[:12]:
        table.set(key, key.upper())
    assert table.capacity == 16
    table.set(keys[12], keys[12].upper())
    assert table.capacity == 32
    assert table.length() == 13
    for key in keys:
        assert table.get(key) == key.upper()
    ok, msgs = verify_table(table)
    assert ok, msgs


def test_overwrite_does_not_trigger_resize() -> None:
    table = HashTable()
    keys = _keys(12)
    for key in keys:
        table.set(key, "v")
    for key in keys:
        table.set(key, "w")
    assert table.capacity == 16
    assert table.length() == 12


def test_growth_keeps_doubling() -> None:
    table = HashTable()
    for key in _keys(100):
        table.set(key, key)
    assert table.capacity == 256
    assert table.length() == 100
    assert sorted(table.keys()) == sorted(_keys(100))


def test_clear_resets_to_default_capacity() -> None:
    table = HashTable()
    for key in _keys(20):
        table.set(key, key)
    assert table.capacity == 32
    table.clear()
    assert table.length() == 0
    assert table.capacity == 16
    assert table.entries() == []
    keys = _keys(13)
    for key in keys[:12]:
        table.set(key, key)
    assert table.capacity == 16
    table.set(keys[12], keys[12])
    assert table.capacity == 32


def test_entries_follow_bucket_then_insertion_order() -> None:
    table = HashTable()
    # "a" and "q" share bucket 1 at capacity 16 (97 % 16 == 113 % 16 == 1).
    table.set("q", "second-bucket-1")
    table.set("b", "bucket-2")
    table.set("a", "first-bucket-1")
    assert table.entries() == [
        ("q", "second-bucket-1"),
        ("a", "first-bucket-1"),
        ("b", "bucket-2"),
    ]
    assert table.keys() == ["q", "a", "b"]
    assert table.values() == ["second-bucket-1", "first-bucket-1", "bucket-2"]


def test_entries_snapshot_is_stable() -> None:
    table = HashTable([(key, key) for key in _keys(30)])
    first = table.entries()
    assert table.entries() == first
    table.set("extra", "x")
    assert ("extra", "x") not in first


def test_custom_policy() -> None:
    table = HashTable(default_capacity=4, load_factor=0.5)
    table.set("a", "1")
    table.set("b", "2")
    assert table.capacity == 4
    table.set("c", "3")
    assert table.capacity == 8
    table.clear()
    assert table.capacity == 4


@pytest.mark.parametrize("capacity", [0, 3, 12, -16])
def test_rejects_non_power_of_two_capacity(capacity: int) -> None:
    with pytest.raises(ValueError):
        HashTable(default_capacity=capacity)


@pytest.mark.parametrize("load_factor", [0.0, -0.5, 1.5])
def test_rejects_bad_load_factor(load_factor: float) -> None:
    with pytest.raises(ValueError):
        HashTable(load_factor=load_factor)


@pytest.mark.parametrize(
    "pairs",
    [
        [("only-key",)],
        [("a", "b", "c")],
        ["ab"],
        [42],
        [("key", 1)],
        [(1, "value")],
    ],
)
def test_malformed_pairs_fail_fast(pairs: list) -> None:
    with pytest.raises(TypeError, match=r"pairs\[0\]"):
        HashTable(pairs)


def test_diagnostics() -> None:
    table = HashTable([("a", "1"), ("q", "2"), ("b", "3")])
    assert table.load_factor() == pytest.approx(3 / 16)
    lengths = table.bucket_lengths()
    assert len(lengths) == 16
    assert sum(lengths) == 3
    assert table.max_chain_len() == 2


def test_verify_table_reports_corruption() -> None:
    table = HashTable([("a", "1"), ("b", "2")])
    ok, msgs = verify_table(table, verbose=True)
    assert ok
    assert msgs and msgs[-1].startswith("Capacity=16, Size=2")

    # Place "a" in a bucket its hash does not select.
    table._buckets[5].set("a", "1")
    ok, msgs = verify_table(table)
    assert not ok
    assert any("Duplicate key 'a'" in msg for msg in msgs)
    assert any("hashes to 1" in msg for msg in msgs)
    assert any("Size mismatch" in msg for msg in msgs)


def test_resize_and_clear_are_logged(chainhash_logs) -> None:
    table = HashTable()
    for key in _keys(13):
        table.set(key, key)
    table.clear()
    assert "Resized table 16 -> 32 buckets (size=13)" in chainhash_logs.messages
    assert "Cleared table (capacity reset to 16)" in chainhash_logs.messages
