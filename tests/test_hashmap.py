import ctypes

import pytest

from utils.data_structures.hashmap import ChainedHashTable, polynomial_hash
from utils.exceptions import HashTableError


def reference_hash(key: str, bucket_count: int = 10) -> int:
    # Independent 32-bit wrap through ctypes
    h = 0
    for ch in key:
        h = ctypes.c_int32((h + ord(ch)) * 31).value
    return abs(h) % bucket_count


def test_hash_of_known_keys() -> None:
    """
    Hand-traced values: "cat" -> 3046122, "act" -> 2988462, "dog" -> 3088964.
    """
    assert polynomial_hash("cat") == 2
    assert polynomial_hash("act") == 2
    assert polynomial_hash("dog") == 4
    assert polynomial_hash("") == 0


@pytest.mark.parametrize("key", ["a", "hello world", "x" * 50, "Mississippi" * 7, "ÄÖÜ ß"])
def test_hash_wraps_like_signed_32_bit(key) -> None:
    """
    Test that the hash wraps to signed 32-bit after every step.
    """
    assert polynomial_hash(key) == reference_hash(key)


def test_hash_uses_utf16_code_units() -> None:
    """
    Test that characters outside the Basic Multilingual Plane hash by their UTF-16 code units.
    """
    # U+1F600 contributes its surrogate pair 0xD83D, 0xDE00
    assert polynomial_hash("\U0001F600") == 9


def test_hash_is_deterministic_and_in_range() -> None:
    """
    Test that hashing is repeatable and always lands inside the bucket range.
    """
    keys = ["", "cat", "Cat", "a" * 200, "zebra", "été"]
    for bucket_count in (1, 7, 10, 31):
        for key in keys:
            first = polynomial_hash(key, bucket_count)
            assert 0 <= first < bucket_count
            assert polynomial_hash(key, bucket_count) == first


@pytest.mark.parametrize("bad", [0, -3, 2.5, "10", True])
def test_invalid_bucket_count_rejected(bad) -> None:
    """
    Test that a bucket count that is not a positive integer is rejected.
    """
    with pytest.raises(HashTableError):
        ChainedHashTable(bad)


def test_insert_then_search() -> None:
    """
    Test that an inserted key is found by an exact, case-sensitive search.
    """
    table = ChainedHashTable()
    assert table.insert("cat") is True
    assert table.search("cat") is True
    assert "cat" in table
    # Equality is case-sensitive
    assert table.search("Cat") is False


def test_insert_is_idempotent() -> None:
    """
    Test that inserting a present key leaves the table unchanged.
    """
    table = ChainedHashTable()
    table.insert("cat")
    assert table.insert("cat") is False
    assert table.enumerate()[2] == (2, ("cat",))
    assert len(table) == 1


def test_colliding_keys_chain_in_insertion_order() -> None:
    """
    Test that colliding keys are chained in the order they were inserted.
    """
    table = ChainedHashTable()
    table.insert("cat")
    table.insert("act")
    table.insert("dog")
    assert table.enumerate()[2] == (2, ("cat", "act"))
    assert table.chain_length(2) == 2
    assert table.enumerate()[4] == (4, ("dog",))


def test_remove() -> None:
    """
    Test removing present and absent keys.
    """
    table = ChainedHashTable()
    table.insert("cat")
    table.insert("act")

    assert table.remove("cat") is True
    assert table.search("cat") is False
    assert table.enumerate()[2] == (2, ("act",))

    # Removing an absent key is a no-op
    assert table.remove("cat") is False
    assert table.remove("never-added") is False
    assert len(table) == 1


def test_enumerate_shape_and_isolation() -> None:
    """
    Test that enumerate lists every bucket and returns a detached snapshot.
    """
    table = ChainedHashTable(bucket_count=10)
    assert [index for index, _ in table.enumerate()] == list(range(10))

    table.insert("cat")
    first = table.enumerate()
    assert first == table.enumerate()

    table.insert("act")
    table.remove("cat")
    # An earlier snapshot does not change with the table
    assert first[2] == (2, ("cat",))
    assert len(table.enumerate()) == 10


def test_clear_keeps_bucket_count() -> None:
    """
    Test that clear empties every chain but keeps the bucket count.
    """
    table = ChainedHashTable(bucket_count=5)
    for key in ("a", "b", "c"):
        table.insert(key)
    table.clear()
    assert len(table) == 0
    assert table.bucket_count == 5
    assert table.enumerate() == [(i, ()) for i in range(5)]
