import logging  # Import logging to provide detailed runtime information.
from typing import Iterator, List, Tuple

from utils.exceptions import HashTableError

logger = logging.getLogger(__name__)

DEFAULT_BUCKET_COUNT = 10

# 32-bit signed integer bounds used by the hash accumulator
_INT32_MASK = 0xFFFFFFFF
_INT32_SIGN = 0x80000000


def _to_int32(value: int) -> int:
    """Wrap an arbitrary Python int to a signed 32-bit integer."""
    value &= _INT32_MASK
    return value - 0x100000000 if value & _INT32_SIGN else value


def _char_codes(key: str) -> Iterator[int]:
    """Yield the UTF-16 code units of the key, the way a browser reports character codes."""
    encoded = key.encode("utf-16-le", "surrogatepass")
    for i in range(0, len(encoded), 2):
        yield encoded[i] | (encoded[i + 1] << 8)


def polynomial_hash(key: str, bucket_count: int = DEFAULT_BUCKET_COUNT) -> int:
    """
    Map a key to a bucket index.

    Each character code c is folded in as h = (h + c) * 31, wrapping to a signed
    32-bit integer after every step. The bucket is abs(h) mod bucket_count.

    Args:
        key: The key to hash. The empty string maps to bucket 0.
        bucket_count: Number of buckets in the table.

    Returns:
        An index in [0, bucket_count).
    """
    h = 0
    for code in _char_codes(key):
        h = _to_int32((h + code) * 31)
    return abs(h) % bucket_count


class ChainedHashTable:
    """
    A fixed-size hash table of string keys that resolves collisions with separate chaining.

    Each bucket holds an ordered chain of keys in insertion order. The number of buckets
    never changes; there is no resizing or rehashing.
    """

    def __init__(self, bucket_count: int = DEFAULT_BUCKET_COUNT):
        """
        Initialize the table with a fixed number of empty chains.
        Args:
            bucket_count: The number of buckets (chains) in the table.
        """
        # Validate the bucket count; bool is rejected even though it is an int subclass
        if isinstance(bucket_count, bool) or not isinstance(bucket_count, int) or bucket_count < 1:
            raise HashTableError(f"Bucket count must be a positive integer, got {bucket_count!r}.")

        self._bucket_count = bucket_count
        self._chains: List[List[str]] = [[] for _ in range(bucket_count)]

    @property
    def bucket_count(self) -> int:
        return self._bucket_count

    def bucket_for(self, key: str) -> int:
        """
        Hash the key to get an index in the chain array.
        Args:
            key: The key to hash.
        Returns:
            The bucket index for the key.
        """
        return polynomial_hash(key, self._bucket_count)

    def insert(self, key: str) -> bool:
        """
        Append the key to its bucket chain unless it is already there.

        This is the direct path used when restoring from the word store and by the
        animator when an insertion is committed.

        Args:
            key: The key to insert.
        Returns:
            True if the key was appended, False if it was already present.
        """
        chain = self._chains[self.bucket_for(key)]
        if key in chain:
            logger.debug(f"Key '{key}' already present; insert skipped.")
            return False

        chain.append(key)
        logger.debug(f"Key '{key}' appended to bucket {self.bucket_for(key)} at position {len(chain) - 1}.")
        return True

    def remove(self, key: str) -> bool:
        """
        Remove the key from its bucket chain. Removing an absent key is a no-op.
        Args:
            key: The key to remove.
        Returns:
            True if the key was removed.
        """
        bucket_index = self.bucket_for(key)
        chain = self._chains[bucket_index]

        for i, existing in enumerate(chain):
            if existing == key:
                del chain[i]
                logger.debug(f"Key '{key}' removed from bucket {bucket_index}.")
                return True

        logger.debug(f"Key '{key}' not found in bucket {bucket_index}; nothing removed.")
        return False

    def search(self, key: str) -> bool:
        """
        Check whether the key is present in its bucket chain.
        Args:
            key: The key to look up.
        Returns:
            True if the key is stored in the table.
        """
        return key in self._chains[self.bucket_for(key)]

    def chain_length(self, bucket_index: int) -> int:
        """Number of keys currently chained at the bucket."""
        return len(self._chains[bucket_index])

    def enumerate(self) -> List[Tuple[int, Tuple[str, ...]]]:
        """
        Snapshot the table for rendering.
        Returns:
            One (bucket index, chain) pair per bucket, in bucket order. Chains are tuples
            so later mutations of the table never leak into a snapshot.
        """
        return [(index, tuple(chain)) for index, chain in enumerate(self._chains)]

    def clear(self) -> None:
        """Empty every chain while keeping the bucket count."""
        for chain in self._chains:
            chain.clear()

    def __contains__(self, key: str) -> bool:
        return self.search(key)

    def __len__(self) -> int:
        return sum(len(chain) for chain in self._chains)

    def __repr__(self) -> str:
        return f"<ChainedHashTable(bucket_count={self._bucket_count}, size={len(self)})>"
