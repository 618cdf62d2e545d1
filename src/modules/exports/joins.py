"""In-memory join indexes used by the sheet builders.

Each index is built once per export run and reused for every row. A key with
no match resolves to ``None``; callers render the ``UNKNOWN`` label for it.
"""

from collections import Counter
from collections.abc import Callable, Hashable, Iterable
from typing import Generic, TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")

UNKNOWN = "Unknown"


class Index(Generic[K, V]):
    """key -> record lookup. Later records win on duplicate keys; None keys are skipped."""

    def __init__(self, records: Iterable[V], key: Callable[[V], K | None]):
        self._by_key: dict[K, V] = {}
        for record in records:
            k = key(record)
            if k is None or k == "":
                continue
            self._by_key[k] = record

    def __len__(self) -> int:
        return len(self._by_key)

    def __contains__(self, key: object) -> bool:
        return key in self._by_key

    def get(self, key: K | None) -> V | None:
        if key is None:
            return None
        return self._by_key.get(key)

    def label(self, key: K | None, attr: Callable[[V], str | None]) -> str:
        """Resolve key to a display string, or UNKNOWN on a miss or blank value."""
        record = self.get(key)
        if record is None:
            return UNKNOWN
        return attr(record) or UNKNOWN


def count_by(records: Iterable[V], key: Callable[[V], K]) -> Counter:
    """Occurrences per key, e.g. claims per (member_id, benefit_id)."""
    return Counter(key(record) for record in records)
