"""
Negative Index Policy

Resolves integer keys, including integer-like strings, against a
sequence the way Python slices do: -1 is the last element.
"""

from typing import Any

from proxytrace.access import read_member, write_member
from proxytrace.inspector import ABSENT, as_index, is_sequence
from proxytrace.models import WriteResult
from proxytrace.policies.base import InterceptionPolicy


class NegativeIndexPolicy(InterceptionPolicy):
    """
    Sequence access with negative indexes and an ABSENT sentinel.

    ``proxy[-1]`` and ``proxy["-1"]`` both return the last element.
    Out-of-range reads return ABSENT instead of raising IndexError.
    Non-index keys (``append``, ``count``, slices) pass through, so
    mutators keep working and later reads see the new length.
    """

    name = "negative_index"

    def check_container(self, container: Any) -> None:
        if not is_sequence(container):
            raise TypeError(
                f"NegativeIndexPolicy needs a sequence, got {type(container).__name__}"
            )

    def on_read(self, container: Any, key: Any, proxy: Any) -> Any:
        position = self._resolve(container, key)
        if position is None:
            return read_member(container, key)
        if position is ABSENT:
            return ABSENT
        return container[position]

    def on_write(self, container: Any, key: Any, value: Any, proxy: Any) -> WriteResult:
        position = self._resolve(container, key)
        if position is None:
            write_member(container, key, value)
            return WriteResult.ok(key)
        if position is ABSENT:
            return WriteResult.rejected(
                key, f"Index {key!r} out of range for length {len(container)}"
            )
        container[position] = value
        return WriteResult.ok(key)

    def _resolve(self, container: Any, key: Any) -> Any:
        """Map a key to a non-negative position, ABSENT, or None if not an index."""
        index = as_index(key)
        if index is None:
            return None

        length = len(container)
        position = index if index >= 0 else length + index
        if 0 <= position < length:
            return position
        return ABSENT
