"""
Member Access

Uniform native access to mapping keys, sequence elements and object
attributes. Policies use these helpers to touch the raw container.
"""

from collections.abc import Mapping, MutableMapping
from typing import Any

from proxytrace.inspector import as_index, is_sequence


def has_member(container: Any, key: Any) -> bool:
    """
    Check whether a key is present on a container.

    Mappings only count their keys; sequences count in-range indexes
    and attributes; other objects count attributes.
    """
    if isinstance(container, Mapping):
        try:
            return key in container
        except TypeError:
            return False

    if is_sequence(container):
        index = as_index(key)
        if index is not None:
            return -len(container) <= index < len(container)

    if isinstance(key, str):
        return hasattr(container, key)

    return False


def _sequence_index(container: Any, key: Any) -> int | None:
    """Index a key addresses on a sequence, or None."""
    if is_sequence(container):
        return as_index(key)
    return None


def read_member(container: Any, key: Any) -> Any:
    """
    Read a member with native semantics.

    Missing mapping keys fall back to the mapping's own attributes
    (``keys``, ``items``) before raising KeyError. Index-like strings
    address sequence elements, matching ``has_member``.
    """
    if isinstance(container, Mapping):
        try:
            return container[key]
        except KeyError:
            if isinstance(key, str) and hasattr(container, key):
                return getattr(container, key)
            raise

    index = _sequence_index(container, key)
    if index is not None:
        return container[index]

    if isinstance(key, str):
        return getattr(container, key)

    return container[key]


def write_member(container: Any, key: Any, value: Any) -> None:
    """Write a member with native semantics."""
    index = _sequence_index(container, key)
    if index is not None:
        container[index] = value
    elif isinstance(container, MutableMapping) or not isinstance(key, str):
        container[key] = value
    else:
        setattr(container, key, value)


def delete_member(container: Any, key: Any) -> None:
    """Delete a member with native semantics."""
    index = _sequence_index(container, key)
    if index is not None:
        del container[index]
    elif isinstance(container, MutableMapping) or not isinstance(key, str):
        del container[key]
    else:
        delattr(container, key)
