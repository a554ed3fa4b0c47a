"""
Value Inspector

Maps Python values onto the closed PrimitiveKind set and recognises
index-like keys.
"""

import re
from collections.abc import Mapping, Sequence
from typing import Any

from proxytrace.models import PrimitiveKind

_INDEX_PATTERN = re.compile(r"[+-]?\d+")


class _Absent:
    """Sentinel for 'no value here'. Falsy, compares only to itself."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "ABSENT"


ABSENT = _Absent()


def type_of(value: Any) -> PrimitiveKind:
    """
    Classify a value.

    Rules:
    - None, ABSENT          -> UNDEFINED
    - bool                  -> BOOLEAN (checked before int)
    - int, float, complex   -> NUMBER
    - str                   -> STRING
    - classes, callables    -> FUNCTION
    - everything else       -> OBJECT
    """
    if value is None or value is ABSENT:
        return PrimitiveKind.UNDEFINED

    if isinstance(value, bool):
        return PrimitiveKind.BOOLEAN

    if isinstance(value, (int, float, complex)):
        return PrimitiveKind.NUMBER

    if isinstance(value, str):
        return PrimitiveKind.STRING

    if callable(value):
        return PrimitiveKind.FUNCTION

    return PrimitiveKind.OBJECT


def as_index(key: Any) -> int | None:
    """
    Return the integer a key addresses, or None if it is not index-like.

    bool is rejected even though it subclasses int.
    """
    if isinstance(key, bool):
        return None
    if isinstance(key, int):
        return key
    if isinstance(key, str) and _INDEX_PATTERN.fullmatch(key):
        return int(key)
    return None


def is_sequence(container: Any) -> bool:
    """True for list-like containers; str/bytes and mappings excluded."""
    return (
        isinstance(container, Sequence)
        and not isinstance(container, (str, bytes, bytearray))
        and not isinstance(container, Mapping)
    )
