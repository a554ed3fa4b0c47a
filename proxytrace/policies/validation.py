"""
Validation Policy

Enforces a closed, type-stable schema. The key set present at wrap
time and the kind of each current value are the schema; there is no
separate schema object.
"""

from typing import Any

from proxytrace.access import has_member, read_member, write_member
from proxytrace.errors import TypeMismatchError, UnknownPropertyError
from proxytrace.inspector import type_of
from proxytrace.models import WriteResult
from proxytrace.policies.base import InterceptionPolicy


class ValidationPolicy(InterceptionPolicy):
    """
    Rejects access to unknown keys and writes that change a value's kind.

    Usage:
        user = wrap({"name": "", "age": 0, "is_active": False}, ValidationPolicy())
        user.age = 25        # ok
        user.age = "25"      # TypeMismatchError
        user.nickname = "x"  # UnknownPropertyError

    Kinds are never coerced: a boolean field does not accept 1, and a
    number field does not accept True.
    """

    name = "validation"

    def on_read(self, container: Any, key: Any, proxy: Any) -> Any:
        self._require_known(container, key, "exist on the object")
        return read_member(container, key)

    def on_write(self, container: Any, key: Any, value: Any, proxy: Any) -> WriteResult:
        self._require_known(container, key, "exist on the schema")

        expected = type_of(read_member(container, key))
        actual = type_of(value)
        if actual != expected:
            raise TypeMismatchError(
                f"Property {key!r} must be of type {expected.value}, got {actual.value}",
                key=key,
                expected=expected.value,
                actual=actual.value,
            )

        write_member(container, key, value)
        return WriteResult.ok(key)

    def on_delete(self, container: Any, key: Any, proxy: Any) -> WriteResult:
        self._require_known(container, key, "exist on the schema")
        return WriteResult.rejected(key, f"Property {key!r} cannot be removed from the schema")

    def _require_known(self, container: Any, key: Any, what: str) -> None:
        if not has_member(container, key):
            raise UnknownPropertyError(f"Property {key!r} does not {what}", key=key)
