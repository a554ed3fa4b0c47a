"""
Interception Errors

Exception taxonomy raised by the interception core and its policies.
"""

from typing import Any


class InterceptionError(Exception):
    """Base class for all interception failures."""
    pass


class SchemaViolationError(InterceptionError):
    """A write or read broke the implicit schema of a validated container."""

    def __init__(self, message: str, key: Any = None):
        super().__init__(message)
        self.key = key


class UnknownPropertyError(SchemaViolationError, LookupError, AttributeError):
    """
    Access to a key that is not part of the schema.

    Also an AttributeError so that hasattr() and getattr() with a
    default keep working on wrapped containers.
    """
    pass


class TypeMismatchError(SchemaViolationError, TypeError):
    """Write whose value kind differs from the kind of the current value."""

    def __init__(self, message: str, key: Any = None, expected: str = "", actual: str = ""):
        super().__init__(message, key=key)
        self.expected = expected
        self.actual = actual


class WriteRejectedError(InterceptionError):
    """A policy refused a write or delete issued through attribute/item syntax."""

    def __init__(self, result: Any):
        super().__init__(result.reason or f"Write to {result.key!r} rejected")
        self.result = result


class ReservedKeyError(InterceptionError, ValueError):
    """The container already defines a member the policy reserves for itself."""
    pass
