"""
ProxyTrace

Transparent interception for mappings, sequences and objects. A wrapper
routes every read, write, call and delete through a pluggable policy.
"""

__version__ = "0.1.0"

from proxytrace.container import InterceptedContainer, invoke, read, remove, wrap, write
from proxytrace.errors import (
    InterceptionError,
    ReservedKeyError,
    SchemaViolationError,
    TypeMismatchError,
    UnknownPropertyError,
    WriteRejectedError,
)
from proxytrace.inspector import ABSENT, type_of
from proxytrace.models import CallRecord, InterceptionEvent, OperationType, PrimitiveKind, WriteResult
from proxytrace.policies import (
    CallLoggingPolicy,
    ChainingPolicy,
    InterceptionPolicy,
    NegativeIndexPolicy,
    ObservablePolicy,
    ValidationPolicy,
)

__all__ = [
    "ABSENT",
    "CallLoggingPolicy",
    "CallRecord",
    "ChainingPolicy",
    "InterceptedContainer",
    "InterceptionError",
    "InterceptionEvent",
    "InterceptionPolicy",
    "NegativeIndexPolicy",
    "ObservablePolicy",
    "OperationType",
    "PrimitiveKind",
    "ReservedKeyError",
    "SchemaViolationError",
    "TypeMismatchError",
    "UnknownPropertyError",
    "ValidationPolicy",
    "WriteRejectedError",
    "WriteResult",
    "invoke",
    "read",
    "remove",
    "type_of",
    "wrap",
    "write",
]
