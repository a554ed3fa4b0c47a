"""
Interception Models

Pydantic models and enums shared by the interception core and policies.
"""

from datetime import datetime, UTC
from enum import Enum
from typing import Any
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class PrimitiveKind(str, Enum):
    """Closed set of value kinds used as the live schema."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    FUNCTION = "function"
    OBJECT = "object"
    UNDEFINED = "undefined"


class OperationType(str, Enum):
    """Kinds of operations routed through a policy."""

    READ = "read"
    WRITE = "write"
    INVOKE = "invoke"
    DELETE = "delete"


class WriteResult(BaseModel):
    """Outcome of a write or delete hook."""

    accepted: bool = Field(
        description="Whether the mutation was committed"
    )

    key: Any = Field(
        default=None,
        description="Key the mutation targeted"
    )

    reason: str | None = Field(
        default=None,
        description="Why the mutation was rejected"
    )

    @classmethod
    def ok(cls, key: Any) -> "WriteResult":
        return cls(accepted=True, key=key)

    @classmethod
    def rejected(cls, key: Any, reason: str) -> "WriteResult":
        return cls(accepted=False, key=key, reason=reason)


class CallRecord(BaseModel):
    """
    A single intercepted invocation.

    Emitted once per call, before the delegate runs. Policies hand
    records to their sink and logger and do not keep them.
    """

    call_id: UUID = Field(
        default_factory=uuid4,
        description="Unique identifier for this call"
    )

    name: str = Field(
        description="Member name that was invoked"
    )

    args: list[Any] = Field(
        default_factory=list,
        description="Positional arguments"
    )

    kwargs: dict[str, Any] = Field(
        default_factory=dict,
        description="Keyword arguments"
    )

    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        description="When the call was intercepted"
    )

    def describe(self) -> str:
        """Human-readable trace line, e.g. ``Calling add with args: [2,3]``."""
        parts = [repr(a) if isinstance(a, str) else str(a) for a in self.args]
        parts.extend(f"{k}={v!r}" for k, v in self.kwargs.items())
        return f"Calling {self.name} with args: [{','.join(parts)}]"


class InterceptionEvent(BaseModel):
    """
    Event describing one operation routed through a wrapper.

    Delivered to the wrapper's event callback, if any.
    """

    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique identifier for this event"
    )

    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        description="When the operation occurred"
    )

    operation: OperationType = Field(
        description="Type of operation"
    )

    key: Any = Field(
        description="Key or member name involved"
    )

    policy: str = Field(
        default="passthrough",
        description="Name of the policy that handled the operation"
    )

    accepted: bool = Field(
        default=True,
        description="Whether the policy let the operation through"
    )

    success: bool = Field(
        default=True,
        description="Whether the operation completed without a native error"
    )

    reason: str | None = Field(
        default=None,
        description="Rejection reason or native error message"
    )
