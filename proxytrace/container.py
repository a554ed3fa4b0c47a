"""
Intercepted Container

Wraps a mapping, sequence or object so that every read, write, call
and delete is routed through an interception policy before it reaches
the wrapped target.
"""

import functools
import inspect
from typing import Any, Callable

from structlog import get_logger

from proxytrace.access import delete_member, read_member, write_member
from proxytrace.config import get_settings
from proxytrace.errors import InterceptionError, WriteRejectedError
from proxytrace.models import InterceptionEvent, OperationType, WriteResult

logger = get_logger(__name__)


class InterceptedContainer:
    """
    Stand-in for a container that routes access through a policy.

    Callers use the wrapper with the target's own syntax:

        proxy = wrap({"name": "", "age": 0}, ValidationPolicy())
        proxy.age = 25          # on_write
        proxy["name"]           # on_read
        proxy.greet("hi")       # on_read, then call

    The wrapper defines no public attributes of its own, so every
    non-dunder name belongs to the target. The raw target is never
    handed back to callers; a read or call that yields it returns the
    wrapper instead.
    """

    __slots__ = ("_ic_target", "_ic_policy", "_ic_event_callback")

    def __init__(
        self,
        container: Any,
        policy: Any = None,
        event_callback: Callable | None = None,
    ):
        """
        Initialize the wrapper.

        Args:
            container: Mapping, sequence or object to wrap.
            policy: Interception policy; None passes everything through.
            event_callback: Receives an InterceptionEvent per operation.
        """
        if policy is not None:
            policy.check_container(container)

        object.__setattr__(self, "_ic_target", container)
        object.__setattr__(self, "_ic_policy", policy)
        object.__setattr__(self, "_ic_event_callback", event_callback)

        logger.debug(
            "container_wrapped",
            container_type=type(container).__name__,
            policy=self._ic_policy_name(),
        )

    # =========================================================================
    # Routed Operations
    # =========================================================================

    def _ic_read(self, key: Any) -> Any:
        target = self._ic_target
        hook = getattr(self._ic_policy, "on_read", None)

        if hook is None:
            value = self._ic_run(OperationType.READ, key, read_member, target, key)
        else:
            value = self._ic_run(OperationType.READ, key, hook, target, key, self)

        self._ic_report(OperationType.READ, key)
        if value is target:
            return self
        if inspect.isroutine(value):
            return self._ic_shielded(value)
        return value

    def _ic_write(self, key: Any, value: Any) -> WriteResult:
        target = self._ic_target
        hook = getattr(self._ic_policy, "on_write", None)

        if hook is None:
            self._ic_run(OperationType.WRITE, key, write_member, target, key, value)
            result = WriteResult.ok(key)
        else:
            result = self._ic_run(OperationType.WRITE, key, hook, target, key, value, self)

        self._ic_report(OperationType.WRITE, key, result.accepted, result.reason)
        return result

    def _ic_invoke(self, key: Any, args: tuple, kwargs: dict) -> Any:
        target = self._ic_target
        hook = getattr(self._ic_policy, "on_invoke", None)

        if hook is None:
            # Reading through on_read lets read-time wrappers apply to calls.
            member = self._ic_read(key)
            if not callable(member):
                raise TypeError(f"Member {key!r} is not callable")
            result = member(*args, **kwargs)
        else:
            result = self._ic_run(OperationType.INVOKE, key, hook, target, key, args, kwargs, self)
            self._ic_report(OperationType.INVOKE, key)

        return self if result is target else result

    def _ic_delete(self, key: Any) -> WriteResult:
        target = self._ic_target
        hook = getattr(self._ic_policy, "on_delete", None)

        if hook is None:
            self._ic_run(OperationType.DELETE, key, delete_member, target, key)
            result = WriteResult.ok(key)
        else:
            result = self._ic_run(OperationType.DELETE, key, hook, target, key, self)

        self._ic_report(OperationType.DELETE, key, result.accepted, result.reason)
        return result

    # =========================================================================
    # Helper Methods
    # =========================================================================

    def _ic_run(self, operation: OperationType, key: Any, func: Callable, *args) -> Any:
        """Run a hook or native access, reporting rejections and failures."""
        try:
            return func(*args)
        except InterceptionError as e:
            self._ic_report(operation, key, accepted=False, reason=str(e))
            raise
        except Exception as e:
            self._ic_report(operation, key, success=False, reason=f"{type(e).__name__}: {e}")
            raise

    def _ic_shielded(self, func: Callable) -> Callable:
        """Wrap a routine so a call returning the raw target yields the wrapper."""
        target = self._ic_target

        @functools.wraps(func)
        def shielded_call(*args, **kwargs):
            result = func(*args, **kwargs)
            return self if result is target else result

        return shielded_call

    def _ic_policy_name(self) -> str:
        policy = self._ic_policy
        if policy is None:
            return "passthrough"
        return getattr(policy, "name", type(policy).__name__)

    def _ic_report(
        self,
        operation: OperationType,
        key: Any,
        accepted: bool = True,
        reason: str | None = None,
        success: bool = True,
    ) -> None:
        """Count, log and publish a routed operation."""
        policy = self._ic_policy
        if policy is not None and hasattr(policy, "record_operation"):
            policy.record_operation(accepted, success=success)

        policy_name = self._ic_policy_name()

        if not accepted:
            logger.warning(
                "operation_rejected",
                operation=operation.value,
                key=repr(key),
                policy=policy_name,
                reason=reason,
            )
        elif not success:
            logger.warning(
                "operation_failed",
                operation=operation.value,
                key=repr(key),
                policy=policy_name,
                error=reason,
            )
        else:
            log_method = logger.info if get_settings().debug else logger.debug
            log_method(
                "operation_routed",
                operation=operation.value,
                key=repr(key),
                policy=policy_name,
            )

        if self._ic_event_callback:
            self._ic_event_callback(InterceptionEvent(
                operation=operation,
                key=key,
                policy=policy_name,
                accepted=accepted,
                success=success,
                reason=reason,
            ))

    # =========================================================================
    # Python Syntax
    # =========================================================================

    def __getattr__(self, name: str) -> Any:
        # Dunder lookups and our own slots never reach the target.
        if name.startswith("_ic_") or (name.startswith("__") and name.endswith("__")):
            raise AttributeError(name)
        try:
            return self._ic_read(name)
        except KeyError as e:
            raise AttributeError(
                f"{type(self._ic_target).__name__!r} target has no member {name!r}"
            ) from e

    def __setattr__(self, name: str, value: Any) -> None:
        result = self._ic_write(name, value)
        if not result.accepted:
            raise WriteRejectedError(result)

    def __delattr__(self, name: str) -> None:
        result = self._ic_delete(name)
        if not result.accepted:
            raise WriteRejectedError(result)

    def __getitem__(self, key: Any) -> Any:
        return self._ic_read(key)

    def __setitem__(self, key: Any, value: Any) -> None:
        result = self._ic_write(key, value)
        if not result.accepted:
            raise WriteRejectedError(result)

    def __delitem__(self, key: Any) -> None:
        result = self._ic_delete(key)
        if not result.accepted:
            raise WriteRejectedError(result)

    def __len__(self) -> int:
        return len(self._ic_target)

    def __iter__(self):
        return iter(self._ic_target)

    def __contains__(self, item: Any) -> bool:
        return item in self._ic_target

    def __bool__(self) -> bool:
        return bool(self._ic_target)

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, InterceptedContainer):
            other = other._ic_target
        return self._ic_target == other

    __hash__ = None

    def __str__(self) -> str:
        return str(self._ic_target)

    def __repr__(self) -> str:
        return f"<InterceptedContainer policy={self._ic_policy_name()} target={self._ic_target!r}>"


def wrap(
    container: Any,
    policy: Any = None,
    event_callback: Callable | None = None,
) -> InterceptedContainer:
    """
    Wrap a container behind an interception policy.

    Args:
        container: Mapping, sequence or object to wrap.
        policy: Interception policy; None passes everything through.
        event_callback: Receives an InterceptionEvent per operation.

    Returns:
        InterceptedContainer: The wrapper callers should hold instead.
    """
    return InterceptedContainer(container, policy, event_callback)


def _require_proxy(proxy: Any) -> InterceptedContainer:
    if not isinstance(proxy, InterceptedContainer):
        raise TypeError(f"Expected an InterceptedContainer, got {type(proxy).__name__}")
    return proxy


def read(proxy: InterceptedContainer, key: Any) -> Any:
    """Read ``key`` through the proxy's policy."""
    return _require_proxy(proxy)._ic_read(key)


def write(proxy: InterceptedContainer, key: Any, value: Any) -> WriteResult:
    """
    Write ``key`` through the proxy's policy.

    Unlike ``proxy[key] = value``, a rejected write is returned rather
    than raised. Policy errors (schema violations) still raise.
    """
    return _require_proxy(proxy)._ic_write(key, value)


def invoke(proxy: InterceptedContainer, key: Any, *args, **kwargs) -> Any:
    """Call member ``key`` through the proxy's policy."""
    return _require_proxy(proxy)._ic_invoke(key, args, kwargs)


def remove(proxy: InterceptedContainer, key: Any) -> WriteResult:
    """Delete ``key`` through the proxy's policy, returning the outcome."""
    return _require_proxy(proxy)._ic_delete(key)
