"""
Policy Base

Common base for interception policies.

A policy may define any of these hooks; the container passes an
operation straight through to the raw target when a hook is missing:

    on_read(container, key, proxy) -> value
    on_write(container, key, value, proxy) -> WriteResult
    on_invoke(container, key, args, kwargs, proxy) -> result
    on_delete(container, key, proxy) -> WriteResult

``proxy`` is the wrapper the operation came through. Policies may
return it but must never return ``container`` to the caller.
"""

from typing import Any


class InterceptionPolicy:
    """
    Base class for interception policies.

    Tracks how many operations were routed through the policy and how
    many of them were rejected by the policy or failed natively.
    """

    name: str = "policy"

    def __init__(self):
        self._operation_count = 0
        self._rejected_count = 0
        self._failed_count = 0

    def check_container(self, container: Any) -> None:
        """Refuse containers the policy cannot serve. Default accepts all."""
        return None

    def record_operation(self, accepted: bool, success: bool = True) -> None:
        self._operation_count += 1
        if not accepted:
            self._rejected_count += 1
        elif not success:
            self._failed_count += 1

    @property
    def stats(self) -> dict:
        """Get policy statistics."""
        return {
            "operation_count": self._operation_count,
            "rejected_count": self._rejected_count,
            "failed_count": self._failed_count,
        }

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
