"""
Call Logging Policy

Records every call made through a wrapped container's callable members.
"""

import functools
from typing import Any, Callable

from structlog import get_logger

from proxytrace.access import read_member
from proxytrace.models import CallRecord
from proxytrace.policies.base import InterceptionPolicy

logger = get_logger(__name__)


class CallLoggingPolicy(InterceptionPolicy):
    """
    Wraps callable members so each invocation is logged before it runs.

    Exactly one CallRecord is emitted per call, before the original
    function executes, so a failing call still leaves a record. The
    original's return value is passed back unchanged.

    Usage:
        records = []
        calc = wrap({"add": lambda a, b: a + b}, CallLoggingPolicy(sink=records.append))
        calc.add(2, 3)      # -> 5, records[0].name == "add"
    """

    name = "call_logging"

    def __init__(self, sink: Callable[[CallRecord], Any] | None = None):
        """
        Initialize the policy.

        Args:
            sink: Receives each CallRecord before the delegate runs.
        """
        super().__init__()
        self.sink = sink

    def on_read(self, container: Any, key: Any, proxy: Any) -> Any:
        value = read_member(container, key)
        if not callable(value):
            return value
        return self._logged(str(key), value)

    def _logged(self, name: str, func: Callable) -> Callable:
        @functools.wraps(func)
        def logged_call(*args, **kwargs):
            self.emit(CallRecord(name=name, args=list(args), kwargs=kwargs))
            return func(*args, **kwargs)

        return logged_call

    def emit(self, record: CallRecord) -> None:
        """Send a record to the logger and the sink."""
        logger.info(
            "call_intercepted",
            name=record.name,
            args=record.args,
            kwargs=record.kwargs,
        )
        if self.sink:
            self.sink(record)
