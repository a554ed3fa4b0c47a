"""
Chaining Policy

Permissive fluent interface: every member read yields a callable, and
calls to missing methods are recorded and skipped instead of raising.
"""

from typing import Any, Callable

from structlog import get_logger

from proxytrace.access import read_member
from proxytrace.config import get_settings
from proxytrace.models import CallRecord
from proxytrace.policies.base import InterceptionPolicy

logger = get_logger(__name__)


class ChainingPolicy(InterceptionPolicy):
    """
    Keeps method chains alive, even through methods that do not exist.

    - A real method that returns its receiver yields the wrapper, so
      the next call in the chain is intercepted too.
    - A real method that returns anything else ends the chain with
      that value.
    - A missing or non-callable member yields a no-op that reports
      the attempt and returns the wrapper.

    Usage:
        text = wrap(ChainableString("Hello"), ChainingPolicy())
        text.append(" World").make_upper_case().prepend(">>> ").to_string()

    The trade-off is deliberate: typos in method names are swallowed
    rather than raised. Use ``ignored_calls`` or a sink to spot them.
    """

    name = "chaining"

    def __init__(
        self,
        sink: Callable[[CallRecord], Any] | None = None,
        report_unknown: bool | None = None,
    ):
        """
        Initialize the policy.

        Args:
            sink: Receives a CallRecord for each swallowed call.
            report_unknown: Log swallowed calls. Defaults to settings.
        """
        super().__init__()
        self.sink = sink
        self.report_unknown = (
            get_settings().report_unknown_chain_calls
            if report_unknown is None else report_unknown
        )
        self.ignored_calls = 0

    def on_read(self, container: Any, key: Any, proxy: Any) -> Callable:
        try:
            member = read_member(container, key)
        except (LookupError, AttributeError):
            return self._ignored(str(key), proxy)
        if callable(member):
            return self._chained(container, member, proxy)
        return self._ignored(str(key), proxy)

    def _chained(self, container: Any, member: Callable, proxy: Any) -> Callable:
        def chained_call(*args, **kwargs):
            result = member(*args, **kwargs)
            return proxy if result is container else result

        return chained_call

    def _ignored(self, name: str, proxy: Any) -> Callable:
        def ignored_call(*args, **kwargs):
            self.ignored_calls += 1
            record = CallRecord(name=name, args=list(args), kwargs=kwargs)
            if self.report_unknown:
                logger.info(
                    "chain_call_ignored",
                    name=record.name,
                    args=record.args,
                    kwargs=record.kwargs,
                )
            if self.sink:
                self.sink(record)
            return proxy

        return ignored_call
