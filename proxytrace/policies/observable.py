"""
Observable Policy

Change notification for wrapped containers. Listeners registered per
key are called after each committed write with (new_value, old_value).
"""

from typing import Any, Callable

from structlog import get_logger

from proxytrace.access import has_member, read_member, write_member
from proxytrace.config import get_settings
from proxytrace.errors import ReservedKeyError
from proxytrace.inspector import ABSENT
from proxytrace.models import WriteResult
from proxytrace.policies.base import InterceptionPolicy

logger = get_logger(__name__)

Listener = Callable[[Any, Any], Any]


class ObservablePolicy(InterceptionPolicy):
    """
    Notifies registered listeners when a key is written.

    Registration is exposed on the wrapper under a reserved member name
    (``on_change`` unless configured otherwise):

        user = wrap({"name": "Alice", "age": 30}, ObservablePolicy())
        user.on_change("age", lambda new, old: print(new, old))
        user.age = 40       # prints 40 30

    Listeners for a key run synchronously, in registration order, after
    the new value is committed. A listener that raises aborts delivery
    to the remaining listeners and the error reaches the writer; the
    committed value is kept. Writes to keys that did not exist pass
    ABSENT as the old value.
    """

    name = "observable"

    def __init__(self, register_key: str | None = None):
        """
        Initialize the policy.

        Args:
            register_key: Member name that exposes ``register`` on the
                wrapper. Defaults to the configured key.
        """
        super().__init__()
        self.register_key = register_key or get_settings().observable_register_key
        self._listeners: dict[Any, list[Listener]] = {}

    def check_container(self, container: Any) -> None:
        if has_member(container, self.register_key):
            raise ReservedKeyError(
                f"Container already defines {self.register_key!r}, which "
                "ObservablePolicy reserves for listener registration; "
                "pass a different register_key"
            )

    def register(self, key: Any, callback: Listener) -> None:
        """
        Add a listener for ``key``.

        The same callback registered twice is called twice per write.
        """
        if not callable(callback):
            raise TypeError(f"Listener for {key!r} must be callable")
        self._listeners.setdefault(key, []).append(callback)
        logger.debug(
            "listener_registered",
            key=repr(key),
            listener_count=len(self._listeners[key]),
        )

    def listeners(self, key: Any) -> tuple[Listener, ...]:
        """Listeners registered for ``key``, in firing order."""
        return tuple(self._listeners.get(key, ()))

    def on_read(self, container: Any, key: Any, proxy: Any) -> Any:
        if key == self.register_key:
            return self.register
        return read_member(container, key)

    def on_write(self, container: Any, key: Any, value: Any, proxy: Any) -> WriteResult:
        if key == self.register_key:
            return WriteResult.rejected(
                key, f"{key!r} is reserved for listener registration"
            )

        old_value = read_member(container, key) if has_member(container, key) else ABSENT
        write_member(container, key, value)

        for callback in self.listeners(key):
            callback(value, old_value)

        return WriteResult.ok(key)
