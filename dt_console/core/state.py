import logging
from typing import Callable, Generic, TypeVar

log = logging.getLogger(__name__)

T = TypeVar("T")


class StateHolder(Generic[T]):
    """Holds one value and notifies subscribers when it changes.

    Setting a value equal to the current one is not a transition and
    does not notify.
    """

    def __init__(self, initial: T):
        self._value = initial
        self._subscribers: list[Callable[[T], None]] = []

    @property
    def value(self) -> T:
        return self._value

    def set(self, value: T) -> bool:
        if value == self._value:
            return False
        self._value = value
        for callback in list(self._subscribers):
            try:
                callback(value)
            except Exception:
                log.exception("State subscriber %r failed", callback)
        return True

    def subscribe(self, callback: Callable[[T], None]) -> Callable[[], None]:
        """Register a callback, returns a function removing it."""
        self._subscribers.append(callback)

        def unsubscribe():
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe
