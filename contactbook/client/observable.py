"""
Observable containers.

A minimal publish/subscribe value holder. Observers are called synchronously,
once with the current value when they subscribe and again on every publish.
There is no queuing and no equality check: every ``set`` is a publish.
"""

from typing import Any, Callable, Dict, Generic, TypeVar

T = TypeVar("T")
S = TypeVar("S")

Observer = Callable[[Any], None]
Unsubscribe = Callable[[], None]


class Readable(Generic[T]):
    def __init__(self, value: T):
        self._value = value
        self._observers: Dict[object, Observer] = {}

    def get(self) -> T:
        return self._value

    def subscribe(self, observer: Observer) -> Unsubscribe:
        """Attach an observer and return a handle that detaches it.

        The handle may be called any number of times.
        """
        token = object()
        self._observers[token] = observer
        observer(self._value)

        def unsubscribe() -> None:
            self._observers.pop(token, None)

        return unsubscribe

    @property
    def observer_count(self) -> int:
        return len(self._observers)

    def _publish(self, value: T) -> None:
        self._value = value
        # Snapshot so observers may detach while being notified
        for observer in list(self._observers.values()):
            observer(value)


class Writable(Readable[T]):
    def set(self, value: T) -> None:
        self._publish(value)

    def update(self, fn: Callable[[T], T]) -> None:
        self._publish(fn(self._value))


class Derived(Readable[T]):
    """Read-only value recomputed every time its source publishes."""

    def __init__(self, source: Readable[S], fn: Callable[[S], T]):
        self._fn = fn
        super().__init__(fn(source.get()))
        self._detach = source.subscribe(self._recompute)

    def _recompute(self, value) -> None:
        self._publish(self._fn(value))

    def close(self) -> None:
        self._detach()
