"""Reactive state — value cells with equality-gated change notification.

A ``ReactiveState`` holds one value. ``set()`` notifies listeners
synchronously, in registration order, unless the optional equality
function reports the new value equal to the old one. ``map()`` derives a
new state that follows its source through a one-way subscription.

Example::

    counter = state(0)
    label = counter.map(lambda n: f"Clicked {n} times")

    unsubscribe = label.bind(print)
    counter.set(1)        # prints "Clicked 1 times"
    unsubscribe()

    label.unbind()        # detach from counter; label keeps its last value

Derived states are never released automatically. Whoever owns a
``MappedState`` calls ``unbind()`` when it is discarded, otherwise the
source keeps a live listener for it.

Notification iterates a snapshot of the listener list, so a listener may
unsubscribe itself (or others) mid-notification without disturbing the
pass in flight. Nested ``set()`` calls from a listener are allowed and
each runs its own full notification pass immediately.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

type StateListener[T] = Callable[[T], None]
type ChangeListener[T] = Callable[[T, T], None]
type EqualityFunction[T] = Callable[[T, T], bool]
type Unsubscribe = Callable[[], None]

logger = logging.getLogger("magnolia.state")


def state[V](value: V, equals: EqualityFunction[V] | None = None) -> ReactiveState[V]:
    """Create a new ``ReactiveState`` holding *value*.

    *equals*, when given, gates notification: ``set(new)`` is a no-op
    whenever ``equals(old, new)`` is true.
    """
    return ReactiveState(value, equals)


def map_state[V, M](
    source: ReactiveState[V],
    fn: Callable[[V], M],
    equals: EqualityFunction[M] | None = None,
) -> MappedState[M, V]:
    """Derive a state whose value is always ``fn(source.get())``."""
    return MappedState(source, fn, equals)


class _Subscription:
    """One registered listener. Identity-based, so the same callable may
    be bound twice and each registration is removed independently."""

    __slots__ = ("active", "callback", "with_old")

    def __init__(self, callback: Callable[..., None], with_old: bool) -> None:
        self.callback = callback
        self.with_old = with_old
        self.active = True


class ReactiveState[V]:
    """A value cell with change notification and derivation."""

    __slots__ = ("_equals", "_subscriptions", "_value")

    def __init__(self, value: V, equals: EqualityFunction[V] | None = None) -> None:
        self._value: V = value
        self._equals: EqualityFunction[V] | None = equals
        self._subscriptions: list[_Subscription] = []

    def get(self) -> V:
        """Return the current value."""
        return self._value

    def set(self, value: V) -> None:
        """Store *value* and notify listeners if it changed.

        Change is decided by the equality function; without one every
        call counts as a change.
        """
        if self._equals is not None and self._equals(self._value, value):
            return

        old_value = self._value
        self._value = value

        for sub in list(self._subscriptions):
            # Removed earlier in this same pass
            if not sub.active:
                continue
            if sub.with_old:
                sub.callback(value, old_value)
            else:
                sub.callback(value)

    def bind(self, listener: StateListener[V]) -> Unsubscribe:
        """Register *listener* for new values.

        Returns a function that removes exactly this registration.
        Calling it more than once is a no-op.
        """
        return self._subscribe(_Subscription(listener, with_old=False))

    def bind_change(self, listener: ChangeListener[V]) -> Unsubscribe:
        """Register *listener* for ``(new_value, old_value)`` pairs."""
        return self._subscribe(_Subscription(listener, with_old=True))

    def map[M](
        self,
        fn: Callable[[V], M],
        equals: EqualityFunction[M] | None = None,
    ) -> MappedState[M, V]:
        """Derive a state that follows ``fn(value)`` until unbound."""
        return MappedState(self, fn, equals)

    @property
    def listener_count(self) -> int:
        """Number of live registrations."""
        return len(self._subscriptions)

    def _subscribe(self, sub: _Subscription) -> Unsubscribe:
        self._subscriptions.append(sub)

        def unsubscribe() -> None:
            if not sub.active:
                return
            sub.active = False
            self._subscriptions.remove(sub)

        return unsubscribe

    def __repr__(self) -> str:
        return f"<{type(self).__name__} value={self._value!r} listeners={len(self._subscriptions)}>"


class MappedState[M, V](ReactiveState[M]):
    """A state kept equal to ``fn(source.get())`` through a subscription.

    The derived state owns its subscription on the source. ``unbind()``
    releases it; afterwards the derived state stops following the source
    but stays readable and settable.
    """

    __slots__ = ("_unbind_fn",)

    def __init__(
        self,
        source: ReactiveState[V],
        fn: Callable[[V], M],
        equals: EqualityFunction[M] | None = None,
    ) -> None:
        super().__init__(fn(source.get()), equals)

        def follow(value: V) -> None:
            self.set(fn(value))

        self._unbind_fn: Unsubscribe | None = source.bind(follow)

    @property
    def bound(self) -> bool:
        """True while the derived state still follows its source."""
        return self._unbind_fn is not None

    def unbind(self) -> None:
        """Detach from the source. Safe to call more than once."""
        if self._unbind_fn is None:
            return

        self._unbind_fn()
        self._unbind_fn = None
        logger.debug("Unbound %r from its source", self)
