"""Navigation history collaborator.

The router pushes or replaces entries when it navigates and reloads the
current path when the host reports a back/forward traversal. ``History``
is the protocol it consumes; ``MemoryHistory`` is an in-process stack
that behaves like the browser's session history.
"""

from collections.abc import Callable
from typing import Protocol, runtime_checkable

type PopListener = Callable[[str], None]


@runtime_checkable
class History(Protocol):
    """What the router needs from the host's session history."""

    def current_path(self) -> str: ...

    def push(self, path: str) -> None: ...

    def replace(self, path: str) -> None: ...

    def subscribe(self, listener: PopListener) -> Callable[[], None]:
        """Call *listener* with the new current path after back/forward."""
        ...


class MemoryHistory:
    """Session history kept in memory.

    ``push()`` drops any forward entries, ``replace()`` overwrites the
    current entry, and neither notifies subscribers. ``back()``,
    ``forward()`` and ``go()`` move the cursor and notify subscribers with
    the path now current, like a browser ``popstate``.
    """

    __slots__ = ("_entries", "_index", "_listeners")

    def __init__(self, initial: str = "/") -> None:
        self._entries: list[str] = [initial]
        self._index = 0
        self._listeners: list[PopListener] = []

    @property
    def entries(self) -> tuple[str, ...]:
        return tuple(self._entries)

    @property
    def index(self) -> int:
        return self._index

    def current_path(self) -> str:
        return self._entries[self._index]

    def push(self, path: str) -> None:
        del self._entries[self._index + 1 :]
        self._entries.append(path)
        self._index += 1

    def replace(self, path: str) -> None:
        self._entries[self._index] = path

    def subscribe(self, listener: PopListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def back(self) -> bool:
        return self.go(-1)

    def forward(self) -> bool:
        return self.go(1)

    def go(self, delta: int) -> bool:
        """Move *delta* entries. Returns ``False`` (and notifies no one) when
        the target is out of range."""
        target = self._index + delta
        if delta == 0 or not 0 <= target < len(self._entries):
            return False
        self._index = target
        path = self.current_path()
        for listener in list(self._listeners):
            listener(path)
        return True
