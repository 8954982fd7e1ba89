"""Render-tree nodes.

A ``Node`` wraps one host element and the child nodes mounted into it.
Builder methods return the node so construction chains::

    label = counter.map(lambda n: f"Clicked {n} times")

    box = mg.div()
    mg.p().bind_text(label).child_of(box)
    mg.button("+").on_click(lambda _event: counter.set(counter.get() + 1)).child_of(box)

Unmounting is recursive: the node's unmount hook fires first, then its
children unmount, then state bindings made through ``bind_*`` are
released, and finally the element is detached from its parent.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

from magnolia.host.document import Element, Event
from magnolia.state import ReactiveState, Unsubscribe

type ChildNode = Node | None
type ChildNodeType = ChildNode | Sequence[ChildNode]


class Node:
    """A render-tree node bound to one host element."""

    __slots__ = ("_bindings", "_children", "_element", "_mount_fn", "_unmount_fn")

    def __init__(self, element: Element) -> None:
        self._element = element
        self._children: list[Node] = []
        self._mount_fn: Callable[[], None] | None = None
        self._unmount_fn: Callable[[], None] | None = None
        self._bindings: list[Unsubscribe] = []

    @property
    def element(self) -> Element:
        return self._element

    @property
    def children(self) -> list[Node]:
        return self._children

    # -- Lifecycle --

    def mount(self, parent: Element, ref: Element | None = None) -> None:
        """Insert the element into *parent* before *ref* (append if ``None``)."""
        parent.insert_before(self._element, ref)

        if self._mount_fn is not None:
            self._mount_fn()

    def unmount(self) -> None:
        """Tear down this subtree and detach the element."""
        if self._unmount_fn is not None:
            self._unmount_fn()

        for child in self._children:
            child.unmount()

        self._release_bindings()
        self._element.remove()

    def on_mount(self, fn: Callable[[], None]) -> Node:
        self._mount_fn = fn
        return self

    def on_unmount(self, fn: Callable[[], None]) -> Node:
        self._unmount_fn = fn
        return self

    def unmount_children(self) -> None:
        for child in self._children:
            child.unmount()

        self._children = []

    # -- Composition --

    def child_of(self, parent: Node) -> Node:
        """Mount this node as the last child of *parent*."""
        parent._mount_child(self)
        return self

    def add_child(self, node: ChildNodeType) -> Node:
        """Mount one node or a sequence of nodes. ``None`` entries are skipped."""
        if node is None:
            return self

        if isinstance(node, Node):
            self._mount_child(node)
            return self

        for child in node:
            if child is None:
                continue
            self._mount_child(child)

        return self

    def _mount_child(self, child: Node) -> None:
        self._children.append(child)
        child.mount(self._element, None)

    # -- Content and attributes --

    def text(self, text: str) -> Node:
        self._element.text = text
        return self

    def bind_text(self, state: ReactiveState[str]) -> Node:
        self.text(state.get())
        self._bindings.append(state.bind(self.text))
        return self

    def style(self, name: str | Sequence[str]) -> Node:
        """Add one CSS class or several."""
        if name is None:
            msg = f"Class name must be defined for component {self._element!r}"
            raise ValueError(msg)

        if isinstance(name, str):
            self._element.class_list.add(name)
            return self

        self._element.class_list.add(*name)
        return self

    def bind_style(self, state: ReactiveState[list[str]]) -> Node:
        """Keep the element's classes in step with *state*.

        Classes present in both the old and new list are left alone; old
        classes missing from the new list are removed.
        """
        self.style(state.get())

        def update(value: list[str], old_value: list[str]) -> None:
            stale = [name for name in old_value if name not in value]
            self._element.class_list.remove(*stale)
            self.style([name for name in value if name not in old_value])

        self._bindings.append(state.bind_change(update))
        return self

    def id(self, id: str) -> Node:  # noqa: A002
        self._element.id = id
        return self

    def bind_id(self, state: ReactiveState[str]) -> Node:
        self.id(state.get())
        self._bindings.append(state.bind(self.id))
        return self

    def attr(self, name: str, value: str) -> Node:
        self._element.set_attribute(name, value)
        return self

    # -- Events --

    def on_click(self, fn: Callable[[Event], Any]) -> Node:
        self._element.on("click", fn)
        return self

    def _release_bindings(self) -> None:
        for unbind in self._bindings:
            unbind()
        self._bindings.clear()

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self._element.tag} children={len(self._children)}>"
