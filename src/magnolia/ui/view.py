"""Views — the render trees produced by view producers.

A view producer is a function ``(ViewData) -> View``. The router calls it
with the dynamic segments captured from the path::

    def user_view(data: ViewData) -> View:
        return mg.compose_view(mg.h1(f"User {data.path_segments['id']}"))

    router.route("/users/{id}", user_view)
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from magnolia.host.document import Element
from magnolia.ui.node import ChildNodeType, Node


@dataclass(frozen=True, slots=True)
class ViewData:
    """Data handed to a view producer.

    ``path_segments`` maps dynamic segment names to the path text they
    captured. It is read-only; each producer call gets its own copy.
    """

    path_segments: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "path_segments", MappingProxyType(dict(self.path_segments)))

    @classmethod
    def empty(cls) -> ViewData:
        return cls()


class View:
    """A list of top-level nodes mounted side by side into a root element."""

    __slots__ = ("children",)

    def __init__(self) -> None:
        self.children: list[Node] = []

    def mount(self, root: Element, ref: Element | None = None) -> None:
        """Mount every child into *root* before *ref* (append if ``None``).

        A view always mounts at least one element: an empty view gets a
        placeholder ``div`` so later transitions can find its position.
        """
        if not self.children:
            self.add_child(None)

        for child in self.children:
            child.mount(root, ref)

    def unmount(self) -> None:
        """Unmount and forget every child."""
        for child in self.children:
            child.unmount()

        self.children = []

    def add_child(self, node: ChildNodeType) -> View:
        """Add a node or a sequence of nodes.

        ``None`` on its own adds an empty ``div``; ``None`` entries inside a
        sequence are skipped, which keeps conditional expressions simple.
        """
        if node is None:
            self.children.append(Node(Element("div")))
            return self

        if isinstance(node, Node):
            self.children.append(node)
            return self

        for child in node:
            if child is None:
                continue
            self.children.append(child)

        return self

    def first_element(self) -> Element | None:
        """The element of the first child, or ``None`` for an empty view."""
        if not self.children:
            return None
        return self.children[0].element

    def __repr__(self) -> str:
        return f"<View children={len(self.children)}>"
