"""In-memory host document.

A small element tree with the subset of DOM behaviour the render-tree
layer relies on: ordered children, ``insert_before`` / ``append_child`` /
``remove``, text, id, class list, attributes, and click/input handlers.
It lets views be mounted, clicked, and serialized without a browser.

Usage::

    document = Document()
    root = document.create_element("div")
    root.id = "root"
    document.body.append_child(root)

    document.get_element_by_id("root") is root   # True
    document.body.inner_html                    # '<div id="root"></div>'
"""

from __future__ import annotations

import html
from collections.abc import Callable, Iterator
from typing import Any

type EventHandler = Callable[["Event"], Any]

# Elements serialized without a closing tag
_VOID_TAGS = frozenset({"br", "hr", "img", "input", "link", "meta", "source", "wbr"})


class Event:
    """A dispatched event. Handlers may call ``prevent_default()``."""

    __slots__ = ("default_prevented", "target", "type")

    def __init__(self, type: str, target: Element) -> None:  # noqa: A002
        self.type = type
        self.target = target
        self.default_prevented = False

    def prevent_default(self) -> None:
        self.default_prevented = True


class ClassList:
    """Ordered set of CSS class names."""

    __slots__ = ("_names",)

    def __init__(self) -> None:
        self._names: dict[str, None] = {}

    def add(self, *names: str) -> None:
        for name in names:
            self._names[name] = None

    def remove(self, *names: str) -> None:
        for name in names:
            self._names.pop(name, None)

    def contains(self, name: str) -> bool:
        return name in self._names

    def __contains__(self, name: object) -> bool:
        return name in self._names

    def __iter__(self) -> Iterator[str]:
        return iter(self._names)

    def __len__(self) -> int:
        return len(self._names)

    def __repr__(self) -> str:
        return f"ClassList({list(self._names)!r})"


class Element:
    """A host element. Owns its children; knows its parent."""

    __slots__ = (
        "_text",
        "attributes",
        "children",
        "class_list",
        "handlers",
        "id",
        "parent",
        "tag",
        "value",
    )

    def __init__(self, tag: str) -> None:
        self.tag = tag
        self.id: str = ""
        self.class_list = ClassList()
        self.attributes: dict[str, str] = {}
        self.children: list[Element] = []
        self.parent: Element | None = None
        self.handlers: dict[str, EventHandler] = {}
        self.value: str = ""
        self._text: str | None = None

    # -- Tree --

    def append_child(self, child: Element) -> Element:
        return self.insert_before(child, None)

    def insert_before(self, child: Element, ref: Element | None) -> Element:
        """Insert *child* before *ref*, or append when *ref* is ``None``.

        *child* is detached from its current parent first. Raises
        ``ValueError`` if *ref* is not a child of this element.
        """
        if ref is not None and ref.parent is not self:
            msg = f"Reference node <{ref.tag}> is not a child of <{self.tag}>"
            raise ValueError(msg)

        child.remove()
        # Setting structured children replaces any plain text
        self._text = None

        if ref is None:
            self.children.append(child)
        else:
            self.children.insert(self.children.index(ref), child)
        child.parent = self
        return child

    def remove(self) -> None:
        """Detach from the parent. No-op when already detached."""
        if self.parent is None:
            return
        self.parent.children.remove(self)
        self.parent = None

    def iter(self) -> Iterator[Element]:
        """Depth-first iteration over this element and its descendants."""
        yield self
        for child in self.children:
            yield from child.iter()

    # -- Content --

    @property
    def text(self) -> str:
        if self._text is not None:
            return self._text
        return "".join(child.text for child in self.children)

    @text.setter
    def text(self, value: str) -> None:
        for child in list(self.children):
            child.parent = None
        self.children.clear()
        self._text = value

    def set_attribute(self, name: str, value: str) -> None:
        self.attributes[name] = value

    def get_attribute(self, name: str) -> str | None:
        return self.attributes.get(name)

    # -- Events --

    def on(self, event_type: str, handler: EventHandler | None) -> None:
        if handler is None:
            self.handlers.pop(event_type, None)
        else:
            self.handlers[event_type] = handler

    def dispatch(self, event_type: str) -> Event:
        event = Event(event_type, self)
        handler = self.handlers.get(event_type)
        if handler is not None:
            handler(event)
        return event

    def click(self) -> Event:
        return self.dispatch("click")

    def input(self, value: str) -> Event:
        self.value = value
        return self.dispatch("input")

    # -- Serialization --

    def _attribute_items(self) -> list[tuple[str, str]]:
        items: list[tuple[str, str]] = []
        if self.id:
            items.append(("id", self.id))
        if len(self.class_list):
            items.append(("class", " ".join(self.class_list)))
        items.extend(self.attributes.items())
        return items

    @property
    def inner_html(self) -> str:
        if self._text is not None:
            return html.escape(self._text, quote=False)
        return "".join(child.outer_html for child in self.children)

    @property
    def outer_html(self) -> str:
        attrs = "".join(
            f' {name}="{html.escape(value, quote=True)}"' for name, value in self._attribute_items()
        )
        if self.tag in _VOID_TAGS:
            return f"<{self.tag}{attrs}>"
        return f"<{self.tag}{attrs}>{self.inner_html}</{self.tag}>"

    def __repr__(self) -> str:
        return f"<Element {self.tag}{f' id={self.id!r}' if self.id else ''} children={len(self.children)}>"


class Document:
    """Host document: a ``body`` element and an element factory."""

    __slots__ = ("body",)

    def __init__(self) -> None:
        self.body = Element("body")

    def create_element(self, tag: str) -> Element:
        return Element(tag)

    def get_element_by_id(self, element_id: str) -> Element | None:
        for element in self.body.iter():
            if element.id == element_id:
                return element
        return None
