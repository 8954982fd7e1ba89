"""Element constructors.

Import the module as ``mg`` and build views from its functions::

    from magnolia.ui import elements as mg

    def home(data: ViewData) -> View:
        box = mg.div()
        mg.h1("Home").child_of(box)
        mg.router_a(router, "/about", "About").child_of(box)
        return mg.compose_view(box)

Router-aware anchors take the router explicitly; there is no global
application instance to reach for.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from magnolia.host.document import Element, Event
from magnolia.ui.node import ChildNodeType, Node
from magnolia.ui.view import View

if TYPE_CHECKING:
    from magnolia.routing.router import Router


class _TextNode(Node):
    """Base for elements that accept optional initial text."""

    __slots__ = ()

    def __init__(self, tag: str, text: str | None = None) -> None:
        super().__init__(Element(tag))
        if text:
            self.text(text)


class Anchor(_TextNode):
    __slots__ = ()

    def __init__(self, url: str, text: str | None = None) -> None:
        super().__init__("a", text)
        self.element.set_attribute("href", url)

    def open_in_new_tab(self) -> Anchor:
        self.element.set_attribute("target", "_blank")
        return self


class RouterAnchor(Anchor):
    """An anchor whose clicks navigate through *router* instead of the host."""

    __slots__ = ()

    def __init__(self, router: Router, url: str, text: str | None = None) -> None:
        super().__init__(url, text)

        def follow(event: Event) -> None:
            event.prevent_default()
            router.navigate(url)

        self.element.on("click", follow)


class Button(_TextNode):
    __slots__ = ()

    def __init__(self, text: str | None = None) -> None:
        super().__init__("button", text)


class Canvas(Node):
    __slots__ = ()

    def __init__(self) -> None:
        super().__init__(Element("canvas"))


class Code(_TextNode):
    __slots__ = ()

    def __init__(self, text: str | None = None) -> None:
        super().__init__("code", text)


class Div(Node):
    __slots__ = ()

    def __init__(self) -> None:
        super().__init__(Element("div"))


class Heading(_TextNode):
    __slots__ = ()

    def __init__(self, level: int, text: str | None = None) -> None:
        if not 1 <= level <= 6:
            msg = f"Heading level must be between 1 and 6, got {level}"
            raise ValueError(msg)
        super().__init__(f"h{level}", text)


class Paragraph(_TextNode):
    __slots__ = ()

    def __init__(self, text: str | None = None) -> None:
        super().__init__("p", text)


class Pre(Node):
    __slots__ = ()

    def __init__(self) -> None:
        super().__init__(Element("pre"))


class Span(_TextNode):
    __slots__ = ()

    def __init__(self, text: str | None = None) -> None:
        super().__init__("span", text)


class Table(Node):
    __slots__ = ()

    def __init__(self) -> None:
        super().__init__(Element("table"))


class TableRow(Node):
    __slots__ = ()

    def __init__(self) -> None:
        super().__init__(Element("tr"))


class TableCell(_TextNode):
    __slots__ = ()

    def __init__(self, text: str | None = None) -> None:
        super().__init__("td", text)


class TableHeadCell(_TextNode):
    __slots__ = ()

    def __init__(self, text: str | None = None) -> None:
        super().__init__("th", text)


class Input(Node):
    __slots__ = ()

    def __init__(self) -> None:
        super().__init__(Element("input"))

    def on_input(self, fn: Callable[[Event], Any]) -> Input:
        self.element.on("input", fn)
        return self


# -- Constructors --


def compose_view(node: ChildNodeType) -> View:
    return View().add_child(node)


def div() -> Div:
    return Div()


def h1(text: str | None = None) -> Heading:
    return Heading(1, text)


def h2(text: str | None = None) -> Heading:
    return Heading(2, text)


def h3(text: str | None = None) -> Heading:
    return Heading(3, text)


def h4(text: str | None = None) -> Heading:
    return Heading(4, text)


def h5(text: str | None = None) -> Heading:
    return Heading(5, text)


def h6(text: str | None = None) -> Heading:
    return Heading(6, text)


def p(text: str | None = None) -> Paragraph:
    return Paragraph(text)


def span(text: str | None = None) -> Span:
    return Span(text)


def code(text: str | None = None) -> Code:
    return Code(text)


def pre() -> Pre:
    return Pre()


def a(url: str, text: str | None = None) -> Anchor:
    return Anchor(url, text)


def router_a(router: Router, url: str, text: str | None = None) -> RouterAnchor:
    return RouterAnchor(router, url, text)


def button(text: str | None = None) -> Button:
    return Button(text)


def canvas() -> Canvas:
    return Canvas()


def input() -> Input:  # noqa: A001
    return Input()


def table() -> Table:
    return Table()


def tr() -> TableRow:
    return TableRow()


def td(text: str | None = None) -> TableCell:
    return TableCell(text)


def th(text: str | None = None) -> TableHeadCell:
    return TableHeadCell(text)
