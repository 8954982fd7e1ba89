"""Magnolia application context.

One ``Magnolia`` object ties a host document, a session history, and a
router together. It is created by the caller and passed to whatever needs
it; there is no module-level instance.

Usage::

    app = Magnolia(document, history)
    app.router().route("/", home_view)
    app.router().fallback_to(not_found_view)

    app.compose_view_layout([ViewSlot(header_view), RouterSlot(), ViewSlot(footer_view)])
    app.init()

``init()`` mounts the layout in order: view slots are built and mounted
into the root once, and the router slot is where routed views appear.
Without a layout the router owns the whole root.

Lazy routes need a task group, which ``run()`` provides::

    async with app.run():
        ...
"""

from __future__ import annotations

import contextlib
import logging
from collections.abc import AsyncIterator, Sequence
from dataclasses import dataclass

from magnolia.config import AppConfig
from magnolia.errors import ConfigurationError
from magnolia.host.document import Document, Element
from magnolia.host.history import History
from magnolia.routing.route import ViewProducer
from magnolia.routing.router import Router
from magnolia.ui.view import ViewData

logger = logging.getLogger("magnolia.app")


@dataclass(frozen=True, slots=True)
class RouterSlot:
    """Layout entry marking where routed views are mounted."""


@dataclass(frozen=True, slots=True)
class ViewSlot:
    """Layout entry for a view mounted once at init time."""

    producer: ViewProducer


type LayoutEntry = RouterSlot | ViewSlot


class Magnolia:
    """The application context.

    Mutable during setup (route registration, layout composition).
    ``init()`` runs once per instance.
    """

    __slots__ = ("_initialized", "_layout", "_router", "config", "document", "history", "root")

    def __init__(
        self,
        document: Document,
        history: History,
        config: AppConfig | None = None,
    ) -> None:
        self.config: AppConfig = config or AppConfig()
        self.document = document
        self.history = history

        root = document.get_element_by_id(self.config.root_id)
        if root is None:
            msg = f"Application root element #{self.config.root_id} not found in the document"
            raise ConfigurationError(msg)
        self.root: Element = root

        self._router = Router(
            root,
            history,
            discard_stale_loads=self.config.discard_stale_loads,
            placeholder_tag=self.config.placeholder_tag,
        )
        self._layout: list[LayoutEntry] | None = None
        self._initialized = False

    def router(self) -> Router:
        return self._router

    def compose_view_layout(self, entries: Sequence[LayoutEntry]) -> None:
        """Set the top-level layout mounted by ``init()``."""
        self._layout = list(entries)

    def init(self) -> None:
        """Mount the layout and load the current path.

        Raises ``ConfigurationError`` when called a second time.
        """
        if self._initialized:
            msg = "Magnolia.init() was already called"
            raise ConfigurationError(msg)
        self._initialized = True

        if self.config.configure_logging:
            _configure_logging(self.config.log_level)

        path = self.config.initial_path or self.history.current_path()
        logger.debug("Initializing at %r", path)

        if self._layout is None:
            self._router.navigate(path, replace=True)
            return

        for entry in self._layout:
            match entry:
                case RouterSlot():
                    # Lazy routes mount later; hold the slot position until then
                    self._router.mark_slot()
                    self._router.navigate(path, replace=True)
                case ViewSlot(producer=producer):
                    producer(ViewData.empty()).mount(self.root)

    @contextlib.asynccontextmanager
    async def run(self) -> AsyncIterator[Magnolia]:
        """Initialize inside a task group that serves lazy routes."""
        async with self._router.running():
            self.init()
            yield self


def _configure_logging(level: str) -> None:
    magnolia_logger = logging.getLogger("magnolia")
    magnolia_logger.setLevel(level.upper())
    if not magnolia_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
        magnolia_logger.addHandler(handler)
