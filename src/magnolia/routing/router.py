"""Navigation controller — path to view resolution and view transitions.

Usage::

    router = Router(root, history)
    router.route("/", home_view)
    router.route("/users/{id}", user_view)
    router.route_lazy("/reports", "myapp.views.reports:reports_view")
    router.fallback_to(not_found_view)

    async with router.running():
        router.navigate("/users/42")

A transition unmounts the active view and mounts the new one at the
same position inside the root element. A transient reference element is
placed before the old view's first element so the new view lands where
the old one was, even when the root holds other content.

Lazy routes suspend: ``load()`` returns before the view mounts, and the
mount happens when the loader finishes inside the attached task group.
Each ``load()`` bumps a generation counter; a lazy resolution that
finishes after a newer navigation fills the route cache but does not
mount (unless ``discard_stale_loads=False``).

When no view is active, the next view mounts at the slot marker if one
is set (``mark_slot()``, or the position left by a producer that raised).
"""

from __future__ import annotations

import contextlib
import logging
from collections.abc import AsyncIterator, Callable

import anyio
from anyio.abc import TaskGroup

from magnolia.errors import ConfigurationError, Unroutable
from magnolia.host.document import Element
from magnolia.host.history import History
from magnolia.routing.lazy import resolve_loader
from magnolia.routing.path import normalize_path
from magnolia.routing.route import ActiveView, EagerView, LazyView, ViewLoader, ViewProducer
from magnolia.routing.table import RouteTable
from magnolia.ui.view import View, ViewData

logger = logging.getLogger("magnolia.router")

type LoadCallback = Callable[[str], None]


class _PendingLoad:
    """A loader resolution in progress, awaited by concurrent navigations."""

    __slots__ = ("done", "producer")

    def __init__(self) -> None:
        self.done = anyio.Event()
        self.producer: ViewProducer | None = None


class Router:
    """Owns the route table and the single active view for one root element."""

    __slots__ = (
        "_active",
        "_discard_stale_loads",
        "_generation",
        "_history",
        "_inflight",
        "_load_callbacks",
        "_placeholder_tag",
        "_root",
        "_slot_marker",
        "_table",
        "_task_group",
        "_unsubscribe_history",
    )

    def __init__(
        self,
        root: Element,
        history: History,
        *,
        discard_stale_loads: bool = True,
        placeholder_tag: str = "div",
    ) -> None:
        self._root = root
        self._history = history
        self._table = RouteTable()
        self._active: ActiveView | None = None
        self._load_callbacks: list[LoadCallback] = []
        self._discard_stale_loads = discard_stale_loads
        self._placeholder_tag = placeholder_tag
        self._slot_marker: Element | None = None

        # Lazy loading
        self._task_group: TaskGroup | None = None
        self._inflight: dict[LazyView, _PendingLoad] = {}
        self._generation = 0

        # Back/forward traversal reloads without touching history
        self._unsubscribe_history: Callable[[], None] | None = history.subscribe(self.load)

    # -- Registration --

    def route(self, template: str, producer: ViewProducer) -> None:
        """Register *producer* for *template*. Last registration wins."""
        normalized = self._table.add(template, EagerView(producer))
        logger.debug("Registered route %r", normalized)

    def route_lazy(self, template: str, loader: ViewLoader) -> None:
        """Register a loader that yields the producer on first navigation."""
        normalized = self._table.add(template, LazyView(loader))
        logger.debug("Registered lazy route %r", normalized)

    def fallback_to(self, producer: ViewProducer) -> None:
        """Set the view used when no route matches."""
        self._table.set_fallback(producer)

    def on_router_load(self, fn: LoadCallback) -> None:
        """Call *fn* with the literal path after every successful mount."""
        self._load_callbacks.append(fn)

    # -- Navigation --

    def navigate(self, path: str, replace: bool = False) -> None:
        """Record *path* in history, then load it."""
        if replace:
            self._history.replace(path)
        else:
            self._history.push(path)

        self.load(path)

    def load(self, path: str) -> None:
        """Resolve *path* and mount its view.

        Raises ``Unroutable`` if nothing matches and there is no fallback,
        and ``UnsupportedPattern`` if a wildcard template is scanned.
        """
        resolution = self._table.resolve(path)
        if resolution is None:
            raise Unroutable(path)

        self._generation += 1
        data = ViewData(resolution.path_segments)
        descriptor = resolution.descriptor
        logger.debug("Resolved %r via %s match", path, resolution.kind.value)

        if isinstance(descriptor, EagerView):
            self._mount_view(path, descriptor.producer, data)
            return

        # Fallbacks are always eager, so lazy resolutions carry a template
        self._start_lazy(resolution.template or normalize_path(path), descriptor, path, data)

    # -- Lazy loading --

    def attach(self, task_group: TaskGroup) -> None:
        """Run lazy resolutions in *task_group*."""
        self._task_group = task_group

    def detach(self) -> None:
        self._task_group = None

    @contextlib.asynccontextmanager
    async def running(self) -> AsyncIterator[Router]:
        """Open a task group for lazy routes for the duration of the block.

        Loader failures propagate out of the block.
        """
        async with anyio.create_task_group() as tg:
            self.attach(tg)
            try:
                yield self
            finally:
                self.detach()

    def _start_lazy(self, template: str, descriptor: LazyView, path: str, data: ViewData) -> None:
        if self._task_group is None:
            msg = (
                f"Route {template!r} is lazy but the router has no task group. "
                "Navigate inside 'async with router.running()' or call Router.attach()."
            )
            raise ConfigurationError(msg)

        self._task_group.start_soon(self._load_lazy, template, descriptor, path, data, self._generation)

    async def _load_lazy(
        self,
        template: str,
        descriptor: LazyView,
        path: str,
        data: ViewData,
        generation: int,
    ) -> None:
        producer = await self._resolve_lazy(template, descriptor)
        if producer is None:
            return

        if self._discard_stale_loads and generation != self._generation:
            logger.info("Discarding lazy view for %r; a newer navigation superseded it", path)
            return

        self._mount_view(path, producer, data)

    async def _resolve_lazy(self, template: str, descriptor: LazyView) -> ViewProducer | None:
        """Resolve *descriptor*'s loader once, sharing the result with concurrent callers.

        Returns ``None`` to a waiter whose shared resolution failed; the
        failure itself propagates from the first caller only.
        """
        pending = self._inflight.get(descriptor)
        if pending is not None:
            await pending.done.wait()
            return pending.producer

        pending = _PendingLoad()
        self._inflight[descriptor] = pending
        try:
            producer = await resolve_loader(descriptor.loader)
            # Later navigations to this template skip the loader
            self._table.cache(template, descriptor, producer)
            pending.producer = producer
            return producer
        finally:
            del self._inflight[descriptor]
            pending.done.set()

    # -- Transition --

    def mark_slot(self) -> Element:
        """Append a placeholder marking where the first view mounts.

        Used by layouts whose router slot sits between other content. The
        marker is replaced by the first view that mounts successfully.
        """
        if self._slot_marker is None:
            self._slot_marker = Element(self._placeholder_tag)
            self._root.append_child(self._slot_marker)
        return self._slot_marker

    def _create_ref_node(self, view: View) -> Element | None:
        """Insert a placeholder before *view*'s first element.

        Returns ``None`` when the view has nothing mounted in the root; the
        new view is then appended to the root and may appear out of order.
        """
        first = view.first_element()
        if first is None or first.parent is not self._root:
            logger.error("View has no mounted children, unable to set ref node, view order might become unordered")
            return None

        ref_node = Element(self._placeholder_tag)
        self._root.insert_before(ref_node, first)
        return ref_node

    def _mount_view(self, path: str, producer: ViewProducer, data: ViewData) -> None:
        ref_node = self._slot_marker
        self._slot_marker = None

        if self._active is not None:
            if ref_node is not None:
                ref_node.remove()
            ref_node = self._create_ref_node(self._active.view)
            self._active.view.unmount()
            self._active = None

        try:
            view = producer(data)
        except Exception:
            # The old view is gone; hold its position for the next mount
            self._slot_marker = ref_node
            raise

        try:
            view.mount(self._root, ref_node)
        finally:
            if ref_node is not None:
                ref_node.remove()

        self._active = ActiveView(url=path, view=view)

        for fn in list(self._load_callbacks):
            fn(path)

    # -- Introspection --

    @property
    def active(self) -> ActiveView | None:
        return self._active

    @property
    def current_path(self) -> str | None:
        return self._active.url if self._active is not None else None

    @property
    def routes(self) -> list[str]:
        """Registered templates in registration order."""
        return self._table.templates

    @property
    def root(self) -> Element:
        return self._root

    def close(self) -> None:
        """Stop listening to back/forward traversal."""
        if self._unsubscribe_history is None:
            return
        self._unsubscribe_history()
        self._unsubscribe_history = None
