"""Lazy view resolution — turn a loader into a view producer.

``route_lazy()`` accepts several loader shapes so the cost of building a
view's module is paid on first navigation only::

    # async callable returning the producer
    async def load_about():
        from myapp.views.about import about_view
        return about_view

    # async callable returning a module exposing ``default``
    async def load_settings():
        return importlib.import_module("myapp.views.settings")

    # import string, imported in a worker thread
    router.route_lazy("/reports", "myapp.views.reports:reports_view")

Sync callables work too; their result is used as-is.
"""

import importlib
import inspect
from types import ModuleType
from typing import Any

from anyio import to_thread

from magnolia.errors import ConfigurationError
from magnolia.routing.route import ViewLoader, ViewProducer


async def invoke(loader: Any) -> Any:
    """Call *loader* and await the result if it's awaitable."""
    result = loader()
    if inspect.isawaitable(result):
        result = await result
    return result


def import_producer(import_string: str) -> ViewProducer:
    """Resolve ``"module:attribute"`` to a producer.

    When the attribute is omitted the module's ``default`` attribute is
    used (``"myapp.views.about"`` resolves to ``myapp.views.about.default``).

    Raises:
        ModuleNotFoundError: If the module cannot be imported.
        AttributeError: If the attribute does not exist on the module.
        ConfigurationError: If the import string is empty or the resolved
            object is not callable.
    """
    module_path, _, attr_name = import_string.partition(":")
    if not module_path:
        msg = f"Lazy route loader {import_string!r} has no module path"
        raise ConfigurationError(msg)

    module = importlib.import_module(module_path)
    return _as_producer(getattr(module, attr_name or "default"), import_string)


def _as_producer(result: Any, origin: object) -> ViewProducer:
    if isinstance(result, ModuleType):
        result = getattr(result, "default", None)

    if not callable(result):
        msg = f"Lazy route loader {origin!r} resolved to {type(result).__name__}, not a view producer"
        raise ConfigurationError(msg)

    return result


async def resolve_loader(loader: ViewLoader) -> ViewProducer:
    """Run *loader* to completion and return the view producer it yields.

    Loader failures propagate unchanged.
    """
    if isinstance(loader, str):
        return await to_thread.run_sync(import_producer, loader)

    return _as_producer(await invoke(loader), loader)
