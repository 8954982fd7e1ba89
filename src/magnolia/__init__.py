"""Magnolia — single-page navigation and reactive state for browser UIs.

Maps URL paths to view producers (with dynamic segments and lazily
loaded views) and keeps rendered nodes in step with reactive state.

Basic usage::

    from magnolia import Magnolia, MemoryHistory, Document, state
    from magnolia.ui import elements as mg

    document = Document()
    root = document.create_element("div")
    root.id = "root"
    document.body.append_child(root)

    app = Magnolia(document, MemoryHistory("/"))

    def home(data):
        counter = state(0)
        label = counter.map(lambda n: f"Clicked {n} times")
        box = mg.div()
        mg.p().bind_text(label).child_of(box)
        mg.button("+").on_click(lambda _e: counter.set(counter.get() + 1)).child_of(box)
        return mg.compose_view(box)

    app.router().route("/", home)
    app.router().fallback_to(lambda data: mg.compose_view(mg.p("404 Not Found!")))
    app.init()
"""

__version__ = "0.1.0"
__all__ = [
    "ActiveView",
    "AppConfig",
    "ConfigurationError",
    "Document",
    "Element",
    "Magnolia",
    "MagnoliaError",
    "MappedState",
    "MemoryHistory",
    "NavigationError",
    "Node",
    "ReactiveState",
    "Router",
    "RouterSlot",
    "Unroutable",
    "UnsupportedPattern",
    "View",
    "ViewData",
    "ViewSlot",
    "map_state",
    "mg",
    "state",
]

# name -> (module, attribute); attribute None means the module itself
_LAZY_IMPORTS: dict[str, tuple[str, str | None]] = {
    "ActiveView": ("magnolia.routing.route", "ActiveView"),
    "AppConfig": ("magnolia.config", "AppConfig"),
    "ConfigurationError": ("magnolia.errors", "ConfigurationError"),
    "Document": ("magnolia.host.document", "Document"),
    "Element": ("magnolia.host.document", "Element"),
    "Magnolia": ("magnolia.app", "Magnolia"),
    "MagnoliaError": ("magnolia.errors", "MagnoliaError"),
    "MappedState": ("magnolia.state", "MappedState"),
    "MemoryHistory": ("magnolia.host.history", "MemoryHistory"),
    "NavigationError": ("magnolia.errors", "NavigationError"),
    "Node": ("magnolia.ui.node", "Node"),
    "ReactiveState": ("magnolia.state", "ReactiveState"),
    "Router": ("magnolia.routing.router", "Router"),
    "RouterSlot": ("magnolia.app", "RouterSlot"),
    "Unroutable": ("magnolia.errors", "Unroutable"),
    "UnsupportedPattern": ("magnolia.errors", "UnsupportedPattern"),
    "View": ("magnolia.ui.view", "View"),
    "ViewData": ("magnolia.ui.view", "ViewData"),
    "ViewSlot": ("magnolia.app", "ViewSlot"),
    "map_state": ("magnolia.state", "map_state"),
    "mg": ("magnolia.ui.elements", None),
    "state": ("magnolia.state", "state"),
}


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import magnolia`` fast while providing a clean top-level API.
    """
    try:
        module_path, attr = _LAZY_IMPORTS[name]
    except KeyError:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg) from None

    import importlib

    module = importlib.import_module(module_path)
    return module if attr is None else getattr(module, attr)
