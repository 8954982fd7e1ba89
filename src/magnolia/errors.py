"""Magnolia exception hierarchy.

Shared across the router, the application context, and the render-tree
layer so every module raises and catches the same types.
"""

from dataclasses import dataclass


class MagnoliaError(Exception):
    """Base for all magnolia-specific errors."""


class ConfigurationError(MagnoliaError):
    """Raised when application or route setup is invalid.

    Typically raised at registration time or from ``Magnolia.init()``.
    """


class NavigationError(MagnoliaError):
    """Base for failures while resolving a path to a view."""


@dataclass(frozen=True, slots=True)
class Unroutable(NavigationError):  # noqa: N818
    """No exact route, no dynamic route, and no fallback for a path.

    Raised synchronously from ``Router.load()`` / ``Router.navigate()``.
    Applications avoid it by registering a fallback with ``fallback_to()``.
    """

    path: str

    def __str__(self) -> str:
        return f"No route or fallback view for {self.path!r}"


@dataclass(frozen=True, slots=True)
class UnsupportedPattern(NavigationError):  # noqa: N818
    """A route template uses the ``:*`` wildcard marker.

    Wildcards are not implemented. Detection happens when a path is
    matched against the template, not when the template is registered.
    """

    template: str

    def __str__(self) -> str:
        return f"Wildcards are not supported yet (template {self.template!r})"
