"""Route table — ordered template to descriptor mapping plus a fallback.

Lookup order is fixed:

1. Exact match on the normalized path (dict lookup). Exact matches win
   over dynamic ones regardless of registration order.
2. Dynamic templates scanned in registration order; first match wins.
3. The fallback descriptor, if one is set.

Re-registering a template replaces its descriptor in place, keeping the
template's original position in the scan order.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum

from magnolia.routing.path import match_dynamic_path, normalize_path, validate_template
from magnolia.routing.route import EagerView, LazyView, ViewDescriptor, ViewProducer

logger = logging.getLogger("magnolia.router")


class MatchKind(Enum):
    EXACT = "exact"
    DYNAMIC = "dynamic"
    FALLBACK = "fallback"


@dataclass(frozen=True, slots=True)
class Resolution:
    """Result of resolving a path against the table.

    ``template`` is ``None`` for fallback resolutions.
    """

    kind: MatchKind
    descriptor: ViewDescriptor
    template: str | None = None
    path_segments: dict[str, str] = field(default_factory=dict)


class RouteTable:
    """Insertion-ordered routes and at most one fallback.

    Owned by exactly one ``Router``. Entries are never removed.
    """

    __slots__ = ("_fallback", "_routes")

    def __init__(self) -> None:
        self._routes: dict[str, ViewDescriptor] = {}
        self._fallback: EagerView | None = None

    def add(self, template: str, descriptor: ViewDescriptor) -> str:
        """Register *descriptor* under the normalized *template*.

        Returns the normalized template. Last write wins.
        """
        normalized = normalize_path(template)
        validate_template(normalized)
        if normalized in self._routes:
            logger.debug("Replacing route %r", normalized)
        self._routes[normalized] = descriptor
        return normalized

    def set_fallback(self, producer: ViewProducer) -> None:
        self._fallback = EagerView(producer)

    @property
    def fallback(self) -> EagerView | None:
        return self._fallback

    @property
    def templates(self) -> list[str]:
        """Registered templates in registration order."""
        return list(self._routes)

    def get(self, template: str) -> ViewDescriptor | None:
        return self._routes.get(normalize_path(template))

    def cache(self, template: str, lazy: LazyView, producer: ViewProducer) -> EagerView:
        """Replace *lazy* at *template* with an eager descriptor wrapping *producer*.

        The table changes only while *lazy* is still the registered entry. If
        *template* was re-registered while the loader ran, the newer entry
        stays and the returned descriptor is not stored.
        """
        eager = EagerView(producer)
        if self._routes.get(template) is lazy:
            self._routes[template] = eager
        return eager

    def resolve(self, path: str) -> Resolution | None:
        """Resolve *path*, or return ``None`` if nothing (not even a fallback) applies.

        Raises ``UnsupportedPattern`` if a wildcard template is reached
        during the dynamic scan.
        """
        normalized = normalize_path(path)

        exact = self._routes.get(normalized)
        if exact is not None:
            return Resolution(kind=MatchKind.EXACT, descriptor=exact, template=normalized)

        for template, descriptor in self._routes.items():
            segments = match_dynamic_path(normalized, template)
            if segments is None:
                continue
            return Resolution(
                kind=MatchKind.DYNAMIC,
                descriptor=descriptor,
                template=template,
                path_segments={segment.name: segment.value for segment in segments},
            )

        if self._fallback is not None:
            return Resolution(kind=MatchKind.FALLBACK, descriptor=self._fallback)

        return None

    def __len__(self) -> int:
        return len(self._routes)

    def __contains__(self, template: object) -> bool:
        return isinstance(template, str) and normalize_path(template) in self._routes
