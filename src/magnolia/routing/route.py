"""View descriptors and the active-view record."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum
from types import ModuleType
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from magnolia.ui.view import View, ViewData

type ViewProducer = Callable[[ViewData], View]
type LazyResult = ViewProducer | ModuleType
type ViewLoader = Callable[[], Awaitable[LazyResult] | LazyResult] | str


class DescriptorKind(Enum):
    EAGER = "eager"
    LAZY = "lazy"


@dataclass(frozen=True, slots=True)
class EagerView:
    """A producer available immediately."""

    producer: ViewProducer

    @property
    def kind(self) -> DescriptorKind:
        return DescriptorKind.EAGER


@dataclass(frozen=True, slots=True)
class LazyView:
    """A producer obtained on first use by awaiting *loader*.

    Once resolved, the route table swaps this descriptor for an
    ``EagerView`` wrapping the resolved producer.
    """

    loader: ViewLoader

    @property
    def kind(self) -> DescriptorKind:
        return DescriptorKind.LAZY


type ViewDescriptor = EagerView | LazyView


@dataclass(frozen=True, slots=True)
class ActiveView:
    """The mounted view and the literal path that produced it."""

    url: str
    view: View
