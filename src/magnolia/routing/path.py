"""Path normalization and dynamic template matching.

Templates use ``/``-separated literal segments and ``{name}`` dynamic
segments::

    "/users"             literal, matched only by exact lookup
    "/users/{id}"        captures the second segment as ``id``
    "/files/{dir}/:*"    wildcard, not supported (raises on match)

Literal templates never go through ``match_dynamic_path()``; the router
resolves them with a dict lookup before scanning dynamic templates.
"""

from dataclasses import dataclass

from magnolia.errors import ConfigurationError, UnsupportedPattern

WILDCARD_MARKER = ":*"


@dataclass(frozen=True, slots=True)
class DynamicSegment:
    """A named value captured from a path by a ``{name}`` segment."""

    name: str
    value: str


@dataclass(frozen=True, slots=True)
class TemplateSegment:
    """A parsed segment of a route template.

    Literal:  ``users``  (is_dynamic=False)
    Dynamic:  ``{id}``   (is_dynamic=True, name="id")
    """

    value: str
    is_dynamic: bool = False
    name: str | None = None


def normalize_path(path: str) -> str:
    """Strip the trailing ``/``.

    ``"/a/b/"`` becomes ``"/a/b"`` and ``"/"`` becomes ``""``. A run of
    trailing slashes is stripped as a whole so that normalizing twice
    always equals normalizing once.
    """
    return path.rstrip("/")


def is_dynamic_template(template: str) -> bool:
    """True if *template* contains any ``{`` or ``}`` character."""
    return "{" in template or "}" in template


def _is_dynamic_segment(segment: str) -> bool:
    return segment.startswith("{") and segment.endswith("}")


def parse_template(template: str) -> list[TemplateSegment]:
    """Split a template into segments.

    Examples::

        "/users"          -> [TemplateSegment(""), TemplateSegment("users")]
        "/users/{id}"     -> [..., TemplateSegment("{id}", is_dynamic=True, name="id")]
    """
    segments: list[TemplateSegment] = []
    for part in template.split("/"):
        if _is_dynamic_segment(part):
            segments.append(TemplateSegment(value=part, is_dynamic=True, name=part[1:-1]))
        else:
            segments.append(TemplateSegment(value=part))
    return segments


def validate_template(template: str) -> None:
    """Reject templates that name the same dynamic segment twice.

    Wildcards are deliberately not checked here; they fail when matched.
    """
    seen: set[str] = set()
    for segment in parse_template(template):
        if not segment.is_dynamic or segment.name is None:
            continue
        if segment.name in seen:
            msg = (
                f"Route template {template!r} names the dynamic segment "
                f"{{{segment.name}}} more than once."
            )
            raise ConfigurationError(msg)
        seen.add(segment.name)


def match_dynamic_path(path: str, template: str) -> list[DynamicSegment] | None:
    """Match *path* against a dynamic *template*.

    Returns the captured segments in template order, or ``None`` when the
    path does not match. Literal templates (no braces) always return
    ``None``.

    Raises ``UnsupportedPattern`` if the template contains the ``:*``
    wildcard marker. This is a hard stop, not a non-match.
    """
    # Literal templates are resolved by exact lookup, never here
    if not is_dynamic_template(template):
        return None

    if WILDCARD_MARKER in template:
        # TODO: match wildcards after all dynamic segments have been matched
        raise UnsupportedPattern(template)

    path_parts = path.split("/")
    template_parts = template.split("/")

    if len(path_parts) != len(template_parts):
        return None

    segments: list[DynamicSegment] = []
    for path_part, template_part in zip(path_parts, template_parts, strict=True):
        if _is_dynamic_segment(template_part):
            segments.append(DynamicSegment(name=template_part[1:-1], value=path_part))
        elif path_part != template_part:
            return None

    return segments
