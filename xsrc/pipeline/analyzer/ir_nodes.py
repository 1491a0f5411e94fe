"""
Bound tree node definitions.

These nodes are the output of the transformer: every expression is parsed,
every context reference is substituted, and every placeholder has become a
typed path parameter. Nothing here refers back to the raw schema.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..errors import SchemaParseError
from ..expression.nodes import Modifier, PrimitiveType


class HttpMethod(str, Enum):
    """HTTP methods an action may use."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"
    PATCH = "PATCH"

    @staticmethod
    def parse(value: Any, schema_path: str = "") -> HttpMethod:
        """Parse a method name case-insensitively."""
        if not isinstance(value, str):
            raise SchemaParseError(f"$method must be a string, got {type(value).__name__}", schema_path)
        try:
            return HttpMethod(value.strip().upper())
        except ValueError:
            allowed = ", ".join(m.value for m in HttpMethod)
            raise SchemaParseError(f"Unknown HTTP method '{value}' (expected one of: {allowed})", schema_path) from None


class ParamOrigin(str, Enum):
    """Where a parameter travels in the request."""

    PATH = "path"
    QUERY = "query"
    BODY = "body"


@dataclass(frozen=True)
class ParamSpec:
    """A typed action parameter."""

    name: str
    primitive_type: PrimitiveType = PrimitiveType.STRING
    origin: ParamOrigin = ParamOrigin.QUERY
    modifiers: tuple[Modifier, ...] = ()

    @property
    def has_default(self) -> bool:
        return any(m.name == "default" for m in self.modifiers)

    @property
    def default(self) -> Any:
        for m in self.modifiers:
            if m.name == "default":
                return m.value
        return None


@dataclass(frozen=True)
class TextPart:
    """Literal URL text."""

    text: str


@dataclass(frozen=True)
class PathSlot:
    """Positional substitution point for a path parameter."""

    param: ParamSpec


@dataclass(frozen=True)
class RootUrl:
    """The client's base URL, chosen at construction time."""

    default: str | None = None  # Literal baked into the constructor, if any


UrlPart = TextPart | PathSlot | RootUrl


@dataclass(frozen=True)
class UrlTemplate:
    """A resolved URL: text, path slots and the root URL marker."""

    parts: tuple[UrlPart, ...] = ()

    @property
    def slots(self) -> list[PathSlot]:
        return [p for p in self.parts if isinstance(p, PathSlot)]

    @property
    def pattern(self) -> str:
        """Human-readable form, e.g. ``http://api_root_url/users/{id}``."""
        out: list[str] = []
        for part in self.parts:
            if isinstance(part, TextPart):
                out.append(part.text)
            elif isinstance(part, PathSlot):
                out.append("{" + part.param.name + "}")
            elif part.default is not None:
                out.append(part.default)
            else:
                out.append("{url}")
        return "".join(out)

    def normalized(self) -> UrlTemplate:
        """Merge adjacent text parts and drop empty ones."""
        parts: list[UrlPart] = []
        for part in self.parts:
            if isinstance(part, TextPart):
                if not part.text:
                    continue
                if parts and isinstance(parts[-1], TextPart):
                    parts[-1] = TextPart(parts[-1].text + part.text)
                    continue
            parts.append(part)
        return UrlTemplate(tuple(parts))

    def __str__(self) -> str:
        return self.pattern


@dataclass
class BoundAction:
    """A fully resolved action."""

    name: str = ""
    schema_path: str = ""
    method: HttpMethod = HttpMethod.GET
    url: UrlTemplate = field(default_factory=UrlTemplate)
    path_params: tuple[ParamSpec, ...] = ()  # Order of first appearance in the URL
    query_params: dict[str, ParamSpec] = field(default_factory=dict)
    body_params: dict[str, ParamSpec] = field(default_factory=dict)

    @property
    def parameters(self) -> list[ParamSpec]:
        """All parameters in call order: path, query, body."""
        return [*self.path_params, *self.query_params.values(), *self.body_params.values()]


@dataclass
class BoundAPISet:
    """A fully resolved API set."""

    name: str = ""
    schema_path: str = ""
    url: UrlTemplate = field(default_factory=UrlTemplate)
    apisets: dict[str, BoundAPISet] = field(default_factory=dict)
    actions: dict[str, BoundAction] = field(default_factory=dict)


@dataclass
class BoundClient:
    """The bound tree root."""

    class_name: str = "XSClient"
    url: str | None = None  # Literal root URL; None makes the constructor argument mandatory
    root: BoundAPISet = field(default_factory=BoundAPISet)
