"""
Expression nodes for strings embedded in schema documents.

An expression is a sequence of segments: literal text, context references
(``${!super.url}``) and inline placeholders (``<id:number>``).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class PrimitiveType(str, Enum):
    """Primitive parameter types."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"


@dataclass(frozen=True)
class Modifier:
    """A ``name:value`` modifier attached to a type spec."""

    name: str
    value: Any


@dataclass(frozen=True)
class TypeSpec:
    """A primitive type with its modifiers, e.g. ``boolean|default:true``."""

    primitive: PrimitiveType = PrimitiveType.STRING
    modifiers: tuple[Modifier, ...] = ()

    def get(self, name: str) -> Modifier | None:
        for modifier in self.modifiers:
            if modifier.name == name:
                return modifier
        return None

    @property
    def has_default(self) -> bool:
        return self.get("default") is not None

    @property
    def default(self) -> Any:
        modifier = self.get("default")
        return modifier.value if modifier is not None else None


@dataclass(frozen=True)
class Literal:
    """Plain text."""

    text: str


@dataclass(frozen=True)
class ContextRef:
    """Reference to an attribute of an ancestor context.

    Attributes:
        hops: Number of ``!super`` steps to walk up from the referencing node
        attribute: Attribute read on the landing context
    """

    hops: int
    attribute: str = "url"


@dataclass(frozen=True)
class Placeholder:
    """Inline typed parameter, e.g. ``<id:number>``."""

    name: str
    type_spec: TypeSpec = field(default_factory=TypeSpec)


Segment = Literal | ContextRef | Placeholder


@dataclass(frozen=True)
class Expression:
    """A parsed schema string."""

    segments: tuple[Segment, ...]
    source: str = ""

    @property
    def references(self) -> list[ContextRef]:
        return [s for s in self.segments if isinstance(s, ContextRef)]

    @property
    def placeholders(self) -> list[Placeholder]:
        return [s for s in self.segments if isinstance(s, Placeholder)]

    @property
    def is_literal(self) -> bool:
        return all(isinstance(s, Literal) for s in self.segments)

    @property
    def text(self) -> str:
        """Concatenated literal text (only meaningful when ``is_literal``)."""
        return "".join(s.text for s in self.segments if isinstance(s, Literal))
