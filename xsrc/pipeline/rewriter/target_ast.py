"""
Target AST node definitions.

A language-neutral description of the generated client: one class per API
set with a constructor, accessors for nested sets and one method per action.
Serializers turn these nodes into source text.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..analyzer.ir_nodes import ParamOrigin
from ..expression.nodes import PrimitiveType
from ..languages import LanguageId


@dataclass
class TargetNode:
    """Base class for all target AST nodes."""

    pass


@dataclass
class Parameter(TargetNode):
    """A constructor or method parameter."""

    name: str = ""  # Identifier in generated code
    wire_name: str = ""  # Key sent over the wire
    type: PrimitiveType = PrimitiveType.STRING
    origin: ParamOrigin = ParamOrigin.QUERY
    default: Any = None
    has_default: bool = False


@dataclass
class StringPart(TargetNode):
    """Literal URL text."""

    text: str = ""


@dataclass
class ParamPart(TargetNode):
    """URL substitution of a path parameter."""

    name: str = ""  # Parameter identifier
    type: PrimitiveType = PrimitiveType.STRING


@dataclass
class BaseUrlPart(TargetNode):
    """The client's base URL, reached through ``hops`` parent links."""

    hops: int = 0


UrlPiece = StringPart | ParamPart | BaseUrlPart


@dataclass
class HttpCall(TargetNode):
    """The single HTTP request performed by a method."""

    method: str = "GET"
    url: list[UrlPiece] = field(default_factory=list)
    query: list[Parameter] = field(default_factory=list)
    body: list[Parameter] = field(default_factory=list)


@dataclass
class Constructor(TargetNode):
    """Class constructor.

    The root class takes the base URL; nested classes capture their parent.
    """

    parameters: list[Parameter] = field(default_factory=list)
    parent_class: str | None = None


@dataclass
class Accessor(TargetNode):
    """Read-only property returning a fresh nested client."""

    name: str = ""
    class_name: str = ""


@dataclass
class Method(TargetNode):
    """One action."""

    name: str = ""
    wire_name: str = ""  # Action name in the schema
    parameters: list[Parameter] = field(default_factory=list)
    call: HttpCall = field(default_factory=HttpCall)


@dataclass
class ClassDecl(TargetNode):
    """One API set."""

    name: str = ""
    schema_path: str = ""
    constructor: Constructor = field(default_factory=Constructor)
    accessors: list[Accessor] = field(default_factory=list)
    methods: list[Method] = field(default_factory=list)

    @property
    def is_root(self) -> bool:
        return self.constructor.parent_class is None


@dataclass
class ClientModule(TargetNode):
    """A complete generated source file."""

    language: LanguageId = LanguageId.JAVASCRIPT
    root_class: str = ""
    classes: list[ClassDecl] = field(default_factory=list)  # Root first, then depth-first pre-order
    generation_comment: str = ""
