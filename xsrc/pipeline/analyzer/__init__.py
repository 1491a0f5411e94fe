"""Context resolution and schema binding."""

from __future__ import annotations

from .context import Context, ContextResolver, ContextTree, NodeKind, resolve
from .ir_nodes import (
    BoundAction,
    BoundAPISet,
    BoundClient,
    HttpMethod,
    ParamOrigin,
    ParamSpec,
    PathSlot,
    RootUrl,
    TextPart,
    UrlTemplate,
)
from .transformer import Transformer, transform

__all__ = [
    "BoundAction",
    "BoundAPISet",
    "BoundClient",
    "Context",
    "ContextResolver",
    "ContextTree",
    "HttpMethod",
    "NodeKind",
    "ParamOrigin",
    "ParamSpec",
    "PathSlot",
    "RootUrl",
    "TextPart",
    "Transformer",
    "UrlTemplate",
    "resolve",
    "transform",
]
