"""
Context tree and ``!super`` resolution.

Every schema node gets a :class:`Context` holding its locally resolved
attributes. Contexts live in a :class:`ContextTree` arena and point at their
parent by index, so the tree never owns cyclic references.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..errors import ContextResolutionError
from ..expression.nodes import ContextRef


class NodeKind(str, Enum):
    """Kind of schema node."""

    CLIENT = "client"
    APISET = "apiset"
    ACTION = "action"


@dataclass
class Context:
    """Resolution scope of one schema node."""

    index: int = 0  # Position in the owning ContextTree
    kind: NodeKind = NodeKind.CLIENT
    name: str = ""
    schema_path: str = ""  # e.g. "~users.get"
    parent: int | None = None  # Parent index, None for the root
    attributes: dict[str, Any] = field(default_factory=dict)  # url, method, params, data


class ContextTree:
    """Arena of contexts, one per schema node."""

    def __init__(self) -> None:
        self._contexts: list[Context] = []

    def add(self, kind: NodeKind, name: str, schema_path: str, parent: Context | None = None) -> Context:
        """Create a context under ``parent`` (or the root when ``parent`` is None)."""
        if parent is None and self._contexts:
            raise ValueError("Context tree already has a root")
        ctx = Context(
            index=len(self._contexts),
            kind=kind,
            name=name,
            schema_path=schema_path,
            parent=parent.index if parent is not None else None,
        )
        self._contexts.append(ctx)
        return ctx

    def parent_of(self, ctx: Context) -> Context | None:
        if ctx.parent is None:
            return None
        return self._contexts[ctx.parent]

    def depth(self, ctx: Context) -> int:
        """Number of parent hops from ``ctx`` to the root."""
        depth = 0
        current = self.parent_of(ctx)
        while current is not None:
            depth += 1
            current = self.parent_of(current)
        return depth

    @property
    def root(self) -> Context:
        return self._contexts[0]

    def __getitem__(self, index: int) -> Context:
        return self._contexts[index]

    def __len__(self) -> int:
        return len(self._contexts)


class ContextResolver:
    """Resolves context references against a :class:`ContextTree`."""

    def __init__(self, tree: ContextTree):
        self.tree = tree

    def resolve(self, ctx: Context, ref: ContextRef, source_path: str | None = None) -> Any:
        """
        Resolve ``ref`` as seen from ``ctx``.

        Walks one parent per ``!super`` hop, then reads the referenced
        attribute from the landing context.

        Args:
            ctx: The context the reference appears in
            ref: The parsed reference
            source_path: Schema path used in error messages (defaults to ctx's)

        Returns:
            The attribute value (a resolved URL template, method, ...)

        Raises:
            ContextResolutionError: If the walk passes the root or the attribute is missing
        """
        where = source_path if source_path is not None else ctx.schema_path
        target = ctx
        for hop in range(ref.hops):
            parent = self.tree.parent_of(target)
            if parent is None:
                raise ContextResolutionError(
                    f"'!super' hop {hop + 1} of {ref.hops} goes past the root",
                    where,
                )
            target = parent

        if ref.attribute not in target.attributes:
            location = target.schema_path or "(root)"
            raise ContextResolutionError(f"No attribute '{ref.attribute}' on {target.kind.value} {location}", where)
        return target.attributes[ref.attribute]


def resolve(tree: ContextTree, ctx: Context, ref: ContextRef) -> Any:
    """Resolve ``ref`` from ``ctx`` in ``tree``."""
    return ContextResolver(tree).resolve(ctx, ref)
