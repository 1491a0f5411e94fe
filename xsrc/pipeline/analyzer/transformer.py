"""
Schema transformer that binds the raw schema tree.

Phase 2 of the pipeline: walk the schema depth-first, create one context per
node, resolve ``$url`` / ``$method`` / ``$params`` / ``$data`` and build the
bound tree ready for rewriting.
"""

from __future__ import annotations

import logging
import re
from typing import Any

from ..errors import ContextResolutionError, DuplicateNameError, SchemaParseError
from ..expression.nodes import ContextRef, Literal, Placeholder, TypeSpec
from ..expression.parser import ExpressionParser
from .context import Context, ContextResolver, ContextTree, NodeKind
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
    UrlPart,
    UrlTemplate,
)

logger = logging.getLogger(__name__)

DEFAULT_CLASS_NAME = "XSClient"
DEFAULT_ACTION_URL = "${!super}"
APISET_PREFIX = "~"

CLIENT_KEYS = {"$url", "$as"}
APISET_KEYS = {"$url"}
ACTION_KEYS = {"$url", "$method", "$params", "$data"}

MEMBER_NAME_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_-]*$")
CLASS_NAME_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
# Member and parameter names need at least one word character to survive casing
WORD_CHAR_RE = re.compile(r"[A-Za-z0-9]")


def _join(path: str, key: str) -> str:
    return f"{path}.{key}" if path else key


class Transformer:
    """Binds a raw schema tree into a :class:`BoundClient`."""

    def __init__(self) -> None:
        self.parser = ExpressionParser()
        self.tree = ContextTree()
        self.resolver = ContextResolver(self.tree)

    def transform(self, root: Any, class_name: str | None = None) -> BoundClient:
        """
        Transform the schema document.

        Args:
            root: The decoded schema document (a mapping)
            class_name: Client class name overriding the document's ``$as``

        Returns:
            The bound tree

        Raises:
            SchemaParseError: On structurally invalid nodes
            ExpressionSyntaxError: On malformed expressions or type specs
            ContextResolutionError: On unresolvable context references
            DuplicateNameError: On colliding member or parameter names
        """
        self.tree = ContextTree()
        self.resolver = ContextResolver(self.tree)

        if not isinstance(root, dict):
            raise SchemaParseError(f"Schema root must be a mapping, got {type(root).__name__}")
        self._check_keys(root, CLIENT_KEYS, "", allow_members=True)

        name = class_name or root.get("$as") or DEFAULT_CLASS_NAME
        if not isinstance(name, str) or not CLASS_NAME_RE.match(name):
            raise SchemaParseError(f"Invalid client class name {name!r}", "$as")

        ctx = self.tree.add(NodeKind.CLIENT, name, "")
        root_url = self._resolve_root_url(root.get("$url"), ctx)
        ctx.attributes["url"] = UrlTemplate((RootUrl(root_url),))

        bound_root = BoundAPISet(name=name, schema_path="", url=ctx.attributes["url"])
        self._transform_members(root, ctx, bound_root)

        logger.debug("Bound client %s (root url: %s, %d contexts)", name, root_url, len(self.tree))
        return BoundClient(class_name=name, url=root_url, root=bound_root)

    def _resolve_root_url(self, raw: Any, ctx: Context) -> str | None:
        if raw is None:
            return None
        url_path = "$url"
        if not isinstance(raw, str):
            raise SchemaParseError(f"$url must be a string, got {type(raw).__name__}", url_path)

        expression = self.parser.parse(raw, url_path)
        for segment in expression.segments:
            if isinstance(segment, Placeholder):
                raise SchemaParseError(f"Root $url cannot contain placeholder '<{segment.name}>'", url_path)
            if isinstance(segment, ContextRef):
                # The root has no parent and no resolved attributes yet
                self.resolver.resolve(ctx, segment, url_path)
        return expression.text

    def _check_keys(self, node: dict, allowed: set[str], path: str, allow_members: bool) -> None:
        for key in node:
            if not isinstance(key, str):
                raise SchemaParseError(f"Keys must be strings, got {key!r}", path)
            if key.startswith("$"):
                if key not in allowed:
                    expected = ", ".join(sorted(allowed))
                    raise SchemaParseError(f"Unknown attribute '{key}' (allowed here: {expected})", _join(path, key))
            elif not allow_members:
                raise SchemaParseError(f"Actions cannot contain nested members ('{key}')", _join(path, key))

    def _transform_members(self, node: dict, ctx: Context, apiset: BoundAPISet) -> None:
        """Bind the nested API sets and actions of an API set node."""
        seen: dict[str, str] = {}
        for key, value in node.items():
            if key.startswith("$"):
                continue
            is_apiset = key.startswith(APISET_PREFIX)
            name = key[len(APISET_PREFIX) :] if is_apiset else key
            path = _join(ctx.schema_path, key)

            if not MEMBER_NAME_RE.match(name) or not WORD_CHAR_RE.search(name):
                raise SchemaParseError(f"Invalid member name '{name}'", path)
            if name in seen:
                raise DuplicateNameError(f"'{name}' clashes with sibling '{seen[name]}'", path)
            seen[name] = key

            if is_apiset:
                apiset.apisets[name] = self._transform_apiset(name, value, ctx, path)
            else:
                apiset.actions[name] = self._transform_action(name, value, ctx, path)

    def _transform_apiset(self, name: str, node: Any, parent: Context, path: str) -> BoundAPISet:
        if node is None or (isinstance(node, dict) and node.get("$url") is None):
            raise SchemaParseError(f"API set '{name}' requires a $url", path)
        if not isinstance(node, dict):
            raise SchemaParseError(f"API set '{name}' must be a mapping, got {type(node).__name__}", path)
        self._check_keys(node, APISET_KEYS, path, allow_members=True)

        ctx = self.tree.add(NodeKind.APISET, name, path, parent)
        url = self._resolve_url(node["$url"], ctx, _join(path, "$url"))
        ctx.attributes["url"] = url

        bound = BoundAPISet(name=name, schema_path=path, url=url)
        logger.debug("Bound API set %s: %s", path, url.pattern)
        self._transform_members(node, ctx, bound)
        return bound

    def _transform_action(self, name: str, node: Any, parent: Context, path: str) -> BoundAction:
        if node is None:
            node = {}
        if not isinstance(node, dict):
            raise SchemaParseError(f"Action '{name}' must be a mapping, got {type(node).__name__}", path)
        self._check_keys(node, ACTION_KEYS, path, allow_members=False)

        ctx = self.tree.add(NodeKind.ACTION, name, path, parent)

        raw_url = node.get("$url")
        url = self._resolve_url(DEFAULT_ACTION_URL if raw_url is None else raw_url, ctx, _join(path, "$url"))
        ctx.attributes["url"] = url

        raw_method = node.get("$method")
        method = HttpMethod.GET if raw_method is None else HttpMethod.parse(raw_method, _join(path, "$method"))
        ctx.attributes["method"] = method.value

        path_params = self._collect_path_params(url, path)
        query_params = self._parse_params(node.get("$params"), ParamOrigin.QUERY, _join(path, "$params"))
        body_params = self._parse_params(node.get("$data"), ParamOrigin.BODY, _join(path, "$data"))
        ctx.attributes["params"] = query_params
        ctx.attributes["data"] = body_params

        origins = {p.name: p.origin for p in path_params}
        for param in [*query_params.values(), *body_params.values()]:
            if param.name in origins:
                raise DuplicateNameError(
                    f"Parameter '{param.name}' is declared as both a {origins[param.name].value} and a {param.origin.value} parameter",
                    path,
                )
            origins[param.name] = param.origin

        logger.debug("Bound action %s: %s %s", path, method.value, url.pattern)
        return BoundAction(
            name=name,
            schema_path=path,
            method=method,
            url=url,
            path_params=path_params,
            query_params=query_params,
            body_params=body_params,
        )

    def _resolve_url(self, raw: Any, ctx: Context, url_path: str) -> UrlTemplate:
        """Parse a ``$url`` and substitute its references and placeholders."""
        if not isinstance(raw, str):
            raise SchemaParseError(f"$url must be a string, got {type(raw).__name__}", url_path)

        expression = self.parser.parse(raw, url_path)
        parts: list[UrlPart] = []
        for segment in expression.segments:
            if isinstance(segment, Literal):
                parts.append(TextPart(segment.text))
            elif isinstance(segment, ContextRef):
                value = self.resolver.resolve(ctx, segment, url_path)
                if isinstance(value, UrlTemplate):
                    parts.extend(value.parts)
                elif isinstance(value, str):
                    parts.append(TextPart(value))
                else:
                    raise ContextResolutionError(f"Attribute '{segment.attribute}' cannot be used inside a URL", url_path)
            else:
                if segment.type_spec.has_default:
                    raise SchemaParseError(f"Path parameter '{segment.name}' cannot declare a default", url_path)
                param = ParamSpec(segment.name, segment.type_spec.primitive, ParamOrigin.PATH, segment.type_spec.modifiers)
                parts.append(PathSlot(param))
        return UrlTemplate(tuple(parts)).normalized()

    def _collect_path_params(self, url: UrlTemplate, path: str) -> tuple[ParamSpec, ...]:
        """Unique path parameters in order of first appearance."""
        params: dict[str, ParamSpec] = {}
        for slot in url.slots:
            existing = params.get(slot.param.name)
            if existing is None:
                params[slot.param.name] = slot.param
            elif existing.primitive_type != slot.param.primitive_type:
                raise DuplicateNameError(
                    f"Path parameter '{slot.param.name}' appears as both {existing.primitive_type.value} and {slot.param.primitive_type.value}",
                    path,
                )
        return tuple(params.values())

    def _parse_params(self, node: Any, origin: ParamOrigin, path: str) -> dict[str, ParamSpec]:
        """Parse a ``$params`` / ``$data`` mapping of name to type spec."""
        if node is None:
            return {}
        if not isinstance(node, dict):
            raise SchemaParseError(f"Expected a mapping of parameter name to type, got {type(node).__name__}", path)

        params: dict[str, ParamSpec] = {}
        for name, raw in node.items():
            param_path = _join(path, str(name))
            if not isinstance(name, str) or not WORD_CHAR_RE.search(name):
                raise SchemaParseError(f"Invalid parameter name {name!r}", param_path)
            if raw is None:
                spec = TypeSpec()
            elif isinstance(raw, str):
                spec = self.parser.parse_type_spec(raw, param_path)
            else:
                raise SchemaParseError(f"Parameter type must be a string, got {type(raw).__name__}", param_path)
            params[name] = ParamSpec(name, spec.primitive, origin, spec.modifiers)
        return params


def transform(root: Any, class_name: str | None = None) -> BoundClient:
    """Transform a decoded schema document into a bound tree."""
    return Transformer().transform(root, class_name)
