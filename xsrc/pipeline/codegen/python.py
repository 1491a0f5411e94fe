"""
Python serializer.

Builds Python source using the ast module: one class per API set, nested sets
exposed as properties, and each action a method issuing one
``requests.request`` call.
"""

from __future__ import annotations

import ast

from ..expression.nodes import PrimitiveType
from ..rewriter.target_ast import (
    Accessor,
    BaseUrlPart,
    ClassDecl,
    ClientModule,
    Constructor,
    HttpCall,
    Method,
    Parameter,
    ParamPart,
    StringPart,
)
from .base import Serializer


class PythonSerializer(Serializer):
    """Serializes the target AST to Python source code."""

    TEMPLATE_LANG = "python"
    FILE_EXTENSION = "py"
    COMMENT_PREFIX = "#"

    TYPE_MAP = {
        PrimitiveType.STRING: "str",
        PrimitiveType.NUMBER: "float",
        PrimitiveType.BOOLEAN: "bool",
    }

    def serialize(self, module: ClientModule) -> str:
        """Serialize a complete module to source code."""
        tree = ast.Module(body=[self._build_class(cls) for cls in module.classes], type_ignores=[])
        ast.fix_missing_locations(tree)
        code = ast.unparse(tree)
        return self._post_process_code(self.render_prefix(module), code)

    def _build_class(self, cls: ClassDecl) -> ast.ClassDef:
        body: list[ast.stmt] = [self._build_constructor(cls.constructor)]
        body.extend(self._build_accessor(accessor) for accessor in cls.accessors)
        body.extend(self._build_method(method) for method in cls.methods)
        return ast.ClassDef(
            name=cls.name,
            bases=[],
            keywords=[],
            body=body,
            decorator_list=[],
            type_params=[],
        )

    def _build_constructor(self, ctor: Constructor) -> ast.FunctionDef:
        if ctor.parent_class is None:
            param = ctor.parameters[0]
            arguments = self._build_arguments(ctor.parameters)
            attribute, value = "_url", param.name
        else:
            arguments = self._build_arguments([])
            arguments.args.append(ast.arg(arg="_super", annotation=ast.Name(id=ctor.parent_class, ctx=ast.Load())))
            attribute, value = "_super", "_super"

        assign = ast.Assign(
            targets=[ast.Attribute(value=ast.Name(id="self", ctx=ast.Load()), attr=attribute, ctx=ast.Store())],
            value=ast.Name(id=value, ctx=ast.Load()),
        )
        return self._function("__init__", arguments, [assign], ast.Constant(value=None))

    def _build_accessor(self, accessor: Accessor) -> ast.FunctionDef:
        call = ast.Call(
            func=ast.Name(id=accessor.class_name, ctx=ast.Load()),
            args=[ast.Name(id="self", ctx=ast.Load())],
            keywords=[],
        )
        return self._function(
            accessor.name,
            self._build_arguments([]),
            [ast.Return(value=call)],
            ast.Name(id=accessor.class_name, ctx=ast.Load()),
            decorators=[ast.Name(id="property", ctx=ast.Load())],
        )

    def _build_method(self, method: Method) -> ast.FunctionDef:
        returns = ast.Attribute(value=ast.Name(id="requests", ctx=ast.Load()), attr="Response", ctx=ast.Load())
        return self._function(
            method.name,
            self._build_arguments(method.parameters),
            [ast.Return(value=self._build_call(method.call))],
            returns,
        )

    def _function(
        self,
        name: str,
        arguments: ast.arguments,
        body: list[ast.stmt],
        returns: ast.expr,
        decorators: list[ast.expr] | None = None,
    ) -> ast.FunctionDef:
        return ast.FunctionDef(
            name=name,
            args=arguments,
            body=body,
            decorator_list=decorators or [],
            returns=returns,
            type_comment=None,
            type_params=[],
        )

    def _build_arguments(self, parameters: list[Parameter]) -> ast.arguments:
        """Build ``self`` plus the parameters, keeping their declared order.

        Parameters without a default that follow one with a default become
        keyword-only so the signature stays valid.
        """
        split = len(parameters)
        seen_default = False
        for i, param in enumerate(parameters):
            if param.has_default:
                seen_default = True
            elif seen_default:
                split = i
                break

        positional = parameters[:split]
        keyword_only = parameters[split:]
        return ast.arguments(
            posonlyargs=[],
            args=[ast.arg(arg="self", annotation=None), *(self._build_arg(p) for p in positional)],
            vararg=None,
            kwonlyargs=[self._build_arg(p) for p in keyword_only],
            kw_defaults=[ast.Constant(value=p.default) if p.has_default else None for p in keyword_only],
            kwarg=None,
            defaults=[ast.Constant(value=p.default) for p in positional if p.has_default],
        )

    def _build_arg(self, param: Parameter) -> ast.arg:
        return ast.arg(arg=param.name, annotation=ast.Name(id=self.translate_type(param.type), ctx=ast.Load()))

    def _build_call(self, call: HttpCall) -> ast.Call:
        keywords: list[ast.keyword] = []
        for key, params in (("params", call.query), ("json", call.body)):
            if params:
                keywords.append(ast.keyword(arg=key, value=self._build_bag(params)))
        return ast.Call(
            func=ast.Attribute(value=ast.Name(id="requests", ctx=ast.Load()), attr="request", ctx=ast.Load()),
            args=[ast.Constant(value=call.method), self._build_url(call)],
            keywords=keywords,
        )

    def _build_bag(self, params: list[Parameter]) -> ast.Dict:
        return ast.Dict(
            keys=[ast.Constant(value=p.wire_name) for p in params],
            values=[ast.Name(id=p.name, ctx=ast.Load()) for p in params],
        )

    def _build_url(self, call: HttpCall) -> ast.expr:
        """URL expression: a string constant, or an f-string when dynamic."""
        if all(isinstance(piece, StringPart) for piece in call.url):
            return ast.Constant(value="".join(piece.text for piece in call.url))

        values: list[ast.expr] = []
        for piece in call.url:
            if isinstance(piece, StringPart):
                values.append(ast.Constant(value=piece.text))
            elif isinstance(piece, ParamPart):
                quoted = ast.Call(
                    func=ast.Name(id="_path", ctx=ast.Load()),
                    args=[ast.Name(id=piece.name, ctx=ast.Load())],
                    keywords=[],
                )
                values.append(ast.FormattedValue(value=quoted, conversion=-1, format_spec=None))
            elif isinstance(piece, BaseUrlPart):
                target: ast.expr = ast.Name(id="self", ctx=ast.Load())
                for _ in range(piece.hops):
                    target = ast.Attribute(value=target, attr="_super", ctx=ast.Load())
                target = ast.Attribute(value=target, attr="_url", ctx=ast.Load())
                values.append(ast.FormattedValue(value=target, conversion=-1, format_spec=None))
        return ast.JoinedStr(values=values)

    def _post_process_code(self, prefix: str, code: str) -> str:
        """Join the header and the classes, normalizing blank lines."""
        result = prefix.rstrip("\n").split("\n")

        for line in code.split("\n"):
            if not line.strip():
                continue

            stripped = line.lstrip()
            if line.startswith("class "):
                result.extend(["", ""])
            elif stripped.startswith(("def ", "@")) and not result[-1].lstrip().startswith(("@", "class ")):
                result.append("")

            result.append(line)

        result.append("")
        return "\n".join(result)
