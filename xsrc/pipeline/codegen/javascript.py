"""
JavaScript and TypeScript serializers.

Emits one ES class per API set, each action becoming an ``async`` method that
performs a single ``axios`` request:
- 4-space indentation
- Blank line between members and between classes
- The root class is exported
"""

from __future__ import annotations

import json

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


def _escape_template_text(text: str) -> str:
    """Escape text for use inside a template literal."""
    return text.replace("\\", "\\\\").replace("`", "\\`").replace("${", "\\${")


class JavaScriptSerializer(Serializer):
    """Serializes the target AST to JavaScript source code."""

    TEMPLATE_LANG = "javascript"
    FILE_EXTENSION = "js"
    COMMENT_PREFIX = "//"

    TYPE_MAP = {
        PrimitiveType.STRING: "string",
        PrimitiveType.NUMBER: "number",
        PrimitiveType.BOOLEAN: "boolean",
    }

    def serialize(self, module: ClientModule) -> str:
        """Serialize a complete module to source code."""
        lines: list[str] = self.render_prefix(module).rstrip("\n").split("\n")

        for cls in module.classes:
            lines.append("")
            lines.extend(self._serialize_class(cls))

        return "\n".join(lines) + "\n"

    def _serialize_class(self, cls: ClassDecl) -> list[str]:
        keyword = "export class" if cls.is_root else "class"
        members: list[list[str]] = []

        fields = self._serialize_fields(cls)
        if fields:
            members.append(fields)
        members.append(self._serialize_constructor(cls.constructor))
        for accessor in cls.accessors:
            members.append(self._serialize_accessor(accessor))
        for method in cls.methods:
            members.append(self._serialize_method(method))

        lines = [f"{keyword} {cls.name} {{"]
        for i, member in enumerate(members):
            if i > 0:
                lines.append("")
            lines.extend(self._indent_lines(member, 1))
        lines.append("}")
        return lines

    def _serialize_fields(self, cls: ClassDecl) -> list[str]:
        """Field declarations (none in plain JavaScript)."""
        return []

    def _serialize_constructor(self, ctor: Constructor) -> list[str]:
        if ctor.parent_class is None:
            params = ", ".join(self._serialize_param(p) for p in ctor.parameters)
            body = [f"this._url = {ctor.parameters[0].name};"]
        else:
            params = self._serialize_super_param(ctor.parent_class)
            body = ["this._super = _super;"]
        return [f"constructor({params}) {{", *self._indent_lines(body, 1), "}"]

    def _serialize_super_param(self, parent_class: str) -> str:
        return "_super"

    def _serialize_param(self, param: Parameter) -> str:
        if param.has_default:
            return f"{param.name} = {self.literal(param.default)}"
        return param.name

    def _serialize_accessor(self, accessor: Accessor) -> list[str]:
        return [
            f"get {accessor.name}(){self._accessor_return_type(accessor)} {{",
            f"{self.INDENT}return new {accessor.class_name}(this);",
            "}",
        ]

    def _accessor_return_type(self, accessor: Accessor) -> str:
        return ""

    def _serialize_method(self, method: Method) -> list[str]:
        params = ", ".join(self._serialize_param(p) for p in method.parameters)
        return [
            f"async {method.name}({params}) {{",
            *self._indent_lines(self._serialize_call(method.call), 1),
            "}",
        ]

    def _serialize_call(self, call: HttpCall) -> list[str]:
        lines = [
            "return axios({",
            f"{self.INDENT}method: {json.dumps(call.method.lower())},",
            f"{self.INDENT}url: {self._serialize_url(call)},",
        ]
        for key, params in (("params", call.query), ("data", call.body)):
            if not params:
                continue
            lines.append(f"{self.INDENT}{key}: {{")
            for param in params:
                lines.append(f"{self.INDENT * 2}{json.dumps(param.wire_name)}: {param.name},")
            lines.append(f"{self.INDENT}}},")
        lines.append("});")
        return lines

    def _serialize_url(self, call: HttpCall) -> str:
        """URL expression: a string literal, or a template literal when dynamic."""
        if all(isinstance(piece, StringPart) for piece in call.url):
            return json.dumps("".join(piece.text for piece in call.url))

        out: list[str] = []
        for piece in call.url:
            if isinstance(piece, StringPart):
                out.append(_escape_template_text(piece.text))
            elif isinstance(piece, ParamPart):
                out.append(f"${{encodeURIComponent({piece.name})}}")
            elif isinstance(piece, BaseUrlPart):
                out.append("${this" + "._super" * piece.hops + "._url}")
        return "`" + "".join(out) + "`"


class TypeScriptSerializer(JavaScriptSerializer):
    """JavaScript output with typed parameters, fields and accessors."""

    TEMPLATE_LANG = "typescript"
    FILE_EXTENSION = "ts"

    def _serialize_fields(self, cls: ClassDecl) -> list[str]:
        if cls.constructor.parent_class is None:
            return ["readonly _url: string;"]
        return [f"readonly _super: {cls.constructor.parent_class};"]

    def _serialize_super_param(self, parent_class: str) -> str:
        return f"_super: {parent_class}"

    def _serialize_param(self, param: Parameter) -> str:
        decl = f"{param.name}: {self.translate_type(param.type)}"
        if param.has_default:
            return f"{decl} = {self.literal(param.default)}"
        return decl

    def _accessor_return_type(self, accessor: Accessor) -> str:
        return f": {accessor.class_name}"
