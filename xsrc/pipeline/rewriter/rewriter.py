"""
Rewriter that maps the bound tree to the target AST.

Phase 3 of the pipeline. The mapping is the same for every language; only the
naming rules differ.
"""

from __future__ import annotations

import logging

from ... import __version__
from ..analyzer.ir_nodes import BoundAction, BoundAPISet, BoundClient, ParamOrigin, PathSlot, RootUrl, TextPart
from ..config import GeneratorConfig
from ..errors import DuplicateNameError
from ..expression.nodes import PrimitiveType
from ..languages import LanguageId
from .naming import NamingRules
from .target_ast import (
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
    UrlPiece,
)

logger = logging.getLogger(__name__)


class Rewriter:
    """Builds a :class:`ClientModule` from a :class:`BoundClient`."""

    def __init__(self, language: LanguageId, naming: NamingRules, config: GeneratorConfig | None = None):
        """
        Initialize the rewriter.

        Args:
            language: Target language of the module
            naming: Naming rules of the target language
            config: Generation configuration
        """
        self.language = language
        self.naming = naming
        self.config = config or GeneratorConfig()
        self._class_names: dict[str, str] = {}

    def rewrite(self, bound: BoundClient) -> ClientModule:
        """
        Rewrite the bound tree.

        Args:
            bound: The bound client

        Returns:
            The target AST, classes ordered root first then depth-first

        Raises:
            DuplicateNameError: If two members, parameters or classes end up
                with the same identifier
        """
        self._class_names = {}
        module = ClientModule(
            language=self.language,
            root_class=bound.class_name,
            generation_comment=self._generation_comment(),
        )

        root_ctor = Constructor(
            parameters=[
                Parameter(
                    name="url",
                    wire_name="url",
                    type=PrimitiveType.STRING,
                    origin=ParamOrigin.PATH,
                    default=bound.url,
                    has_default=bound.url is not None,
                )
            ]
        )
        self._rewrite_apiset(bound.root, bound.class_name, [], root_ctor, 0, module.classes)

        logger.debug("Rewrote %s into %d %s classes", bound.class_name, len(module.classes), self.language.value)
        return module

    def _generation_comment(self) -> str:
        if not self.config.add_generation_comment:
            return ""
        command = self.config.generation_command or "xsrc"
        return f"Generated by xsrc v{__version__} : {command}"

    def _rewrite_apiset(
        self,
        apiset: BoundAPISet,
        root_name: str,
        path: list[str],
        constructor: Constructor,
        depth: int,
        out: list[ClassDecl],
    ) -> None:
        class_name = self.naming.class_name(root_name, path)
        if class_name in self._class_names:
            raise DuplicateNameError(
                f"Class name '{class_name}' is also generated for '{self._class_names[class_name] or '(root)'}'",
                apiset.schema_path,
            )
        self._class_names[class_name] = apiset.schema_path

        decl = ClassDecl(name=class_name, schema_path=apiset.schema_path, constructor=constructor)
        out.append(decl)

        members: dict[str, str] = {}

        def claim(identifier: str, schema_path: str) -> None:
            if identifier in members:
                raise DuplicateNameError(
                    f"'{identifier}' is generated for both '{members[identifier]}' and '{schema_path}'",
                    schema_path,
                )
            members[identifier] = schema_path

        children: list[tuple[BoundAPISet, str]] = []
        for name, child in apiset.apisets.items():
            identifier = self.naming.member_name(name)
            claim(identifier, child.schema_path)
            child_class = self.naming.class_name(root_name, [*path, name])
            decl.accessors.append(Accessor(name=identifier, class_name=child_class))
            children.append((child, name))

        for name, action in apiset.actions.items():
            identifier = self.naming.member_name(name)
            claim(identifier, action.schema_path)
            decl.methods.append(self._rewrite_action(identifier, action, depth))

        for child, name in children:
            self._rewrite_apiset(child, root_name, [*path, name], Constructor(parent_class=class_name), depth + 1, out)

    def _rewrite_action(self, identifier: str, action: BoundAction, depth: int) -> Method:
        parameters: list[Parameter] = []
        by_wire_name: dict[str, Parameter] = {}
        seen: dict[str, str] = {}
        for spec in action.parameters:
            name = self.naming.param_name(spec.name)
            if name in seen:
                raise DuplicateNameError(
                    f"Parameters '{seen[name]}' and '{spec.name}' both map to '{name}'",
                    action.schema_path,
                )
            seen[name] = spec.name
            param = Parameter(
                name=name,
                wire_name=spec.name,
                type=spec.primitive_type,
                origin=spec.origin,
                default=spec.default,
                has_default=spec.has_default,
            )
            parameters.append(param)
            by_wire_name[spec.name] = param

        url: list[UrlPiece] = []
        for part in action.url.parts:
            if isinstance(part, TextPart):
                url.append(StringPart(part.text))
            elif isinstance(part, PathSlot):
                param = by_wire_name[part.param.name]
                url.append(ParamPart(name=param.name, type=param.type))
            elif isinstance(part, RootUrl):
                url.append(BaseUrlPart(hops=depth))

        call = HttpCall(
            method=action.method.value,
            url=url,
            query=[p for p in parameters if p.origin == ParamOrigin.QUERY],
            body=[p for p in parameters if p.origin == ParamOrigin.BODY],
        )
        return Method(name=identifier, wire_name=action.name, parameters=parameters, call=call)
