"""
Base class for serializers.

Defines the interface every language serializer implements and sets up the
Jinja2 environment holding the file header templates.
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

import jinja2

from ..expression.nodes import PrimitiveType
from ..rewriter.target_ast import ClientModule


class Serializer(ABC):
    """Abstract base class for serializers."""

    # Type mapping from primitive types to language types
    TYPE_MAP: dict[PrimitiveType, str] = {}

    # Template directory name
    TEMPLATE_LANG: str = ""

    # File extension
    FILE_EXTENSION: str = ""

    # Line comment prefix
    COMMENT_PREFIX: str = "//"

    INDENT = "    "

    def __init__(self) -> None:
        self._setup_templates()

    def _setup_templates(self) -> None:
        """Set up Jinja2 templates."""
        template_dir = Path(__file__).parent.parent.parent / "templates" / self.TEMPLATE_LANG
        self.jinja_env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(template_dir)),
            lstrip_blocks=True,
            trim_blocks=True,
            keep_trailing_newline=True,
        )
        self.prefix_template = self.jinja_env.get_template(f"prefix.{self.FILE_EXTENSION}.jinja2")

    def render_prefix(self, module: ClientModule) -> str:
        """Render the file header (generation comment and imports)."""
        comment = f"{self.COMMENT_PREFIX} {module.generation_comment}" if module.generation_comment else ""
        return self.prefix_template.render(generation_comment=comment, root_class=module.root_class)

    @abstractmethod
    def serialize(self, module: ClientModule) -> str:
        """
        Serialize a module to source code.

        Args:
            module: The target AST

        Returns:
            Source code ending with a newline
        """

    def translate_type(self, primitive: PrimitiveType) -> str:
        return self.TYPE_MAP[primitive]

    def literal(self, value: Any) -> str:
        """Render a default value as a literal of the target language."""
        return json.dumps(value)

    def _indent_lines(self, lines: list[str], level: int) -> list[str]:
        """Add indentation to a list of lines."""
        if level == 0:
            return lines
        prefix = self.INDENT * level
        return [prefix + line if line.strip() else line for line in lines]
