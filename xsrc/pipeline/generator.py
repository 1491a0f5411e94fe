"""
Pipeline generator: runs one compile from schema document to source text.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from .analyzer.ir_nodes import BoundClient
from .analyzer.transformer import Transformer
from .codegen import render
from .config import GeneratorConfig
from .languages import LanguageId
from .rewriter import rewrite
from .rewriter.target_ast import ClientModule
from .writer import AtomicWriter

logger = logging.getLogger(__name__)


class PipelineGenerator:
    """Compiles an xsrc schema into a client for one target language."""

    def __init__(
        self,
        schema: Any,
        config: GeneratorConfig | None = None,
        language: LanguageId | str = LanguageId.JAVASCRIPT,
        name: str | None = None,
    ):
        """
        Initialize the generator.

        Args:
            schema: The decoded schema document
            config: Generation configuration
            language: Target language name or alias
            name: Client class name (overrides config.class_name and $as)

        Raises:
            UnsupportedTargetLanguageError: If the language is unknown
        """
        self.schema = schema
        self.config = config or GeneratorConfig()
        self.language = LanguageId.parse(language)
        self.name = name or self.config.class_name or None

    def bind(self) -> BoundClient:
        """Phase 1-2: parse expressions, resolve contexts, build the bound tree."""
        return Transformer().transform(self.schema, self.name)

    def build(self) -> ClientModule:
        """Phase 3: rewrite the bound tree into the target AST."""
        return rewrite(self.bind(), self.language, self.config)

    def generate(self) -> str:
        """Run the whole pipeline and return the generated source."""
        module = self.build()
        code = render(module)
        logger.debug("Generated %d lines of %s", code.count("\n"), self.language.value)
        return code

    def generate_to_file(self, path: str | Path) -> Path:
        """Generate and write the output through the atomic writer.

        Returns:
            The resolved output path
        """
        code = self.generate()
        path = Path(path).resolve()
        AtomicWriter(self.config.output).write(path, code, self.language)
        return path
