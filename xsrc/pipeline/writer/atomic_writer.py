"""
Atomic file writer for safe code generation.

Ensures that file writes are atomic to prevent data corruption
from interrupted operations.
"""

from __future__ import annotations

import ast
import logging
import tempfile
from collections.abc import Callable
from pathlib import Path

from ..config import OutputConfig, OutputMode
from ..errors import OutputValidationError
from ..languages import LanguageId

logger = logging.getLogger(__name__)

_CLOSING = {"}": "{", ")": "(", "]": "["}


def validate_python(content: str) -> None:
    """Check that the content parses as Python.

    Raises:
        OutputValidationError: If it does not
    """
    try:
        ast.parse(content)
    except SyntaxError as e:
        raise OutputValidationError(f"Generated Python code is not valid: {e}") from e


def validate_javascript(content: str) -> None:
    """Structural check of JavaScript / TypeScript output.

    Verifies that brackets balance outside of strings, template literals and
    comments, and that the output declares at least one class.

    Raises:
        OutputValidationError: If the check fails
    """
    if "class " not in content:
        raise OutputValidationError("Generated code has no class definitions")

    stack: list[str] = []
    i = 0
    n = len(content)
    while i < n:
        ch = content[i]
        if ch in "\"'`":
            end = i + 1
            while end < n and content[end] != ch:
                end += 2 if content[end] == "\\" else 1
            if end >= n:
                raise OutputValidationError(f"Unterminated string literal starting at offset {i}")
            # Substitutions inside template literals are not scanned
            i = end + 1
            continue
        if content.startswith("//", i):
            newline = content.find("\n", i)
            i = n if newline < 0 else newline + 1
            continue
        if ch in "{([":
            stack.append(ch)
        elif ch in _CLOSING:
            if not stack or stack.pop() != _CLOSING[ch]:
                raise OutputValidationError(f"Unbalanced '{ch}' at offset {i}")
        i += 1

    if stack:
        raise OutputValidationError(f"Generated code has {len(stack)} unclosed bracket(s)")


VALIDATORS: dict[LanguageId, Callable[[str], None]] = {
    LanguageId.JAVASCRIPT: validate_javascript,
    LanguageId.TYPESCRIPT: validate_javascript,
    LanguageId.PYTHON: validate_python,
}


class AtomicWriter:
    """Handles atomic file writes with validation.

    Uses a two-phase commit approach:
    1. Validate the content
    2. Write to a temporary file in the same directory
    3. Atomically replace the target file

    This ensures that an interrupted write operation never leaves
    the target file in an incomplete state.
    """

    def __init__(self, config: OutputConfig | None = None):
        """Initialize the atomic writer.

        Args:
            config: Output configuration (mode, validation, atomicity)
        """
        self.config = config or OutputConfig()

    def write(self, path: Path, content: str, language: LanguageId) -> None:
        """Write content to file according to the output configuration.

        Args:
            path: Target file path
            content: Content to write
            language: Language used to pick the validator

        Raises:
            FileExistsError: If the file exists and the mode forbids overwriting
            OutputValidationError: If validation fails
            OSError: If file operations fail
        """
        path = Path(path)
        if self.config.mode == OutputMode.ERROR_IF_EXISTS and path.exists():
            raise FileExistsError(f"Output file already exists: {path}. Use force mode to overwrite.")

        if self.config.validate_before_write:
            self.validate(content, language)

        if self.config.atomic_write:
            self._write_atomic(path, content)
        else:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")

        logger.debug("Wrote %d bytes to %s", len(content), path)

    def validate(self, content: str, language: LanguageId) -> None:
        """Validate content based on language."""
        validator = VALIDATORS.get(LanguageId.parse(language))
        if validator is not None:
            validator(content)

    def _write_atomic(self, path: Path, content: str) -> None:
        # Ensure parent directory exists
        path.parent.mkdir(parents=True, exist_ok=True)

        # Same directory ensures atomic rename on the same filesystem
        temp_fd, temp_path_str = tempfile.mkstemp(
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            text=True,
        )
        temp_path = Path(temp_path_str)

        try:
            with open(temp_fd, "w", encoding="utf-8") as f:
                f.write(content)
            temp_path.replace(path)
        except BaseException:
            temp_path.unlink(missing_ok=True)
            raise
