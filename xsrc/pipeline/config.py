"""
Configuration for the xsrc pipeline.

Plain dataclasses that can be loaded from and dumped to JSON dictionaries.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .errors import DocumentLoadError


class OutputMode(str, Enum):
    """Output mode for file generation.

    Controls behavior when the output file already exists.
    """

    FORCE = "force"  # Default: overwrite
    ERROR_IF_EXISTS = "error"  # Raise error if file exists


@dataclass
class OutputConfig:
    """Configuration for output file handling.

    Attributes:
        mode: How to handle existing output files
        validate_before_write: Whether to validate code before writing
        atomic_write: Whether to use atomic file writes
    """

    mode: OutputMode = OutputMode.FORCE
    validate_before_write: bool = True
    atomic_write: bool = True


@dataclass
class GeneratorConfig:
    """Configuration options for client generation."""

    # Add generation comment at top of file
    add_generation_comment: bool = True

    # Command line recorded in the generation comment (filled by the CLI)
    generation_command: str = ""

    # Client class name; overrides the schema's $as when set
    class_name: str = ""

    # Output configuration
    output: OutputConfig = field(default_factory=OutputConfig)

    @staticmethod
    def from_dict(d: dict) -> GeneratorConfig:
        """Create a config from a dictionary.

        Raises:
            DocumentLoadError: If the dictionary does not describe a valid config
        """
        if not isinstance(d, dict):
            raise DocumentLoadError(f"Config must be a JSON object, got {type(d).__name__}")

        config = GeneratorConfig()
        for k, v in d.items():
            if k == "output":
                config.output = _output_from_dict(v)
            elif k in _FIELD_TYPES:
                if not isinstance(v, _FIELD_TYPES[k]):
                    raise DocumentLoadError(f"Config field '{k}' must be a {_FIELD_TYPES[k].__name__}, got {type(v).__name__}")
                setattr(config, k, v)
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "add_generation_comment": self.add_generation_comment,
            "generation_command": self.generation_command,
            "class_name": self.class_name,
            "output": {
                "mode": self.output.mode.value,
                "validate_before_write": self.output.validate_before_write,
                "atomic_write": self.output.atomic_write,
            },
        }


_FIELD_TYPES = {
    "add_generation_comment": bool,
    "generation_command": str,
    "class_name": str,
}

_OUTPUT_FIELDS = ("validate_before_write", "atomic_write")


def _output_from_dict(d: Any) -> OutputConfig:
    if not isinstance(d, dict):
        raise DocumentLoadError(f"Config field 'output' must be an object, got {type(d).__name__}")

    mode = d.get("mode", OutputMode.FORCE)
    try:
        mode = OutputMode(mode)
    except ValueError:
        allowed = ", ".join(m.value for m in OutputMode)
        raise DocumentLoadError(f"Invalid output mode {mode!r} (expected one of: {allowed})") from None

    flags = {}
    for name in _OUTPUT_FIELDS:
        value = d.get(name, True)
        if not isinstance(value, bool):
            raise DocumentLoadError(f"Config field 'output.{name}' must be a bool, got {type(value).__name__}")
        flags[name] = value
    return OutputConfig(mode=mode, **flags)
