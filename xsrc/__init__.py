"""xsrc

A schema-driven REST client generator. Reads a YAML description of an API
(nested API sets, actions, URL templates and typed parameters) and emits a
client class tree in JavaScript, TypeScript or Python.
"""

__version__ = "0.3.0"

from .pipeline import (
    AtomicWriter,
    GeneratorConfig,
    LanguageId,
    OutputConfig,
    OutputMode,
    PipelineGenerator,
    XsrcError,
    load_document,
)

__all__ = [
    "PipelineGenerator",
    "GeneratorConfig",
    "OutputConfig",
    "OutputMode",
    "LanguageId",
    "XsrcError",
    "AtomicWriter",
    "load_document",
]
