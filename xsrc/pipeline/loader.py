"""
Schema document loading.

YAML is the native schema format; ``.json`` files are read with the json
module. Both produce the generic mapping/sequence/scalar tree the
transformer consumes.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml

from .errors import DocumentLoadError

logger = logging.getLogger(__name__)


def load_document(path: str | Path) -> Any:
    """
    Load a schema document.

    Args:
        path: Path to a ``.yaml`` / ``.yml`` / ``.json`` file

    Returns:
        The decoded document

    Raises:
        DocumentLoadError: If the file cannot be read or decoded
    """
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            if path.suffix.lower() == ".json":
                document = json.load(f)
            else:
                document = yaml.safe_load(f)
    except OSError as e:
        raise DocumentLoadError(f"Cannot read schema file: {e}", str(path)) from e
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise DocumentLoadError(f"Cannot decode schema file: {e}", str(path)) from e

    logger.debug("Loaded schema document %s", path)
    return document

