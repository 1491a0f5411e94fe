#!/usr/bin/env python3
"""
Tests for GeneratorConfig serialization.
"""

from __future__ import annotations

import pytest

from xsrc.pipeline.config import GeneratorConfig, OutputConfig, OutputMode
from xsrc.pipeline.errors import DocumentLoadError


def test_defaults():
    config = GeneratorConfig()
    assert config.add_generation_comment
    assert config.generation_command == ""
    assert config.class_name == ""
    assert config.output == OutputConfig()
    assert config.output.mode == OutputMode.FORCE


def test_from_dict():
    config = GeneratorConfig.from_dict(
        {
            "add_generation_comment": False,
            "class_name": "Api",
            "output": {"mode": "error", "atomic_write": False},
            "unknown_key": 1,
        }
    )
    assert not config.add_generation_comment
    assert config.class_name == "Api"
    assert config.output.mode == OutputMode.ERROR_IF_EXISTS
    assert not config.output.atomic_write
    assert config.output.validate_before_write
    assert not hasattr(config, "unknown_key")


def test_to_dict_round_trip():
    config = GeneratorConfig(class_name="Api", output=OutputConfig(mode=OutputMode.ERROR_IF_EXISTS))
    data = config.to_dict()
    assert data["output"]["mode"] == "error"
    assert GeneratorConfig.from_dict(data) == config


@pytest.mark.parametrize(
    "data",
    [
        [1],
        "force",
        {"output": {"mode": "sometimes"}},
        {"output": {"mode": ["force"]}},
        {"output": "force"},
        {"output": {"atomic_write": "yes"}},
        {"add_generation_comment": "no"},
        {"class_name": 3},
    ],
)
def test_invalid_config(data):
    with pytest.raises(DocumentLoadError):
        GeneratorConfig.from_dict(data)


if __name__ == "__main__":
    pytest.main([__file__])
