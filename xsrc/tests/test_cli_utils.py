#!/usr/bin/env python3

import click
import pytest

from xsrc.cli_utils import reconstruct_command_line
from xsrc.xsrc import xsrc


class TestCliUtils:
    """Test cases for CLI utilities"""

    def test_reconstruct_command_line_without_context(self):
        """Without an active Click context the program name is returned"""
        assert reconstruct_command_line(xsrc) == "xsrc"

    def test_reconstruct_command_line_with_context(self, tmp_path):
        schema = tmp_path / "api.yaml"
        schema.write_text("$url: http://h\n")

        with click.Context(xsrc) as ctx:
            ctx.params = {
                "lang": "python",
                "output": None,
                "name": "Backend",
                "config": None,
                "no_clobber": True,
                "verbose": False,
                "schema": str(schema),
            }
            result = reconstruct_command_line(xsrc)

        assert result == "xsrc api.yaml --lang python --name Backend"

    def test_default_options_are_omitted(self, tmp_path):
        schema = tmp_path / "api.yaml"
        schema.write_text("$url: http://h\n")

        with click.Context(xsrc) as ctx:
            ctx.params = {"lang": "javascript", "schema": str(schema)}
            result = reconstruct_command_line(xsrc)

        assert result == "xsrc api.yaml"

    def test_paths_are_recorded_by_name(self, tmp_path):
        """Existing or not, path parameters never leak their directory"""
        with click.Context(xsrc) as ctx:
            ctx.params = {"schema": "does/not/exist.yaml", "output": str(tmp_path / "out" / "api.js")}
            result = reconstruct_command_line(xsrc)

        assert result == "xsrc exist.yaml --output api.js"


if __name__ == "__main__":
    pytest.main([__file__])
