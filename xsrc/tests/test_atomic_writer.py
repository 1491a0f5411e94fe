#!/usr/bin/env python3
"""
Tests for output validation and atomic writes.
"""

from __future__ import annotations

import pytest

from xsrc.pipeline.config import OutputConfig, OutputMode
from xsrc.pipeline.errors import OutputValidationError
from xsrc.pipeline.languages import LanguageId
from xsrc.pipeline.writer import AtomicWriter, validate_javascript, validate_python

JS = 'import axios from "axios";\n\nexport class A {\n    get() { return `${this._url}/}`; }\n}\n'


class TestValidators:
    def test_python_ok(self):
        validate_python("class A:\n    pass\n")

    def test_python_syntax_error(self):
        with pytest.raises(OutputValidationError):
            validate_python("class A(:\n")

    def test_javascript_ok(self):
        validate_javascript(JS)

    def test_javascript_brackets_in_strings_and_comments(self):
        validate_javascript('// }}}\nclass A {\n    x() { return "{(" + \'[\'; }\n}\n')

    def test_javascript_unbalanced(self):
        with pytest.raises(OutputValidationError):
            validate_javascript("class A {\n    x() {\n}\n")
        with pytest.raises(OutputValidationError):
            validate_javascript("class A {\n}\n)")

    def test_javascript_unterminated_string(self):
        with pytest.raises(OutputValidationError):
            validate_javascript('class A { x = "abc }')

    def test_javascript_without_class(self):
        with pytest.raises(OutputValidationError):
            validate_javascript("const x = 1;\n")


class TestAtomicWriter:
    def test_write_creates_parents(self, tmp_path):
        path = tmp_path / "a" / "b" / "client.js"
        AtomicWriter().write(path, JS, LanguageId.JAVASCRIPT)
        assert path.read_text() == JS
        assert not list(path.parent.glob(".*.tmp"))

    def test_force_overwrites(self, tmp_path):
        path = tmp_path / "client.js"
        path.write_text("old")
        AtomicWriter(OutputConfig(mode=OutputMode.FORCE)).write(path, JS, "js")
        assert path.read_text() == JS

    def test_error_if_exists(self, tmp_path):
        path = tmp_path / "client.js"
        path.write_text("old")
        with pytest.raises(FileExistsError):
            AtomicWriter(OutputConfig(mode=OutputMode.ERROR_IF_EXISTS)).write(path, JS, "js")
        assert path.read_text() == "old"

    def test_invalid_content_leaves_target_untouched(self, tmp_path):
        path = tmp_path / "client.py"
        path.write_text("old")
        with pytest.raises(OutputValidationError):
            AtomicWriter().write(path, "def (:\n", LanguageId.PYTHON)
        assert path.read_text() == "old"
        assert not list(tmp_path.glob(".*.tmp"))

    def test_validation_can_be_disabled(self, tmp_path):
        path = tmp_path / "client.py"
        AtomicWriter(OutputConfig(validate_before_write=False)).write(path, "def (:\n", "python")
        assert path.read_text() == "def (:\n"

    def test_non_atomic_write(self, tmp_path):
        path = tmp_path / "sub" / "client.ts"
        AtomicWriter(OutputConfig(atomic_write=False)).write(path, JS, "typescript")
        assert path.read_text() == JS


if __name__ == "__main__":
    pytest.main([__file__])
