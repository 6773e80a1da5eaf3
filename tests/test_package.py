import importlib

import pytest

import convert_md

LICENSE_LINE = "MIT License - Copyright (c) 2025 Markdown to PDF Converter"


@pytest.mark.parametrize("module_name", [
    "convert_md",
    "convert_md.cli",
    "convert_md.config",
    "convert_md.console",
    "convert_md.dependencies",
    "convert_md.errors",
    "convert_md.margins",
    "convert_md.pdf",
    "convert_md.renderer",
    "convert_md.sanitizer",
])
def test_module_docstring_carries_license(module_name: str) -> None:
    module = importlib.import_module(module_name)
    assert LICENSE_LINE in (module.__doc__ or "")


def test_public_exports() -> None:
    for name in convert_md.__all__:
        assert hasattr(convert_md, name)
