"""
Exceptions raised by the converter.

MIT License - Copyright (c) 2025 Markdown to PDF Converter
"""

from pathlib import Path


class ConvertError(Exception):
    """Base class for conversion failures."""


class InputNotFoundError(ConvertError, FileNotFoundError):
    """The Markdown input file does not exist."""

    def __init__(self, path):
        self.path = Path(path)
        super().__init__(f"Input file not found: {path}")


class CaptureError(ConvertError):
    """The headless browser failed to launch, load the page or print it."""
