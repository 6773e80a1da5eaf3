"""
Convert Markdown documents with Mermaid diagrams to HTML and PDF.

MIT License - Copyright (c) 2025 Markdown to PDF Converter
"""

__version__ = "1.0.0"

from .errors import ConvertError, InputNotFoundError, CaptureError
from .sanitizer import sanitize
from .renderer import convert_to_html, render_html

__all__ = [
    "__version__",
    "ConvertError",
    "InputNotFoundError",
    "CaptureError",
    "sanitize",
    "convert_to_html",
    "render_html",
]
