"""
Runtime dependency checks for the converter.

MIT License - Copyright (c) 2025 Markdown to PDF Converter
"""

import importlib.util
from typing import Dict

from .console import log_debug, log_error

REMEDIATION_HINT = (
    "PDF conversion with Mermaid requires Playwright and a Chromium build. "
    "Make sure all dependencies are installed: "
    "pip install convert-md && python -m playwright install chromium"
)

# import name -> description
REQUIRED_MODULES: Dict[str, str] = {
    "markdown": "Python-Markdown",
    "playwright": "Playwright",
}


def check_module(name: str, description: str) -> bool:
    """Check if a Python module can be imported."""
    if importlib.util.find_spec(name) is None:
        log_error(f"✗ {description} is not available")
        return False
    log_debug(f"✓ {description} is available")
    return True


def check_dependencies() -> bool:
    """Check every required module and print the remediation hint on failure."""
    results = [check_module(name, description) for name, description in REQUIRED_MODULES.items()]
    if not all(results):
        log_error(REMEDIATION_HINT)
        return False
    return True
