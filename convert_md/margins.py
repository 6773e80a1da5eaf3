"""
Page margin parsing for PDF capture.

MIT License - Copyright (c) 2025 Markdown to PDF Converter
"""

import re
from typing import Dict

_MARGIN_RE = re.compile(r'^(-?\d+(?:\.\d+)?(?:[eE][+-]?\d+)?)\s*(cm|in|mm|pt|px)?$')

# Inches per unit
_UNIT_INCHES = {
    'in': 1.0,
    'cm': 1 / 2.54,
    'mm': 1 / 25.4,
    'pt': 1 / 72,
    'px': 1 / 96,  # Assuming 96 DPI
}

MAX_MARGIN_INCHES = 3


def validate_margin(margin_str: str) -> str:
    """Validate and normalize a single margin value.

    A bare number is taken as millimetres. Values must lie between 0 and
    3 inches.
    """
    match = _MARGIN_RE.match(margin_str.strip())
    if not match:
        raise ValueError(f"Invalid margin format: '{margin_str}'. Use format like '20mm', '2.5cm', '1in', etc.")

    value_str, unit = match.groups()
    value = float(value_str)
    if not unit:
        unit = 'mm'

    value_inches = value * _UNIT_INCHES[unit]
    if value_inches < 0:
        raise ValueError(f"Margin cannot be negative: '{margin_str}'. Minimum value is 0.")
    elif value_inches > MAX_MARGIN_INCHES:
        raise ValueError(f"Margin too large: '{margin_str}'. Maximum value is 3 inches (7.62cm).")

    return f"{value:g}{unit}"


def parse_margins(page_margins: str) -> Dict[str, str]:
    """Parse a CSS-style margin shorthand into individual margin values."""
    margin_parts = page_margins.split()

    if len(margin_parts) == 1:
        margin = validate_margin(margin_parts[0])
        return {'top': margin, 'right': margin, 'bottom': margin, 'left': margin}
    elif len(margin_parts) == 2:
        # Vertical and horizontal
        vertical = validate_margin(margin_parts[0])
        horizontal = validate_margin(margin_parts[1])
        return {'top': vertical, 'right': horizontal, 'bottom': vertical, 'left': horizontal}
    elif len(margin_parts) == 4:
        return {
            'top': validate_margin(margin_parts[0]),
            'right': validate_margin(margin_parts[1]),
            'bottom': validate_margin(margin_parts[2]),
            'left': validate_margin(margin_parts[3]),
        }
    else:
        raise ValueError(f"Invalid margin format: '{page_margins}'. Use 1, 2, or 4 values.")
