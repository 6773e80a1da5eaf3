"""
Coloured console output shared by the converters and the CLI.

MIT License - Copyright (c) 2025 Markdown to PDF Converter
"""

import sys

from colorama import init, Fore, Style

# Initialize colorama for cross-platform colored output
init(autoreset=True)

_debug = False


def set_debug(enabled: bool) -> None:
    """Enable or disable debug messages."""
    global _debug
    _debug = enabled


def log_debug(message: str) -> None:
    """Log debug message with color (only if debug mode is enabled)."""
    if _debug:
        print(f"{Fore.CYAN}[DEBUG]{Style.RESET_ALL} {message}")


def log_info(message: str) -> None:
    """Log info message with color."""
    print(f"{Fore.GREEN}[INFO]{Style.RESET_ALL} {message}")


def log_warning(message: str) -> None:
    """Log warning message with color."""
    print(f"{Fore.YELLOW}[WARNING]{Style.RESET_ALL} {message}", file=sys.stderr)


def log_error(message: str) -> None:
    """Log error message with color."""
    print(f"{Fore.RED}[ERROR]{Style.RESET_ALL} {message}", file=sys.stderr)


def log_success(message: str) -> None:
    """Log success message with color."""
    print(f"{Fore.GREEN}[OK]{Style.RESET_ALL} {message}")
