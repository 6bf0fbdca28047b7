"""Utility modules for cleanctl.

This module exports commonly used utility functions.
"""

from cleanctl.utils.formatting import (
    console,
    err_console,
    format_duration,
    format_size,
    print_error,
    print_info,
    print_success,
    print_warning,
)

__all__ = [
    "console",
    "err_console",
    "format_duration",
    "format_size",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
]
