"""Terminal output for the smcmc command line.

Submodules:
- console: Theme and console instance
- logging: Logger setup and helpers
- messages: Status messages (success, error, warning, etc.)
- tables: Summary and interval tables
"""

from smcmc.ui.console import VERSION, Verbosity, console, set_verbosity
from smcmc.ui.logging import close_logging, log, log_dict, log_section, setup_logging
from smcmc.ui.messages import (
    error,
    info,
    show_error_with_details,
    show_file_not_found,
    show_header,
    success,
    warning,
)
from smcmc.ui.tables import create_table, intervals_table, print_summary, summary_table

__all__ = [
    "VERSION",
    "Verbosity",
    "close_logging",
    "console",
    "create_table",
    "error",
    "info",
    "intervals_table",
    "log",
    "log_dict",
    "log_section",
    "print_summary",
    "set_verbosity",
    "setup_logging",
    "show_error_with_details",
    "show_file_not_found",
    "show_header",
    "success",
    "summary_table",
    "warning",
]
