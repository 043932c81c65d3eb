# helpdesk/utils/__init__.py
# Makes 'utils' a package. Exports utility functions/classes.

from .logger import logger, configure_logger
from .data_conversion import format_date, safe_int

__all__ = [
    "logger",
    "configure_logger",
    "format_date",
    "safe_int",
]
