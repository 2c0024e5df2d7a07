"""Shared utility functions for the dependencies info task."""

from depinfo_core.utils.io import iter_data_lines, read_lines, write_text_atomic
from depinfo_core.utils.logging import log_event
from depinfo_core.utils.text import collapse_whitespace

__all__ = [
    "write_text_atomic",
    "read_lines",
    "iter_data_lines",
    "log_event",
    "collapse_whitespace",
]
