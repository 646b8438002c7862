"""Platform abstraction layer: filesystem and subprocess."""

from .files import (
    read_lines,
    rewrite_lines,
    temp_path_for,
)
from .process import (
    ProcessError,
    run,
)

__all__ = [
    # files
    "read_lines",
    "rewrite_lines",
    "temp_path_for",
    # process
    "ProcessError",
    "run",
]
