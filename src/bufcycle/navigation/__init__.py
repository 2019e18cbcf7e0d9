"""Buffer selection and traversal over host-provided buffer ids."""

from .classify import BufferClassifier
from .config import DEFAULT_HELP_FILETYPE, DEFAULT_SKIP_FILETYPES, NavigatorConfig
from .host import (
    NO_BUFFER,
    BufferActivator,
    BufferId,
    BufferInfo,
    BufferQuery,
    Direction,
    HostError,
)
from .navigator import BufferNavigator, NavigationOutcome
from .scan import circular_scan, linear_scan

__all__ = [
    "BufferActivator",
    "BufferClassifier",
    "BufferId",
    "BufferInfo",
    "BufferNavigator",
    "BufferQuery",
    "DEFAULT_HELP_FILETYPE",
    "DEFAULT_SKIP_FILETYPES",
    "Direction",
    "HostError",
    "NO_BUFFER",
    "NavigationOutcome",
    "NavigatorConfig",
    "circular_scan",
    "linear_scan",
]
