"""Honeycomb Python client: typed access to the Honeycomb management API."""

from honeycombio.context import Context, background
from honeycombio.errors import (
    ConfigError,
    ContextCancelled,
    DeadlineExceeded,
    DetailedError,
    ErrorTypeDetail,
    HoneycombError,
    JSONAPIDecodeError,
)

__version__ = "0.1.0"

__all__ = [
    "Context",
    "background",
    "ConfigError",
    "ContextCancelled",
    "DeadlineExceeded",
    "DetailedError",
    "ErrorTypeDetail",
    "HoneycombError",
    "JSONAPIDecodeError",
]
