"""Reference buffer host used by tests and the demo adapter."""

from .table import BufferRecord, BufferTable, BufferTableError

__all__ = [
    "BufferRecord",
    "BufferTable",
    "BufferTableError",
]
