"""Buffer cycling commands that skip plugin windows and respect help buffers."""

__all__ = [
    "actions",
    "adapters",
    "buffer",
    "dispatch",
    "keymaps",
    "navigation",
    "runtime",
]

__version__ = "0.1.0"
