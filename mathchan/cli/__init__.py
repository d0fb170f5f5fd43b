"""CLI package for math channel tools."""

__all__ = [
    "eval",
    "preview",
    "syntax",
]
