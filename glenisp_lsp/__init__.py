"""glenisp Language Server package.

This package provides:
- A pygls-based Language Server for glenisp source files.
- A lightweight indexer that scans documents for def/fun forms without evaluation.

Note: The LSP does not evaluate user buffers; it builds a static index from text.
"""

__all__ = [
    "server",
    "indexer",
]
