"""
prisma-ls - textual analysis layer for Prisma schema editor features.

Scans incomplete, mid-edit schema text for blocks, fields and cursor
context without invoking the schema engine on every keystroke.
"""

from __future__ import annotations

from ._version import get_version
from .core import ir
from .core.errors import EngineError, PrismaLsError

__version__ = get_version()

__all__ = [
    "__version__",
    "ir",
    "PrismaLsError",
    "EngineError",
]
