"""
prisma-ls Language Server Protocol implementation.

Provides IDE features for Prisma schema files:
- Go-to-definition
- Hover summaries
- Context-aware completion
- Document symbols
"""

from .server import start_server

__all__ = ["start_server"]
