"""
Entry point for the prisma-ls server.

Usage:
    python -m prisma_ls.lsp
"""

from .server import start_server

if __name__ == "__main__":
    start_server()
