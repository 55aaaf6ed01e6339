"""
Error types for prisma-ls.

The scanner itself reports absence (``None`` / empty lists) rather than
raising. Exceptions are reserved for the boundary with the external schema
engine.
"""


class PrismaLsError(Exception):
    """Base exception for all prisma-ls errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class EngineError(PrismaLsError):
    """
    Raised when the external schema engine cannot answer a request.

    Examples:
    - The engine rejected the schema text
    - The engine produced output that could not be decoded
    - The engine binary or module is unavailable
    """

    pass
