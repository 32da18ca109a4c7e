"""
RAG engine exceptions.
"""


class RAGError(Exception):
    """Base exception for RAG engine errors."""

    def __init__(self, message: str, code: str | None = None):
        self.message = message
        self.code = code
        super().__init__(self.message)


class ConfigurationError(RAGError):
    """Raised when chunking or service settings are invalid."""

    def __init__(self, message: str):
        super().__init__(message, code="configuration_error")


class DimensionMismatchError(RAGError, ValueError):
    """Raised when two vectors of different length are compared."""

    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Vectors must have the same dimension: {expected} != {actual}",
            code="dimension_mismatch",
        )


class EmbeddingError(RAGError):
    """Raised when the embedding provider fails or returns a malformed response."""

    def __init__(self, message: str):
        super().__init__(f"Embedding failed: {message}", code="capability_failure")
