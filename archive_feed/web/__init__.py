"""HTTP layer: FastAPI application and page cache."""

__all__ = [
    "app",
    "cache",
]
