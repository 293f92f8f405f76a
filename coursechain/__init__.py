"""In-memory course tracking, progress, reward token and certificate ledgers."""

__version__ = "0.1.0"
__all__ = [
    "batch",
    "batch_storage",
    "batch_types",
    "certificate",
    "certificate_storage",
    "certificate_types",
    "courses",
    "env",
    "progress",
    "token",
]