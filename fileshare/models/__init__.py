from .file import StoredFile

__all__ = [
    "StoredFile",
]
