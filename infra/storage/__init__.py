"""Storage subsystem: BookStorage"""

from infra.storage.book_storage import BookStorage

__all__ = [
    "BookStorage",
]
