import sys
from infra.config import Config
from infra.storage.book_storage import BookStorage


def resolve_book_id(args) -> str:
    book_id = getattr(args, 'book_id', None) or Config.book_id
    if not book_id:
        print("❌ Book id is required (argument, BOOK_ID or ASIN)")
        sys.exit(1)
    return book_id


def get_book_storage(args) -> BookStorage:
    book_id = resolve_book_id(args)
    storage = BookStorage(book_id, storage_root=Config.book_storage_root)

    if not storage.exists:
        print(f"❌ Book not found: {storage.book_dir}")
        sys.exit(1)

    return storage
