from .toc_item import TocItem
from .content_chunk import ContentChunk
from .book_metadata import BookMeta, BookMetadata, PageCapture, normalize_authors
from .chapter import Chapter
from .page_nav import PageNav

__all__ = [
    "TocItem",
    "ContentChunk",
    "BookMeta",
    "BookMetadata",
    "PageCapture",
    "normalize_authors",
    "Chapter",
    "PageNav",
]
