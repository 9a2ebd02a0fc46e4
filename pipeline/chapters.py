from typing import Iterator, Sequence

from pipeline.schemas import Chapter, ContentChunk, TocItem


def iterate_chapters(toc: Sequence[TocItem], content: Sequence[ContentChunk]) -> Iterator[Chapter]:
    """
    Yield one chapter per consecutive pair of page-bearing ToC entries.

    A chapter anchored at entry A (followed by entry B) holds every chunk with
    A.page <= chunk.page < B.page. Location-only entries (roman-numbered front
    matter) take no part in boundaries, and the last page-bearing entry only
    closes the chapter before it.
    """
    page_items = [item for item in toc if item.has_page]

    for start, end in zip(page_items, page_items[1:]):
        chunks = tuple(
            chunk for chunk in content
            if start.page <= chunk.page < end.page
        )
        yield Chapter(
            toc_item=start,
            text=" ".join(chunk.text for chunk in chunks),
            chunks=chunks,
        )
