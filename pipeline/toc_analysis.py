"""
Classify table-of-contents entries into front matter, content and back matter.

The back-matter check is a closed-vocabulary match on the label plus a
position check: the entry must sit in the trailing part of the book. Late
narrative sections such as "Epilogue" or "Afterword" are not in the
vocabulary and are therefore never treated as back matter.
"""

import re
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

from infra.errors import StructuralInputError
from pipeline.schemas import TocItem

BACK_MATTER_LABELS = (
    "acknowledgements",
    "acknowledgments",
    "about the author",
    "appendix",
    "bibliography",
    "index",
    "notes",
    "glossary",
)

# Fraction of the book, counted from the end, where back matter may start.
POST_CONTENT_TAIL_FRACTION = 0.1


@dataclass(frozen=True)
class TocAnalysis:
    first_content_page_toc_item: TocItem
    first_post_content_page_toc_item: Optional[TocItem] = None


def is_back_matter_label(label: str, vocabulary: Iterable[str] = BACK_MATTER_LABELS) -> bool:
    """Whole label or leading words match, e.g. "Appendix B" but not "Indexing"."""
    normalized = label.strip().lower()
    return any(
        re.match(rf'{re.escape(term)}\b', normalized)
        for term in vocabulary
    )


def analyze_toc(
    toc: Sequence[TocItem],
    total_num_pages: int,
    vocabulary: Iterable[str] = BACK_MATTER_LABELS,
    tail_fraction: float = POST_CONTENT_TAIL_FRACTION,
) -> TocAnalysis:
    """
    Find where the book's content starts and where its back matter begins.

    Args:
        toc: ToC entries in document order
        total_num_pages: Page count of the whole book
        vocabulary: Lower-case back-matter labels, matched as whole label or prefix
        tail_fraction: Trailing share of the book where back matter may start

    Returns:
        TocAnalysis with the first page-bearing entry and, if any, the first
        back-matter entry

    Raises:
        StructuralInputError: If no entry carries a page number
    """
    page_items: List[TocItem] = [item for item in toc if item.has_page]
    if not page_items:
        raise StructuralInputError("invalid book metadata: no toc entries with a page number")

    vocabulary = tuple(term.lower() for term in vocabulary)
    tail_start = total_num_pages * (1 - tail_fraction)

    post_content = next(
        (
            item for item in page_items
            if item.page >= tail_start and is_back_matter_label(item.label, vocabulary)
        ),
        None
    )

    return TocAnalysis(
        first_content_page_toc_item=page_items[0],
        first_post_content_page_toc_item=post_content,
    )


def truncate_at_back_matter(toc: Sequence[TocItem], analysis: TocAnalysis) -> List[TocItem]:
    """Drop entries after the first back-matter entry, keeping it as the closing boundary."""
    boundary = analysis.first_post_content_page_toc_item
    if boundary is None:
        return list(toc)
    cutoff = toc.index(boundary)
    return list(toc[:cutoff + 1])
