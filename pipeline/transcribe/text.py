"""Post-processing of raw transcriptions: whitespace, refusals, echoed headings."""

import re
from typing import Optional

from pipeline.schemas import TocItem

REFUSAL_PATTERN = re.compile(r"i'm sorry", re.IGNORECASE)
REFUSAL_MAX_LENGTH = 100

PAGE_NUMBER_LINE = re.compile(r'^\d+$')


def normalize_transcript(raw: str) -> str:
    """
    Strip every line, drop blank lines and the first line that is only a
    page number. A number on the last line is kept: a response of just "42"
    is page text, not an empty transcription.
    """
    lines = [line.strip() for line in raw.splitlines()]
    lines = [line for line in lines if line]

    for i, line in enumerate(lines[:-1]):
        if PAGE_NUMBER_LINE.match(line):
            del lines[i]
            break

    return "\n".join(lines)


def looks_like_refusal(text: str) -> bool:
    """Short apologetic answers are refusals, not page text."""
    return len(text) < REFUSAL_MAX_LENGTH and bool(REFUSAL_PATTERN.search(text))


def strip_heading(text: str, toc_item: Optional[TocItem]) -> str:
    """Remove a leading echo of the section heading, ignoring case."""
    if toc_item is None:
        return text
    pattern = re.compile(rf'^{re.escape(toc_item.label)}\s*', re.IGNORECASE)
    return pattern.sub('', text, count=1)
