"""
Parse the reader's navigation footer into a page/location position.

Recognized forms (case-insensitive, first match wins):
- "Page 42 of 300"      -> PageNav(page=42, total=300)
- "Location 150 of 5000" -> PageNav(location=150, total=5000)
- "Page iv of 300"      -> PageNav(location=4, total=300)

Roman-numbered pages are front matter without a stable physical page, so
they are reported as locations.
"""

import re
from typing import Optional

from pipeline.schemas import PageNav

PAGE_PATTERN = re.compile(r'page\s+(\d+)\s+of\s+(\d+)', re.IGNORECASE)
LOCATION_PATTERN = re.compile(r'location\s+(\d+)\s+of\s+(\d+)', re.IGNORECASE)
ROMAN_PAGE_PATTERN = re.compile(r'page\s+([ivxlcdm]+)\s+of\s+(\d+)', re.IGNORECASE)

ROMAN_VALUES = {
    'I': 1,
    'V': 5,
    'X': 10,
    'L': 50,
    'C': 100,
    'D': 500,
    'M': 1000,
}


def deromanize(value: str) -> int:
    """Convert a roman numeral (any case) to an integer."""
    digits = [ROMAN_VALUES[c] for c in value.upper()]
    total = 0
    for i, digit in enumerate(digits):
        if i + 1 < len(digits) and digit < digits[i + 1]:
            total -= digit
        else:
            total += digit
    return total


def parse_page_nav(text: Optional[str]) -> Optional[PageNav]:
    if not text:
        return None

    match = PAGE_PATTERN.search(text)
    if match:
        return PageNav(page=int(match.group(1)), total=int(match.group(2)))

    match = LOCATION_PATTERN.search(text)
    if match:
        return PageNav(location=int(match.group(1)), total=int(match.group(2)))

    match = ROMAN_PAGE_PATTERN.search(text)
    if match:
        return PageNav(location=deromanize(match.group(1)), total=int(match.group(2)))

    return None
