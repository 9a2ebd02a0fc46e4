from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class PageNav:
    """Position parsed from a reader's footer, e.g. "Page 42 of 300"."""
    total: int
    page: Optional[int] = None
    location: Optional[int] = None
