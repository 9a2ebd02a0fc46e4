from dataclasses import dataclass
from typing import Tuple

from .content_chunk import ContentChunk
from .toc_item import TocItem


@dataclass(frozen=True)
class Chapter:
    toc_item: TocItem
    text: str
    chunks: Tuple[ContentChunk, ...]
