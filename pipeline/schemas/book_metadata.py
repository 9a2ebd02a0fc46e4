from typing import List
from pydantic import BaseModel, Field, field_validator, model_validator

from .toc_item import TocItem


def normalize_authors(authors: List[str]) -> List[str]:
    """
    Normalize raw author strings into display names.

    Entries may hold several authors separated by ':' and each author may
    be written "Last, First". Duplicates are removed, first occurrence wins.

    >>> normalize_authors(['Reynolds, Alastair:Banks, Iain M.'])
    ['Alastair Reynolds', 'Iain M. Banks']
    """
    normalized = []
    for entry in authors:
        for author in entry.split(':'):
            author = author.strip()
            if not author:
                continue
            if ',' in author:
                last, first = author.split(',', 1)
                author = f"{first.strip()} {last.strip()}".strip()
            if author not in normalized:
                normalized.append(author)
    return normalized


class BookMeta(BaseModel):
    title: str = Field(..., min_length=1)
    author_list: List[str] = Field(default_factory=list, alias="authorList")

    model_config = {
        "frozen": True,
        "populate_by_name": True
    }

    @field_validator('author_list')
    @classmethod
    def validate_author_list(cls, v: List[str]) -> List[str]:
        return normalize_authors(v)


class PageCapture(BaseModel):
    index: int = Field(..., ge=0, description="Capture order in the manifest")
    page: int = Field(..., description="Physical page number shown when captured")
    screenshot: str = Field(..., description="Path of the captured PNG")

    model_config = {
        "frozen": True
    }


class BookMetadata(BaseModel):
    meta: BookMeta
    toc: List[TocItem] = Field(default_factory=list, description="ToC entries in document order")
    pages: List[PageCapture] = Field(default_factory=list, description="Capture units awaiting transcription")
    total_num_pages: int = Field(0, ge=0, alias="totalNumPages")

    model_config = {
        "frozen": True,
        "populate_by_name": True
    }

    @model_validator(mode='after')
    def validate_toc_order(self) -> 'BookMetadata':
        for previous, item in zip(self.toc, self.toc[1:]):
            if item.position_id <= previous.position_id:
                raise ValueError(
                    f"ToC entries out of order: '{item.label}' (positionId {item.position_id}) "
                    f"follows '{previous.label}' (positionId {previous.position_id})"
                )
        return self
