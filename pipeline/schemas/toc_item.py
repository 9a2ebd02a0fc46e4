from typing import Optional
from pydantic import BaseModel, Field, model_validator


class TocItem(BaseModel):
    label: str = Field(..., description="Entry title as displayed in the table of contents")
    depth: int = Field(0, ge=0, description="Nesting level (0=top-level)")
    position_id: int = Field(
        ...,
        alias="positionId",
        description="Opaque anchor in the source document, used only for ordering"
    )
    page: Optional[int] = Field(None, description="Physical page number")
    location: Optional[int] = Field(
        None,
        description="Sub-page position, used when there is no stable page number (e.g. roman front matter)"
    )

    model_config = {
        "frozen": True,
        "populate_by_name": True
    }

    @model_validator(mode='after')
    def validate_page_or_location(self) -> 'TocItem':
        if (self.page is None) == (self.location is None):
            raise ValueError(
                f"ToC entry '{self.label}' must have exactly one of page or location"
            )
        return self

    @property
    def has_page(self) -> bool:
        return self.page is not None
