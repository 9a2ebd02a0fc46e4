from pydantic import BaseModel, Field


class ContentChunk(BaseModel):
    index: int = Field(..., ge=0, description="0-based emission order")
    page: int = Field(..., description="Physical page number of the transcribed page")
    text: str = Field(..., description="Transcribed, whitespace-normalized text")
    screenshot: str = Field(..., description="Path of the source screenshot (diagnostics only)")

    model_config = {
        "frozen": True
    }
