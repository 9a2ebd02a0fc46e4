import os
from pathlib import Path
from pydantic import BaseModel, Field, field_validator
from dotenv import load_dotenv

load_dotenv()

class BinderyConfig(BaseModel):
    openai_api_key: str = Field(
        default="",
        description="OpenAI-compatible API key (required to transcribe)"
    )

    openai_base_url: str = Field(
        default="https://api.openai.com/v1",
        description="Base URL of the OpenAI-compatible chat completions API"
    )

    vision_model: str = Field(
        default="gpt-4.1-mini",
        description="Vision model used to transcribe page screenshots"
    )

    concurrency: int = Field(
        default=16,
        ge=1,
        description="Pages transcribed concurrently"
    )

    book_storage_root: Path = Field(
        default=Path("out"),
        validate_default=True,
        description="Root directory holding one folder per book"
    )

    book_id: str = Field(
        default="",
        description="Default book id (e.g. an ASIN) for CLI commands"
    )

    @field_validator('openai_api_key', 'book_id')
    @classmethod
    def strip_value(cls, v: str) -> str:
        return v.strip()

    @field_validator('openai_base_url')
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        return v.rstrip('/')

    @field_validator('book_storage_root')
    @classmethod
    def validate_storage_root(cls, v: Path) -> Path:
        return Path(v).expanduser().resolve()

    model_config = {
        "frozen": True,
        "validate_assignment": True
    }


def _load_config() -> BinderyConfig:
    return BinderyConfig(
        openai_api_key=os.getenv('OPENAI_API_KEY', ''),
        openai_base_url=os.getenv('OPENAI_BASE_URL', 'https://api.openai.com/v1'),
        vision_model=os.getenv('VISION_MODEL', 'gpt-4.1-mini'),
        concurrency=int(os.getenv('CONCURRENCY', '16')),
        book_storage_root=Path(os.getenv('BOOK_STORAGE_ROOT', 'out')),
        book_id=os.getenv('BOOK_ID', os.getenv('ASIN', '')),
    )

Config = _load_config()
