from infra.config import Config, BinderyConfig
from infra.storage import BookStorage

from infra.llm import (
    LLMClient,
    RetryPolicy,
)

from infra.pipeline import (
    PipelineLogger,
    create_logger,
)

__all__ = [
    "Config",
    "BinderyConfig",

    "BookStorage",

    "LLMClient",
    "RetryPolicy",

    "PipelineLogger",
    "create_logger",
]
