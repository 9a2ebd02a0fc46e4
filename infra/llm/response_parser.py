from typing import Dict, Any, Optional
from dataclasses import dataclass

from infra.errors import MalformedResponseError
from infra.pipeline.logger import PipelineLogger, null_logger


@dataclass
class ParsedResponse:
    content: str
    prompt_tokens: int
    completion_tokens: int
    total_tokens: int
    model_used: str
    finish_reason: Optional[str] = None


class ResponseParser:
    def __init__(self, logger: Optional[PipelineLogger] = None):
        self.logger = logger or null_logger("response")

    def parse_chat_completion(self, result: Dict[str, Any], model: str) -> ParsedResponse:
        try:
            choice = result['choices'][0]
            content = choice['message']['content']
            usage = result.get('usage') or {}
        except (KeyError, IndexError, TypeError) as e:
            response_keys = list(result.keys()) if isinstance(result, dict) else type(result).__name__
            self.logger.error(
                f"Malformed chat completion from {model}: {type(e).__name__}: {e}, "
                f"response_keys={response_keys}"
            )
            raise MalformedResponseError(
                f"Malformed API response: missing '{e.args[0] if e.args else 'expected key'}'"
            ) from e

        if content is None:
            raise MalformedResponseError(f"Chat completion from {model} has no message content")

        return ParsedResponse(
            content=content,
            prompt_tokens=usage.get('prompt_tokens', 0),
            completion_tokens=usage.get('completion_tokens', 0),
            total_tokens=usage.get('total_tokens', 0),
            model_used=result.get('model', model),
            finish_reason=choice.get('finish_reason'),
        )
