#!/usr/bin/env python3
"""
LLM client for OpenAI-compatible chat completion APIs.

Composes the transport and response parsing layers. Retries are not done
here: callers wrap calls in a RetryPolicy so that backoff stays visible to
(and configurable by) the pipeline that owns the request.
"""

from typing import List, Dict, Tuple, Optional

from PIL import Image

from infra.llm.images import add_images_to_messages
from infra.llm.response_parser import ResponseParser
from infra.llm.transport import ChatTransport
from infra.pipeline.logger import PipelineLogger


class LLMClient:
    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        logger: Optional[PipelineLogger] = None,
    ):
        self.transport = ChatTransport(api_key=api_key, base_url=base_url, logger=logger)
        self.parser = ResponseParser(logger=logger)

    def call(
        self,
        model: str,
        messages: List[Dict],
        temperature: float = 0.0,
        max_tokens: Optional[int] = None,
        timeout: int = 120,
        images: Optional[List[Image.Image]] = None,
    ) -> Tuple[str, Dict]:
        """
        Make a single chat completion call.

        Args:
            model: Model name (e.g., "gpt-4.1-mini")
            messages: List of message dicts with 'role' and 'content'
            temperature: Sampling temperature
            max_tokens: Maximum tokens to generate (None = no limit)
            timeout: Request timeout in seconds
            images: Optional PIL images attached to the last user message

        Returns:
            Tuple of (response_text, usage_dict)

        Raises:
            TransientCapabilityError: Rate limit, overload or connection reset
            CapabilityError: Any other HTTP failure
            MalformedResponseError: Response without message content
        """
        payload = {
            "model": model,
            "messages": messages,
            "temperature": temperature,
        }

        if max_tokens:
            payload["max_tokens"] = max_tokens

        if images:
            payload["messages"] = add_images_to_messages(messages, images)

        result = self.transport.post(payload, timeout)
        parsed = self.parser.parse_chat_completion(result, model)

        usage = {
            'prompt_tokens': parsed.prompt_tokens,
            'completion_tokens': parsed.completion_tokens,
            'total_tokens': parsed.total_tokens,
        }
        return parsed.content, usage
