"""
LLM subsystem for OpenAI-compatible chat completion APIs.

Provides:
- LLMClient: Single vision-capable chat completion calls
- ChatTransport: HTTP requests and failure classification
- RetryPolicy: Exponential backoff for transient failures
"""

from infra.llm.client import LLMClient
from infra.llm.transport import ChatTransport
from infra.llm.response_parser import ResponseParser, ParsedResponse
from infra.llm.retry_policy import RetryPolicy

__all__ = [
    "LLMClient",
    "ChatTransport",
    "ResponseParser",
    "ParsedResponse",
    "RetryPolicy",
]
