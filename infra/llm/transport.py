#!/usr/bin/env python3
import requests
from typing import Dict, Any, Optional

from infra.config import Config
from infra.errors import CapabilityError, TransientCapabilityError
from infra.pipeline.logger import PipelineLogger, null_logger

TRANSIENT_STATUS = {
    429: TransientCapabilityError.RATE_LIMITED,
    500: TransientCapabilityError.OVERLOADED,
    503: TransientCapabilityError.OVERLOADED,
}


class ChatTransport:
    """POSTs chat completion payloads and classifies transport failures."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        logger: Optional[PipelineLogger] = None,
    ):
        self.logger = logger or null_logger("transport")
        self.api_key = api_key if api_key is not None else Config.openai_api_key
        if not self.api_key:
            raise ValueError(
                "OPENAI_API_KEY is required. Provide via parameter or environment variable."
            )
        self.base_url = (base_url or Config.openai_base_url).rstrip('/')
        self.url = f"{self.base_url}/chat/completions"

    def post(self, payload: Dict[str, Any], timeout: int = 120) -> Dict[str, Any]:
        model = payload.get('model', 'unknown')

        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

        try:
            response = requests.post(
                self.url,
                headers=headers,
                json=payload,
                timeout=timeout
            )
        except requests.exceptions.Timeout as e:
            raise TransientCapabilityError(
                f"Request to {self.base_url} timed out after {timeout}s: {e}",
                reason=TransientCapabilityError.TIMEOUT,
            ) from e
        except (requests.exceptions.ConnectionError, requests.exceptions.ChunkedEncodingError) as e:
            # ChunkedEncodingError: reset while the body was being read
            raise TransientCapabilityError(
                f"Connection to {self.base_url} failed: {e}",
                reason=TransientCapabilityError.CONNECTION_RESET,
            ) from e

        self.logger.debug(
            f"Chat completion response from {model}: HTTP {response.status_code}"
        )

        if response.ok:
            return response.json()

        status = response.status_code
        message = f"HTTP {status} from {self.url}: {response.text[:200]}"
        if status in TRANSIENT_STATUS:
            raise TransientCapabilityError(message, reason=TRANSIENT_STATUS[status], status=status)
        raise CapabilityError(message, status=status)
