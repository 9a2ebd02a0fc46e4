from abc import ABC, abstractmethod
from typing import Optional

from PIL import Image

from infra.llm.client import LLMClient


class TextRecognizer(ABC):
    """Extracts the visible text of one page image."""

    @abstractmethod
    def recognize(self, image: Image.Image, instruction: str, temperature: float) -> str:
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        pass


class VisionLLMRecognizer(TextRecognizer):
    def __init__(self, model: str, client: Optional[LLMClient] = None, timeout: int = 120):
        self.model = model
        self.client = client or LLMClient()
        self.timeout = timeout

    @property
    def name(self) -> str:
        return self.model

    def recognize(self, image: Image.Image, instruction: str, temperature: float) -> str:
        messages = [
            {"role": "system", "content": instruction},
            {"role": "user", "content": []},
        ]
        text, _usage = self.client.call(
            self.model,
            messages,
            temperature=temperature,
            timeout=self.timeout,
            images=[image],
        )
        return text
