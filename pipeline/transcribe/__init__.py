from .config import TranscriptionConfig
from .processor import TranscriptionPipeline, TranscriptionResult, build_toc_page_lookup
from .recognizer import TextRecognizer, VisionLLMRecognizer
from .prompts import SYSTEM_PROMPT

__all__ = [
    "TranscriptionConfig",
    "TranscriptionPipeline",
    "TranscriptionResult",
    "build_toc_page_lookup",
    "TextRecognizer",
    "VisionLLMRecognizer",
    "SYSTEM_PROMPT",
]
