from dataclasses import dataclass, field
from typing import Callable, Optional

from infra.config import BinderyConfig
from .text import looks_like_refusal


@dataclass
class TranscriptionConfig:
    model: str = "gpt-4.1-mini"
    max_workers: int = 16

    # Transient failures (rate limit, overload, connection reset, timeout)
    max_retries: int = 5
    base_delay: float = 1.0
    jitter: Optional[float] = None  # None: same as base_delay

    # Refusals: temperature stays at 0 for the first attempts, then rises
    max_refusal_retries: int = 20
    refusal_temperature: float = 0.5
    refusal_temperature_after: int = 2
    refusal_detector: Callable[[str], bool] = field(default=looks_like_refusal)

    silent: bool = False  # Suppress progress display

    def temperature_for(self, attempt: int) -> float:
        return 0.0 if attempt < self.refusal_temperature_after else self.refusal_temperature

    @classmethod
    def from_config(cls, config: BinderyConfig, **overrides) -> 'TranscriptionConfig':
        values = {
            "model": config.vision_model,
            "max_workers": config.concurrency,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
