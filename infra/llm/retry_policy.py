#!/usr/bin/env python3
import time
import random
import itertools
from typing import Callable, Optional, TypeVar

from infra.errors import TransientCapabilityError
from infra.pipeline.logger import PipelineLogger, null_logger

T = TypeVar('T')


class RetryPolicy:
    """
    Retry transient capability failures with exponential backoff and jitter.

    Delay before retry n (0-based) is base_delay * 2**n plus a random jitter
    in [0, jitter). Jitter defaults to base_delay; it may not exceed it, which
    keeps successive delays strictly increasing.
    Any error other than TransientCapabilityError is raised immediately.
    """

    def __init__(
        self,
        max_retries: int = 5,
        base_delay: float = 1.0,
        jitter: Optional[float] = None,
        logger: Optional[PipelineLogger] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        if jitter is None:
            jitter = base_delay
        if jitter > base_delay:
            raise ValueError(f"jitter ({jitter}) must not exceed base_delay ({base_delay})")
        self.max_retries = max_retries
        self.base_delay = base_delay
        self.jitter = jitter
        self.logger = logger or null_logger("retry")
        self.sleep = sleep

    def backoff_delay(self, attempt: int) -> float:
        return self.base_delay * (2 ** attempt) + random.random() * self.jitter

    def execute_with_retry(self, fn: Callable[[], T], **context) -> T:
        for attempt in itertools.count():
            try:
                result = fn()

                if attempt > 0:
                    self.logger.debug(
                        f"Request succeeded after {attempt + 1} attempts",
                        attempt=attempt + 1,
                        **context
                    )

                return result

            except TransientCapabilityError as e:
                if attempt >= self.max_retries:
                    self.logger.warning(
                        f"API error ({e.reason}, status {e.status}), giving up after {attempt + 1} attempts",
                        attempt=attempt + 1,
                        error=str(e),
                        **context
                    )
                    raise

                delay = self.backoff_delay(attempt)
                self.logger.warning(
                    f"API error ({e.reason}, status {e.status}), retrying in {delay:.1f}s "
                    f"(attempt {attempt + 1}/{self.max_retries})",
                    attempt=attempt + 1,
                    delay_seconds=round(delay, 3),
                    **context
                )
                self.sleep(delay)
