"""
Transcribe page screenshots into content chunks.

Each page is independent: it is dispatched to the recognizer under a
transient-error RetryPolicy, refusals are re-dispatched with a raised
temperature, and any failure drops only that page. Pages run on a bounded
thread pool and results are reassembled in manifest order.
"""

import time
from dataclasses import dataclass, field
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Any, Callable, Dict, List, Optional, Sequence, Union

from rich.progress import Progress, BarColumn, TextColumn, TaskProgressColumn, TimeRemainingColumn

from infra.errors import PermanentPageError, RefusalError
from infra.llm.images import load_screenshot
from infra.llm.retry_policy import RetryPolicy
from infra.pipeline.logger import PipelineLogger, null_logger
from pipeline.schemas import ContentChunk, PageCapture, TocItem
from .config import TranscriptionConfig
from .prompts import SYSTEM_PROMPT
from .recognizer import TextRecognizer
from .text import normalize_transcript, strip_heading


def build_toc_page_lookup(toc: Sequence[TocItem]) -> Dict[int, TocItem]:
    """Map page number to ToC entry; the last entry on a page wins."""
    return {item.page: item for item in toc if item.has_page}


@dataclass
class TranscriptionResult:
    chunks: List[ContentChunk]
    failures: List[PermanentPageError] = field(default_factory=list)

    @property
    def dropped_pages(self) -> int:
        return len(self.failures)

    def to_json(self) -> List[Dict[str, Any]]:
        return [chunk.model_dump() for chunk in self.chunks]


class TranscriptionPipeline:
    def __init__(
        self,
        config: TranscriptionConfig,
        recognizer: TextRecognizer,
        logger: Optional[PipelineLogger] = None,
        image_loader: Callable[[str], Any] = load_screenshot,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.config = config
        self.recognizer = recognizer
        self.logger = logger or null_logger("transcribe")
        self.image_loader = image_loader
        self.retry = RetryPolicy(
            max_retries=config.max_retries,
            base_delay=config.base_delay,
            jitter=config.jitter,
            logger=self.logger,
            sleep=sleep,
        )

    def process(
        self,
        pages: Sequence[PageCapture],
        toc_by_page: Dict[int, TocItem],
    ) -> TranscriptionResult:
        total = len(pages)
        self.logger.info(
            f"Transcribing {total} pages with {self.recognizer.name} "
            f"({self.config.max_workers} workers)"
        )

        slots: List[Union[ContentChunk, PermanentPageError, None]] = [None] * total

        progress = Progress(
            TextColumn("   {task.description}"),
            BarColumn(bar_width=40),
            TaskProgressColumn(),
            TextColumn("•"),
            TimeRemainingColumn(),
            TextColumn("•"),
            TextColumn("{task.fields[suffix]}", justify="right"),
            transient=True,
            disable=self.config.silent,
        )

        with progress:
            task_id = progress.add_task("transcribe", total=total, suffix="starting...")

            with ThreadPoolExecutor(max_workers=self.config.max_workers) as executor:
                futures = {
                    executor.submit(self._process_page_safely, pages, position, toc_by_page): position
                    for position in range(total)
                }

                completed = 0
                failed = 0
                for future in as_completed(futures):
                    position = futures[future]
                    outcome = future.result()
                    slots[position] = outcome

                    completed += 1
                    if isinstance(outcome, PermanentPageError):
                        failed += 1
                    progress.update(
                        task_id,
                        completed=completed,
                        suffix=f"{completed - failed}/{total} ok • {failed} failed"
                    )

        chunks = [
            outcome.model_copy(update={"index": i})
            for i, outcome in enumerate(o for o in slots if isinstance(o, ContentChunk))
        ]
        failures = [outcome for outcome in slots if isinstance(outcome, PermanentPageError)]

        if failures:
            self.logger.warning(
                f"WARNING: {len(failures)} page(s) failed transcription and were skipped",
                dropped_pages=len(failures),
            )
        self.logger.info(f"Transcribed {len(chunks)}/{total} pages")

        return TranscriptionResult(chunks=chunks, failures=failures)

    def _process_page_safely(
        self,
        pages: Sequence[PageCapture],
        position: int,
        toc_by_page: Dict[int, TocItem],
    ) -> Union[ContentChunk, PermanentPageError]:
        page = pages[position]
        try:
            return self._process_page(pages, position, toc_by_page)
        except Exception as e:
            error = PermanentPageError(page.index, page.page, page.screenshot, e)
            self.logger.error(str(error), page=page.page, index=page.index, error=repr(e))
            return error

    def _process_page(
        self,
        pages: Sequence[PageCapture],
        position: int,
        toc_by_page: Dict[int, TocItem],
    ) -> ContentChunk:
        page = pages[position]
        image = self.image_loader(page.screenshot)

        attempts = 0
        while True:
            temperature = self.config.temperature_for(attempts)
            raw = self.retry.execute_with_retry(
                lambda: self.recognizer.recognize(image, SYSTEM_PROMPT, temperature),
                page=page.page,
                index=page.index,
            )
            text = normalize_transcript(raw)
            attempts += 1

            if not text or self.config.refusal_detector(text):
                if attempts >= self.config.max_refusal_retries:
                    raise RefusalError(
                        f"Model refused too many times ({attempts} times): {text}",
                        attempts=attempts,
                        last_text=text,
                    )
                self.logger.warning(
                    "retrying refusal...",
                    page=page.page,
                    index=page.index,
                    attempt=attempts,
                    temperature=self.config.temperature_for(attempts),
                )
                continue

            break

        # The model tends to echo a section's heading at the top of its first page.
        previous = pages[position - 1] if position > 0 else None
        if previous is not None and previous.page != page.page:
            text = strip_heading(text, toc_by_page.get(page.page))

        chunk = ContentChunk(
            index=page.index,
            page=page.page,
            text=text,
            screenshot=page.screenshot,
        )
        self.logger.debug(
            f"Transcribed page {page.page} ({len(text)} chars)",
            page=page.page,
            index=page.index,
        )
        return chunk
