import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

# Keyword context copied from log records into each JSONL entry.
CONTEXT_FIELDS = (
    'book_id',
    'stage',
    'page',
    'index',
    'attempt',
    'temperature',
    'delay_seconds',
    'dropped_pages',
    'error',
)

_RESERVED_KWARGS = ('exc_info', 'stack_info', 'stacklevel')


class FlushingFileHandler(logging.FileHandler):
    def emit(self, record):
        super().emit(record)
        self.flush()


class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.now().astimezone().isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
        }
        entry.update(
            (name, getattr(record, name))
            for name in CONTEXT_FIELDS
            if hasattr(record, name)
        )
        return json.dumps(entry, default=str)


class PipelineLogger:
    """
    Per-book, per-stage logger writing JSON lines to <log_dir>/<stage>.jsonl.

    Nothing touches the filesystem until the first message is logged, so a
    stage that logs nothing leaves no empty file behind. Successive runs
    append to the same file.

    Context is passed as keyword arguments:

        logger.warning("retrying refusal...", page=12, attempt=3)
    """

    def __init__(
        self,
        book_id: str,
        stage: str,
        log_dir: Path,
        console_output: bool = False,
        json_output: bool = True,
        level: str = "INFO",
        filename: Optional[str] = None
    ):
        self.book_id = book_id
        self.stage = stage
        self.log_dir = Path(log_dir)
        self.console_output = console_output
        self.json_output = json_output
        self.level = level
        self.filename = filename or f"{stage}.jsonl"

        self.log_file: Optional[Path] = None
        self._logger: Optional[logging.Logger] = None

    @property
    def logger(self) -> logging.Logger:
        if self._logger is None:
            self._logger = self._build_logger()
        return self._logger

    def _build_logger(self) -> logging.Logger:
        logger = logging.getLogger(f"bindery.{self.book_id}.{self.stage}.{id(self)}")
        logger.setLevel(getattr(logging, self.level.upper()))
        logger.propagate = False

        if self.console_output:
            console = logging.StreamHandler(sys.stdout)
            console.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))
            logger.addHandler(console)

        if self.json_output:
            self.log_dir.mkdir(parents=True, exist_ok=True)
            self.log_file = self.log_dir / self.filename
            json_handler = FlushingFileHandler(self.log_file, mode='a')
            json_handler.setFormatter(JSONFormatter())
            logger.addHandler(json_handler)

        if not logger.handlers:
            logger.addHandler(logging.NullHandler())

        return logger

    def _log(self, level: int, message: str, **kwargs):
        options = {name: kwargs.pop(name) for name in _RESERVED_KWARGS if name in kwargs}
        extra = {'book_id': self.book_id, 'stage': self.stage}
        extra.update(kwargs)
        self.logger.log(level, message, extra=extra, **options)

    def debug(self, message: str, **kwargs):
        self._log(logging.DEBUG, message, **kwargs)

    def info(self, message: str, **kwargs):
        self._log(logging.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs):
        self._log(logging.WARNING, message, **kwargs)

    def error(self, message: str, **kwargs):
        self._log(logging.ERROR, message, **kwargs)

    def close(self):
        if self._logger is None:
            return
        for handler in list(self._logger.handlers):
            handler.close()
            self._logger.removeHandler(handler)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    def __del__(self):
        try:
            self.close()
        except Exception:
            pass


def create_logger(book_id: str, stage: str, **kwargs) -> PipelineLogger:
    return PipelineLogger(book_id, stage, **kwargs)


def null_logger(stage: str) -> PipelineLogger:
    """Logger with no handlers, for library callers that pass none."""
    return PipelineLogger("-", stage, log_dir=Path("."), json_output=False)
