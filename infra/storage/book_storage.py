import json
import threading
from pathlib import Path
from typing import List, Dict, Any, Optional

from pydantic import ValidationError

from infra.errors import StructuralInputError
from infra.pipeline.logger import PipelineLogger, create_logger
from pipeline.schemas import BookMetadata, ContentChunk


class BookStorage:
    """
    One book's working directory:

        <storage_root>/<book_id>/
            metadata.json    capture stage output (meta, toc, pages, totalNumPages)
            content.json     transcribed content chunks
            book.md          markdown export
            logs/            per-stage JSONL logs
    """

    def __init__(self, book_id: str, storage_root: Optional[Path] = None):
        self._book_id = book_id
        self._storage_root = Path(storage_root or Path("out")).expanduser()
        self._book_dir = self._storage_root / book_id
        self._lock = threading.Lock()

    @property
    def book_id(self) -> str:
        return self._book_id

    @property
    def storage_root(self) -> Path:
        return self._storage_root

    @property
    def book_dir(self) -> Path:
        return self._book_dir

    @property
    def exists(self) -> bool:
        return self._book_dir.exists()

    @property
    def metadata_file(self) -> Path:
        return self._book_dir / "metadata.json"

    @property
    def content_file(self) -> Path:
        return self._book_dir / "content.json"

    @property
    def markdown_file(self) -> Path:
        return self._book_dir / "book.md"

    @property
    def logs_dir(self) -> Path:
        return self._book_dir / "logs"

    def screenshot_path(self, screenshot: str) -> Path:
        """Manifest paths are cwd-relative as captured; fall back to the book dir."""
        path = Path(screenshot)
        if path.is_absolute() or path.exists():
            return path
        return self._book_dir / path

    def logger(self, stage: str, **kwargs) -> PipelineLogger:
        return create_logger(self._book_id, stage, log_dir=self.logs_dir, **kwargs)

    def _read_json(self, path: Path) -> Any:
        if not path.exists():
            raise StructuralInputError(f"File not found: {path}")
        try:
            with open(path, 'r', encoding='utf-8') as f:
                return json.load(f)
        except json.JSONDecodeError as e:
            raise StructuralInputError(f"Invalid JSON in {path}: {e}") from e

    def _write_atomic(self, path: Path, data: str):
        with self._lock:
            path.parent.mkdir(parents=True, exist_ok=True)
            temp_file = path.with_suffix(path.suffix + '.tmp')
            try:
                with open(temp_file, 'w', encoding='utf-8') as f:
                    f.write(data)
                temp_file.replace(path)
            except Exception:
                if temp_file.exists():
                    temp_file.unlink()
                raise

    def load_metadata(self, require_pages: bool = False) -> BookMetadata:
        """
        Load and validate metadata.json.

        Raises:
            StructuralInputError: If the file is missing or invalid, or has no
                toc (or no pages, when require_pages is set)
        """
        raw = self._read_json(self.metadata_file)
        if not isinstance(raw, dict) or not raw.get('meta'):
            raise StructuralInputError("invalid book metadata: missing meta")

        try:
            metadata = BookMetadata.model_validate(raw)
        except ValidationError as e:
            raise StructuralInputError(f"invalid book metadata: {e}") from e

        if not metadata.toc:
            raise StructuralInputError("invalid book metadata: missing toc")
        if require_pages and not metadata.pages:
            raise StructuralInputError("no page screenshots found")

        return metadata

    def load_content(self) -> List[ContentChunk]:
        raw = self._read_json(self.content_file)
        if not isinstance(raw, list) or not raw:
            raise StructuralInputError("no book content found")

        try:
            return [ContentChunk.model_validate(item) for item in raw]
        except ValidationError as e:
            raise StructuralInputError(f"invalid book content: {e}") from e

    def save_content(self, records: List[Dict[str, Any]]):
        self._write_atomic(self.content_file, json.dumps(records, indent=2, ensure_ascii=False))

    def save_markdown(self, markdown: str):
        self._write_atomic(self.markdown_file, markdown)
