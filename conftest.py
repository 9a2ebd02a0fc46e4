"""
Pytest configuration for project root.

Ensures project modules can be imported in tests.
Provides factories for ToC entries, content chunks and a book directory.
"""

import sys
import json
import pytest
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from pipeline.schemas import ContentChunk, TocItem


def _make_toc_item(label: str, page: int, depth: int = 0) -> TocItem:
    return TocItem(label=label, position_id=page * 100, page=page, depth=depth)


def _make_chunk(index: int, page: int, text: str) -> ContentChunk:
    return ContentChunk(index=index, page=page, text=text, screenshot=f"pages/{index}.png")


@pytest.fixture
def make_toc_item():
    return _make_toc_item


@pytest.fixture
def make_chunk():
    return _make_chunk


@pytest.fixture
def sample_metadata():
    """Raw metadata.json contents as written by the capture stage."""
    return {
        "meta": {
            "title": "Revelation Space",
            "authorList": ["Reynolds, Alastair"],
        },
        "toc": [
            {"label": "Foreword", "positionId": 10, "depth": 0, "location": 4},
            {"label": "Chapter 1", "positionId": 100, "depth": 0, "page": 1},
            {"label": "Chapter 2", "positionId": 300, "depth": 0, "page": 3},
            {"label": "Acknowledgements", "positionId": 500, "depth": 0, "page": 5},
        ],
        "pages": [
            {"index": i, "page": i + 1, "screenshot": f"pages/{i:04d}.png"}
            for i in range(5)
        ],
        "totalNumPages": 5,
    }


@pytest.fixture
def book_dir(tmp_path, sample_metadata):
    """Book directory with a metadata.json under <tmp>/out/test-book."""
    directory = tmp_path / "out" / "test-book"
    directory.mkdir(parents=True)
    with open(directory / "metadata.json", 'w') as f:
        json.dump(sample_metadata, f)
    return directory
