"""Schema validation tests."""

import pytest
from pydantic import ValidationError

from pipeline.schemas import BookMeta, BookMetadata, ContentChunk, TocItem, normalize_authors


class TestNormalizeAuthors:
    def test_last_first(self):
        assert normalize_authors(["Reynolds, Alastair"]) == ["Alastair Reynolds"]

    def test_colon_separated(self):
        assert normalize_authors(["Reynolds, Alastair:Banks, Iain M."]) == [
            "Alastair Reynolds",
            "Iain M. Banks",
        ]

    def test_dedupes_keeping_first(self):
        assert normalize_authors(["Ursula K. Le Guin", "Le Guin, Ursula K.", "A. Person"]) == [
            "Ursula K. Le Guin",
            "A. Person",
        ]

    def test_skips_blank(self):
        assert normalize_authors(["", " : "]) == []


class TestTocItem:
    def test_alias_and_field_name(self):
        by_alias = TocItem.model_validate({"label": "One", "positionId": 5, "page": 1})
        by_name = TocItem(label="One", position_id=5, page=1)
        assert by_alias == by_name
        assert by_alias.depth == 0
        assert by_alias.has_page

    def test_location_only(self):
        item = TocItem(label="Preface", position_id=1, location=12)
        assert not item.has_page

    @pytest.mark.parametrize("extra", [{}, {"page": 1, "location": 2}])
    def test_requires_exactly_one_of_page_or_location(self, extra):
        with pytest.raises(ValidationError, match="exactly one of page or location"):
            TocItem(label="Bad", position_id=1, **extra)

    def test_negative_depth(self):
        with pytest.raises(ValidationError):
            TocItem(label="Bad", position_id=1, page=1, depth=-1)

    def test_frozen(self):
        item = TocItem(label="One", position_id=1, page=1)
        with pytest.raises(ValidationError):
            item.page = 2


def test_book_meta_requires_title():
    with pytest.raises(ValidationError):
        BookMeta(title="")


def test_content_chunk_rejects_negative_index():
    with pytest.raises(ValidationError):
        ContentChunk(index=-1, page=1, text="x", screenshot="a.png")


def test_book_metadata_aliases(sample_metadata):
    metadata = BookMetadata.model_validate(sample_metadata)

    assert metadata.total_num_pages == 5
    assert len(metadata.pages) == 5
    assert metadata.meta.author_list == ["Alastair Reynolds"]


def test_book_metadata_rejects_unordered_toc(sample_metadata):
    sample_metadata["toc"][1]["positionId"] = 5

    with pytest.raises(ValidationError, match="out of order"):
        BookMetadata.model_validate(sample_metadata)
