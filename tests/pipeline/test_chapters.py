"""
Chapter segmentation tests.
"""

from pipeline.chapters import iterate_chapters
from pipeline.schemas import TocItem


def test_yields_chapters_with_their_content(make_toc_item, make_chunk):
    toc = [
        make_toc_item("Chapter 1", 1),
        make_toc_item("Chapter 2", 3),
        make_toc_item("End", 5),
    ]
    content = [
        make_chunk(0, 1, "Page one"),
        make_chunk(1, 2, "Page two"),
        make_chunk(2, 3, "Page three"),
        make_chunk(3, 4, "Page four"),
        make_chunk(4, 5, "End page"),
    ]

    chapters = list(iterate_chapters(toc, content))
    assert len(chapters) == 2
    assert chapters[0].toc_item.label == "Chapter 1"
    assert chapters[0].text == "Page one Page two"
    assert len(chapters[0].chunks) == 2
    assert chapters[1].toc_item.label == "Chapter 2"
    assert chapters[1].text == "Page three Page four"


def test_single_entry_toc_yields_nothing(make_toc_item, make_chunk):
    toc = [make_toc_item("Only", 1)]
    content = [make_chunk(0, 1, "text")]

    assert list(iterate_chapters(toc, content)) == []


def test_empty_toc_yields_nothing(make_chunk):
    assert list(iterate_chapters([], [make_chunk(0, 1, "text")])) == []


def test_skips_toc_items_without_pages(make_toc_item, make_chunk):
    no_page = TocItem(label="No Page", position_id=50, depth=0, location=5)
    toc = [
        no_page,
        make_toc_item("Chapter 1", 1),
        make_toc_item("End", 3),
    ]
    content = [
        make_chunk(0, 1, "Page one"),
        make_chunk(1, 2, "Page two"),
        make_chunk(2, 3, "End page"),
    ]

    chapters = list(iterate_chapters(toc, content))
    assert len(chapters) == 1
    assert chapters[0].toc_item.label == "Chapter 1"
    assert chapters[0].text == "Page one Page two"


def test_location_entry_between_chapters_is_not_a_boundary(make_toc_item, make_chunk):
    toc = [
        make_toc_item("Chapter 1", 1),
        TocItem(label="Interlude", position_id=150, depth=1, location=40),
        make_toc_item("Chapter 2", 3),
        make_toc_item("End", 4),
    ]
    content = [make_chunk(i, i + 1, f"p{i + 1}") for i in range(4)]

    chapters = list(iterate_chapters(toc, content))
    assert [c.toc_item.label for c in chapters] == ["Chapter 1", "Chapter 2"]
    assert chapters[0].text == "p1 p2"
    assert chapters[1].text == "p3"


def test_pages_are_assigned_to_one_chapter(make_toc_item, make_chunk):
    toc = [make_toc_item(f"Chapter {i}", page) for i, page in enumerate([1, 4, 6, 9])]
    content = [make_chunk(i, i + 1, f"p{i + 1}") for i in range(10)]

    chapters = list(iterate_chapters(toc, content))
    pages = [chunk.page for chapter in chapters for chunk in chapter.chunks]
    assert pages == list(range(1, 9))
    assert len(pages) == len(set(pages))


def test_repeated_page_chunks_stay_in_order(make_toc_item, make_chunk):
    toc = [make_toc_item("Chapter 1", 1), make_toc_item("End", 3)]
    content = [
        make_chunk(0, 1, "first half"),
        make_chunk(1, 1, "second half"),
        make_chunk(2, 2, "next"),
    ]

    chapter, = iterate_chapters(toc, content)
    assert chapter.text == "first half second half next"


def test_chapter_without_chunks_has_empty_text(make_toc_item, make_chunk):
    toc = [make_toc_item("Chapter 1", 1), make_toc_item("Chapter 2", 2), make_toc_item("End", 3)]
    content = [make_chunk(0, 2, "only page two")]

    chapters = list(iterate_chapters(toc, content))
    assert chapters[0].text == ""
    assert chapters[0].chunks == ()
    assert chapters[1].text == "only page two"


def test_rerunning_yields_identical_chapters(make_toc_item, make_chunk):
    toc = [make_toc_item("Chapter 1", 1), make_toc_item("Chapter 2", 2), make_toc_item("End", 3)]
    content = [make_chunk(0, 1, "a"), make_chunk(1, 2, "b")]

    assert list(iterate_chapters(toc, content)) == list(iterate_chapters(toc, content))


def test_is_lazy(make_toc_item, make_chunk):
    toc = [make_toc_item("Chapter 1", 1), make_toc_item("End", 2)]
    chapters = iterate_chapters(toc, [make_chunk(0, 1, "a")])

    assert next(chapters).text == "a"
    assert next(chapters, None) is None
