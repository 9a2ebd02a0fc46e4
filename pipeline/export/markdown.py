"""Render a book's chapters as a single markdown document."""

import re
from typing import Iterable, List

from pipeline.schemas import BookMeta, Chapter


def slugify(label: str) -> str:
    return re.sub(r'[^\da-z]+', '-', label.lower())


def render_markdown(meta: BookMeta, chapters: Iterable[Chapter]) -> str:
    chapters: List[Chapter] = list(chapters)

    toc_markdown = "\n".join(
        f"{'  ' * chapter.toc_item.depth}- [{chapter.toc_item.label}](#{slugify(chapter.toc_item.label)})"
        for chapter in chapters
    )

    parts = [
        f"# {meta.title}",
        f"> By {', '.join(meta.author_list)}",
        "---",
        "## Table of Contents",
        toc_markdown,
        "---",
    ]

    for chapter in chapters:
        heading = '#' * (chapter.toc_item.depth + 2)
        parts.append(f"{heading} {chapter.toc_item.label}")
        parts.append(chapter.text.replace('\n', '\n\n'))

    return "\n\n".join(parts)
