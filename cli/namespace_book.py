import sys
from rich.console import Console
from rich.table import Table

from infra.config import Config
from infra.errors import StructuralInputError
from infra.llm.client import LLMClient
from infra.llm.images import load_screenshot
from infra.storage.book_storage import BookStorage
from pipeline.chapters import iterate_chapters
from pipeline.export.markdown import render_markdown
from pipeline.toc_analysis import analyze_toc, truncate_at_back_matter
from pipeline.transcribe import (
    TranscriptionConfig,
    TranscriptionPipeline,
    VisionLLMRecognizer,
    build_toc_page_lookup,
)
from cli.helpers import get_book_storage


def _fail(message: str):
    print(f"❌ {message}")
    sys.exit(1)


def cmd_transcribe(args):
    storage = get_book_storage(args)

    try:
        metadata = storage.load_metadata(require_pages=True)
    except StructuralInputError as e:
        _fail(str(e))

    config = TranscriptionConfig.from_config(
        Config,
        model=args.model,
        max_workers=args.concurrency,
        silent=args.quiet,
    )

    with storage.logger("transcribe", console_output=args.verbose) as logger:
        try:
            client = LLMClient(logger=logger)
        except ValueError as e:
            _fail(str(e))

        pipeline = TranscriptionPipeline(
            config,
            VisionLLMRecognizer(config.model, client=client),
            logger=logger,
            image_loader=lambda screenshot: load_screenshot(storage.screenshot_path(screenshot)),
        )
        result = pipeline.process(metadata.pages, build_toc_page_lookup(metadata.toc))

    console = Console()
    if result.dropped_pages > 0:
        console.print(
            f"[yellow]⚠️  WARNING: {result.dropped_pages} page(s) failed transcription and were skipped[/yellow]"
        )
        for failure in result.failures:
            console.print(f"   page {failure.page} ({failure.screenshot}): {type(failure.cause).__name__}")

    if not result.chunks:
        _fail("No pages were transcribed; content.json not written")

    storage.save_content(result.to_json())
    console.print(
        f"✅ Transcribed {len(result.chunks)}/{len(metadata.pages)} pages → {storage.content_file}"
    )


def cmd_toc(args):
    storage = get_book_storage(args)

    try:
        metadata = storage.load_metadata()
        analysis = analyze_toc(metadata.toc, metadata.total_num_pages)
    except StructuralInputError as e:
        _fail(str(e))

    first_content = analysis.first_content_page_toc_item
    post_content = analysis.first_post_content_page_toc_item

    table = Table(title=f"{metadata.meta.title} ({metadata.total_num_pages} pages)")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Label")
    table.add_column("Page", justify="right")
    table.add_column("Location", justify="right")
    table.add_column("Role")

    for i, item in enumerate(metadata.toc):
        if item is first_content:
            role = "[green]first content[/green]"
        elif item is post_content:
            role = "[yellow]back matter starts[/yellow]"
        else:
            role = ""
        table.add_row(
            str(i),
            f"{'  ' * item.depth}{item.label}",
            str(item.page) if item.page is not None else "",
            str(item.location) if item.location is not None else "",
            role,
        )

    Console().print(table)


def cmd_chapters(args):
    storage = get_book_storage(args)

    try:
        metadata = storage.load_metadata()
        content = storage.load_content()
    except StructuralInputError as e:
        _fail(str(e))

    table = Table(title=metadata.meta.title)
    table.add_column("Chapter")
    table.add_column("Pages", justify="right")
    table.add_column("Chunks", justify="right")
    table.add_column("Words", justify="right")

    for chapter in iterate_chapters(metadata.toc, content):
        if chapter.chunks:
            pages = f"{chapter.chunks[0].page}-{chapter.chunks[-1].page}"
        else:
            pages = "-"
        table.add_row(
            f"{'  ' * chapter.toc_item.depth}{chapter.toc_item.label}",
            pages,
            str(len(chapter.chunks)),
            f"{len(chapter.text.split()):,}",
        )

    Console().print(table)


def cmd_export(args):
    storage = get_book_storage(args)

    try:
        content = storage.load_content()
        metadata = storage.load_metadata()
        toc = metadata.toc
        if args.exclude_back_matter:
            analysis = analyze_toc(toc, metadata.total_num_pages)
            toc = truncate_at_back_matter(toc, analysis)
    except StructuralInputError as e:
        _fail(str(e))

    output = render_markdown(metadata.meta, iterate_chapters(toc, content))
    storage.save_markdown(output)
    print(f"✅ Wrote {storage.markdown_file}")
