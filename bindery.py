#!/usr/bin/env python3
"""
Bindery CLI - Rebuild books from page screenshots

Commands:
    bindery transcribe [book-id]   Transcribe page screenshots into content.json
    bindery toc [book-id]          Show the table of contents and front/back matter analysis
    bindery chapters [book-id]     Show chapters assembled from transcribed pages
    bindery export [book-id]       Render chapters to book.md

The book id defaults to $BOOK_ID (or $ASIN). Books live under
$BOOK_STORAGE_ROOT/<book-id>/ (default: ./out).
"""

import sys
import argparse
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent))

from cli.namespace_book import cmd_transcribe, cmd_toc, cmd_chapters, cmd_export


def main():
    parser = argparse.ArgumentParser(
        prog='bindery',
        description='Bindery - Rebuild books from page screenshots',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  bindery transcribe B0CKRV4GD9
  bindery transcribe B0CKRV4GD9 --concurrency 4 --model gpt-4.1
  bindery toc B0CKRV4GD9
  bindery chapters B0CKRV4GD9
  bindery export B0CKRV4GD9 --exclude-back-matter
"""
    )

    subparsers = parser.add_subparsers(dest='command', help='Command to run')
    subparsers.required = True

    # bindery transcribe
    transcribe_parser = subparsers.add_parser('transcribe', help='Transcribe page screenshots')
    transcribe_parser.add_argument('book_id', nargs='?', help='Book id (default: $BOOK_ID)')
    transcribe_parser.add_argument('--concurrency', type=int, default=None, help='Pages in flight (default: $CONCURRENCY or 16)')
    transcribe_parser.add_argument('--model', help='Vision model (default: $VISION_MODEL)')
    transcribe_parser.add_argument('--quiet', '-q', action='store_true', help='Hide the progress bar')
    transcribe_parser.add_argument('--verbose', '-v', action='store_true', help='Echo log messages to the console')
    transcribe_parser.set_defaults(func=cmd_transcribe)

    # bindery toc
    toc_parser = subparsers.add_parser('toc', help='Show ToC with front/back matter analysis')
    toc_parser.add_argument('book_id', nargs='?', help='Book id (default: $BOOK_ID)')
    toc_parser.set_defaults(func=cmd_toc)

    # bindery chapters
    chapters_parser = subparsers.add_parser('chapters', help='Show chapters assembled from content.json')
    chapters_parser.add_argument('book_id', nargs='?', help='Book id (default: $BOOK_ID)')
    chapters_parser.set_defaults(func=cmd_chapters)

    # bindery export
    export_parser = subparsers.add_parser('export', help='Render chapters to markdown')
    export_parser.add_argument('book_id', nargs='?', help='Book id (default: $BOOK_ID)')
    export_parser.add_argument('--exclude-back-matter', action='store_true', help='Stop at the first back-matter section')
    export_parser.set_defaults(func=cmd_export)

    args = parser.parse_args()
    args.func(args)


if __name__ == '__main__':
    main()
