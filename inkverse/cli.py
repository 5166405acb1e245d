#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Export CLI - run one publication export from a poems.json file

Usage:
    inkverse-export epub poems.json --output exports/
    inkverse-export print poems.json --output book.html --page-size A5
    inkverse-export html poems.json --output collection.html
    inkverse-export config
"""

import sys
import argparse
import logging
from pathlib import Path

from config.logging_config import setup_logger
from config.settings import settings
from inkverse.contracts import ContractError, load_collection
from inkverse.exporter import PublicationExporter

logger = logging.getLogger(__name__)


def build_settings(args):
    """Global settings with command-line overrides applied"""
    overrides = {}
    if getattr(args, 'title', None):
        overrides['book_title'] = args.title
    if getattr(args, 'subtitle', None):
        overrides['book_subtitle'] = args.subtitle
    if getattr(args, 'page_size', None):
        overrides['page_size'] = args.page_size
    return settings.model_copy(update=overrides) if overrides else settings


def _load(args):
    input_file = Path(args.input).resolve()
    if not input_file.exists():
        print(f"❌ Input file not found: {input_file}")
        return None
    return load_collection(input_file)


def _write_text(text: str, output: str, default_name: str, output_dir: Path) -> Path:
    path = Path(output) if output else output_dir / default_name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding='utf-8')
    return path


def cmd_epub(args):
    """Export the collection as an EPUB archive"""
    collection = _load(args)
    if collection is None:
        return 1

    exporter = PublicationExporter(build_settings(args))
    path = exporter.write_epub(collection, args.output)

    print(f"✅ EPUB written: {path}")
    return 0


def cmd_print(args):
    """Export the print book as one HTML page"""
    collection = _load(args)
    if collection is None:
        return 1

    exporter = PublicationExporter(build_settings(args))
    document = exporter.build_print_document(collection)
    path = _write_text(document.to_html(), args.output, 'print.html', exporter.settings.output_dir)

    print(f"✅ Print book written: {path} ({document.page_count} pages)")
    return 0


def cmd_html(args):
    """Export the standalone HTML book"""
    collection = _load(args)
    if collection is None:
        return 1

    exporter = PublicationExporter(build_settings(args))
    html_text = exporter.export_html(collection)
    path = _write_text(html_text, args.output, 'collection.html', exporter.settings.output_dir)

    print(f"✅ HTML book written: {path}")
    return 0


def cmd_config(args):
    """Show effective configuration"""
    build_settings(args).print_config()
    return 0


def main(argv=None):
    setup_logger()

    parser = argparse.ArgumentParser(
        description="Ink & Verse publication export",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    for name, help_text in (
        ('epub', 'Export an EPUB 3 archive'),
        ('print', 'Export the paginated print book (HTML)'),
        ('html', 'Export the standalone HTML book'),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument('input', help='poems.json file')
        sub.add_argument('--output', '-o', help='Output directory (epub) or file (print/html)')
        sub.add_argument('--title', help='Book title')
        sub.add_argument('--subtitle', help='Book subtitle')
        sub.add_argument('--page-size', choices=['A4', 'A5', 'B5', 'letter'], help='Print page size')

    subparsers.add_parser('config', help='Show configuration')

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    commands = {
        'epub': cmd_epub,
        'print': cmd_print,
        'html': cmd_html,
        'config': cmd_config,
    }

    try:
        return commands[args.command](args)
    except ContractError as e:
        logger.error(f"Export failed: {e}")
        print(f"❌ Export failed: {e}")
        return 2


if __name__ == "__main__":
    sys.exit(main())
