"""CLI entry point: python -m semantic_markdown [INPUT] [options]"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from .convert import ParserUnavailableError, convert_html_to_markdown
from .options import ConversionOptions

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="semantic-markdown",
        description=(
            "Convert HTML into semantic Markdown for LLM consumption.\n"
            "Reads a file (or stdin) and writes Markdown to stdout or --output."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("input", nargs="?", default="-", metavar="INPUT",
                        help="HTML file to convert, or '-' for stdin (default: stdin)")
    parser.add_argument("-o", "--output", default=None, metavar="FILE",
                        help="Write Markdown to FILE instead of stdout")
    parser.add_argument("--extract-main-content", action="store_true", default=False,
                        help="Detect the main content block and convert only that")
    parser.add_argument("--include-metadata", choices=["basic", "extended"], default=None,
                        metavar="{basic,extended}",
                        help="Emit a front-matter block built from <head>")
    parser.add_argument("--refify-urls", action="store_true", default=False,
                        help="Replace long URLs with short reference tokens")
    parser.add_argument("--url-map", default=None, metavar="FILE",
                        help="Write the reference-token map as JSON to FILE (implies --refify-urls)")
    parser.add_argument("--show-url-map", action="store_true", default=False,
                        help="Print the reference-token map as a table on stderr")
    parser.add_argument("--website-domain", default=None, metavar="URL",
                        help="Strip this prefix from link and image URLs")
    parser.add_argument("--track-table-columns", action="store_true", default=False,
                        help="Annotate table cells with column ids")
    parser.add_argument("--parser", default="lxml", metavar="NAME",
                        help="BeautifulSoup tree builder to use (default: lxml)")
    parser.add_argument("--debug", action="store_true", default=False,
                        help="Trace conversion decisions (sets log-level to DEBUG)")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        metavar="{DEBUG,INFO,WARNING,ERROR}",
                        help="Logging level (default: WARNING)")
    return parser


def _read_input(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def _print_url_map(url_map: dict[str, str]) -> None:
    from rich import box
    from rich.console import Console
    from rich.table import Table

    console = Console(stderr=True)
    tbl = Table(box=box.SIMPLE_HEAVY, show_header=True, header_style="bold cyan")
    tbl.add_column("URL")
    tbl.add_column("Token", style="green", no_wrap=True)
    for url, token in url_map.items():
        tbl.add_row(url, token)
    console.print(tbl)


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)

    log_level = "DEBUG" if args.debug else args.log_level
    logging.basicConfig(
        level=getattr(logging, log_level),
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        options = ConversionOptions(
            website_domain=args.website_domain,
            extract_main_content=args.extract_main_content,
            refify_urls=args.refify_urls or bool(args.url_map) or args.show_url_map,
            debug=args.debug,
            dom_parser=args.parser,
            enable_table_column_tracking=args.track_table_columns,
            include_meta_data=args.include_metadata or False,
        )
    except ValidationError as exc:
        print(f"ERROR: invalid options: {exc}", file=sys.stderr)
        return 1

    try:
        html = _read_input(args.input)
    except OSError as exc:
        print(f"ERROR: Could not read {args.input}: {exc}", file=sys.stderr)
        return 1

    try:
        markdown = convert_html_to_markdown(html, options)
    except ParserUnavailableError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        print("Install lxml or pick another tree builder with --parser", file=sys.stderr)
        return 1

    try:
        if args.output:
            Path(args.output).write_text(markdown + "\n", encoding="utf-8")
            logger.info("Wrote %d characters to %s", len(markdown), args.output)
        else:
            sys.stdout.write(markdown + "\n")
        if args.url_map:
            Path(args.url_map).write_text(
                json.dumps(options.url_map, indent=2, ensure_ascii=False),
                encoding="utf-8",
            )
    except OSError as exc:
        print(f"ERROR: Could not write output: {exc}", file=sys.stderr)
        return 1

    if args.show_url_map:
        _print_url_map(options.url_map)
    return 0


if __name__ == "__main__":
    sys.exit(main())
