"""Render the relic markdown file into the static search page.

Usage: python -m scripts.render_page [input.md] [output.html]
"""

import argparse
import logging
import sys
from pathlib import Path

from relic_data import terminal
from relic_data.config import SourceConfig, get_settings, load_source_config
from relic_data.exceptions import RelicDataError
from relic_data.markdown import read_markdown_file, write_text_file
from relic_data.page import render_page

log = logging.getLogger(__name__)


def convert(input_path: Path, output_path: Path, sources: SourceConfig) -> None:
    terminal.info(f"Converting {input_path.resolve()} to {output_path.resolve()}...")

    document = read_markdown_file(input_path)
    for prime, relic in document.dangling_references():
        log.warning("Prime '%s' references unknown relic '%s'", prime, relic)

    write_text_file(output_path, render_page(document, sources))
    terminal.success(f"Successfully generated {output_path}")


def main() -> None:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Render relic markdown into a static page")
    parser.add_argument(
        "input",
        nargs="?",
        type=Path,
        default=settings.markdown_path,
        help=f"Relic markdown file (default: {settings.markdown_path})",
    )
    parser.add_argument(
        "output",
        nargs="?",
        type=Path,
        default=settings.html_path,
        help=f"Page to write (default: {settings.html_path})",
    )
    args, extra = parser.parse_known_args()

    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(message)s",
    )
    if extra:
        log.warning("Ignoring extra arguments: %s", " ".join(extra))

    try:
        sources = load_source_config(settings.sources_file)
        convert(args.input, args.output, sources)
    except RelicDataError as e:
        terminal.error(str(e))
        sys.exit(1)
    except Exception as e:
        terminal.error(f"Unexpected error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
