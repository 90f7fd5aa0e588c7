"""
Extract current relic drop data into the relic markdown file.

Pipeline:
1. Fetch the published drop table page
2. Locate the relics listed under each configured mission sub-table
3. Read each relic's intact reward table
4. Group Prime parts by the Prime they build
5. Write the markdown file the page renderer reads
"""

import logging
import sys
from datetime import date
from pathlib import Path

from relic_data import drops, grouping, sorter, terminal
from relic_data.config import SourceConfig, get_settings, load_source_config
from relic_data.exceptions import ExtractionError, RelicDataError
from relic_data.markdown import write_markdown, write_text_file

log = logging.getLogger(__name__)


def extract_relics(
    url: str, output_path: Path, sources: SourceConfig, generated_on: date | None = None
) -> None:
    terminal.section_header("Fetching Warframe relic data")
    terminal.key_value("Source", url)

    html = drops.fetch_page(url)
    log.debug("Fetched %d chars", len(html))

    relics = drops.extract_relic_tables(html, sources)
    if not relics:
        raise ExtractionError(f"No relic data found in {url}")

    empty = [name for name, relic in relics.items() if not relic.rewards]
    if empty:
        log.warning("%d relic(s) without rewards: %s", len(empty), ", ".join(empty))

    primes = grouping.group_primes(relics)
    relic_names = sorter.sort_relic_names(relics, sources.tier_order)
    terminal.key_value("Relics", f"{len(relics)} ({', '.join(relic_names)})")
    terminal.key_value("Primes", str(len(primes)))
    terminal.prime_summary(primes)

    content = write_markdown(primes, relics, sources.locations_by_tier, generated_on)
    write_text_file(output_path, content)
    terminal.success(f"✓ Markdown file has been generated as {output_path}")


def main() -> None:
    settings = get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(message)s",
    )

    try:
        sources = load_source_config(settings.sources_file)
        extract_relics(settings.source_url, settings.markdown_path, sources)
    except RelicDataError as e:
        terminal.error(str(e))
        sys.exit(1)
    except Exception as e:
        terminal.error(f"Unexpected error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
