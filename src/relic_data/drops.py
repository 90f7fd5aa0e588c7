"""
Client and table locator for the published drop table page.

The page is one long run of <table> rows: each block starts with a <th>
heading (a mission rotation or "<relic> (Intact)") and ends at a row with
class "blank-row". Everything here matches headings by exact text, so the
headings and drop-chance tokens come from SourceConfig rather than code.
"""

import logging
from collections.abc import Sequence

import httpx
from bs4 import BeautifulSoup, Tag

from relic_data.config import DropChance, SourceConfig, get_settings
from relic_data.exceptions import FetchError
from relic_data.models import Container, Rarity, RewardEntry

log = logging.getLogger(__name__)

_BLANK_ROW_CLASS = "blank-row"
_RELIC_MARKER = "Relic"


def fetch_page(url: str) -> str:
    settings = get_settings()
    try:
        response = httpx.get(url, timeout=settings.api_timeout, follow_redirects=True)
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        raise FetchError(
            f"Failed to fetch drop table page '{url}': HTTP {e.response.status_code}"
        ) from e
    except httpx.RequestError as e:
        raise FetchError(f"Network error fetching drop table page '{url}': {e}") from e

    return response.text


def classify_rarity(drop_chance: str, drop_chances: Sequence[DropChance] | None = None) -> Rarity:
    if drop_chances is None:
        drop_chances = SourceConfig().drop_chances

    for chance in drop_chances:
        if chance.match in drop_chance:
            return chance.rarity
    return ""


def _find_heading(soup: BeautifulSoup, text: str) -> Tag | None:
    for th in soup.find_all("th"):
        if th.get_text().strip() == text:
            return th
    return None


def _rows_after(heading: Tag):
    row = heading.find_parent("tr")
    if row is None:
        return
    row = row.find_next_sibling("tr")
    while row is not None and _BLANK_ROW_CLASS not in (row.get("class") or []):
        yield row
        row = row.find_next_sibling("tr")


def find_sub_table_relics(soup: BeautifulSoup, title: str) -> list[str]:
    heading = _find_heading(soup, title)
    if heading is None:
        log.warning("Sub-table not found: %s", title)
        return []

    relics = []
    for row in _rows_after(heading):
        if row.find("th") is not None:
            continue
        cell = row.find("td")
        if cell is None:
            continue
        text = cell.get_text().strip()
        if _RELIC_MARKER in text:
            relics.append(text)

    return relics


def find_relic_rewards(
    soup: BeautifulSoup,
    relic_name: str,
    drop_chances: Sequence[DropChance] | None = None,
    relic_state: str | None = None,
) -> list[RewardEntry]:
    if relic_state is None:
        relic_state = SourceConfig().relic_state
    heading_text = f"{relic_name} ({relic_state})"
    heading = _find_heading(soup, heading_text)
    if heading is None:
        log.warning("Relic table not found: %s", heading_text)
        return []

    rewards = []
    for row in _rows_after(heading):
        # Header cells inside a reward block belong to a nested table
        if row.find("th") is not None:
            continue
        cells = row.find_all("td")
        if not cells:
            continue
        item = cells[0].get_text().strip()
        chance = cells[1].get_text().strip() if len(cells) > 1 else ""
        rewards.append(
            RewardEntry(
                item=item,
                rarity=classify_rarity(chance, drop_chances),
                source=relic_name,
            )
        )

    return rewards


def extract_relic_tables(html: str, sources: SourceConfig) -> dict[str, Container]:
    """
    Locate every relic listed under the configured mission sub-tables and
    read its intact reward table.

    Relics keep the order they are first listed in, walking the sub-tables
    in configuration order. A relic listed under several missions is read
    once. Missing headings are logged and contribute nothing. Locations
    are left empty; they are resolved by tier when the markdown is written.
    """
    soup = BeautifulSoup(html, "html.parser")

    relic_names: list[str] = []
    for title in sources.sub_table_titles:
        for relic in find_sub_table_relics(soup, title):
            if relic not in relic_names:
                relic_names.append(relic)
        log.debug("Sub-table '%s': %d relic(s) so far", title, len(relic_names))

    return {
        relic: Container(
            name=relic,
            rewards=find_relic_rewards(soup, relic, sources.drop_chances, sources.relic_state),
        )
        for relic in relic_names
    }
