"""Tests for the drop table client and table locator."""

import logging

import pytest
from bs4 import BeautifulSoup
from httpx import HTTPStatusError, Request, RequestError, Response

from relic_data import drops
from relic_data.config import DropChance, SourceConfig
from relic_data.exceptions import FetchError

DROP_TABLE_HTML = """
<html><body><table>
<tr><th colspan="2">Void/Hepit (Capture)</th></tr>
<tr><th colspan="2">Rotation A</th></tr>
<tr><td>Lith V1 Relic</td><td>Uncommon (11.00%)</td></tr>
<tr><td>200X Endo</td><td>Common (25.33%)</td></tr>
<tr class="blank-row"><td class="blank-row" colspan="2"></td></tr>
<tr><th colspan="2">Void/Ukko (Capture)</th></tr>
<tr><td>Lith V1 Relic</td><td>Uncommon (11.00%)</td></tr>
<tr><td>Axi A2 Relic</td><td>Rare (2.00%)</td></tr>
<tr class="blank-row"><td class="blank-row" colspan="2"></td></tr>
<tr><th colspan="2">Lith V1 Relic (Intact)</th></tr>
<tr><td>Volt Prime Systems Blueprint</td><td>Rare (2.00%)</td></tr>
<tr><td>Forma Blueprint</td><td>Common (25.33%)</td></tr>
<tr><td>Lex Prime Barrel</td><td>Uncommon (11.00%)</td></tr>
<tr class="blank-row"><td class="blank-row" colspan="2"></td></tr>
<tr><th colspan="2">Lith V1 Relic (Radiant)</th></tr>
<tr><td>Volt Prime Systems Blueprint</td><td>Rare (10.00%)</td></tr>
<tr class="blank-row"><td class="blank-row" colspan="2"></td></tr>
<tr><th colspan="2">Axi A2 Relic (Intact)</th></tr>
<tr><td>Volt Prime Blueprint</td><td>Common (25.33%)</td></tr>
<tr><th>Nested</th><th>Header</th></tr>
<tr><td>Paris Prime String</td><td>Common (25.33%)</td></tr>
</table></body></html>
"""


@pytest.fixture
def soup() -> BeautifulSoup:
    return BeautifulSoup(DROP_TABLE_HTML, "html.parser")


class TestClassifyRarity:
    def test_common(self):
        assert drops.classify_rarity("Common (25.33%)") == "Common"

    def test_uncommon(self):
        assert drops.classify_rarity("Uncommon (11.00%)") == "Uncommon"

    def test_rare(self):
        assert drops.classify_rarity("Rare (2.00%)") == "Rare"

    def test_unknown_percentage_is_empty(self):
        assert drops.classify_rarity("Rare (10.00%)") == ""

    def test_empty_string_is_empty(self):
        assert drops.classify_rarity("") == ""

    def test_first_match_wins(self):
        chances = [
            DropChance(match="%", rarity="Rare"),
            DropChance(match="25.33%", rarity="Common"),
        ]
        assert drops.classify_rarity("25.33%", chances) == "Rare"

    def test_custom_table(self):
        chances = [DropChance(match="12.5%", rarity="Uncommon")]
        assert drops.classify_rarity("Uncommon (12.5%)", chances) == "Uncommon"
        assert drops.classify_rarity("Common (25.33%)", chances) == ""


class TestFindSubTableRelics:
    def test_collects_relic_rows_until_blank_row(self, soup):
        assert drops.find_sub_table_relics(soup, "Void/Ukko (Capture)") == [
            "Lith V1 Relic",
            "Axi A2 Relic",
        ]

    def test_skips_header_rows_and_non_relic_rewards(self, soup):
        assert drops.find_sub_table_relics(soup, "Void/Hepit (Capture)") == ["Lith V1 Relic"]

    def test_missing_heading_warns_and_returns_empty(self, soup, caplog):
        with caplog.at_level(logging.WARNING):
            result = drops.find_sub_table_relics(soup, "Lua/Apollo (Disruption)")

        assert result == []
        assert "Sub-table not found: Lua/Apollo (Disruption)" in caplog.text

    def test_heading_must_match_exactly(self, soup):
        assert drops.find_sub_table_relics(soup, "Void/Ukko") == []


class TestFindRelicRewards:
    def test_reads_rewards_with_rarity(self, soup):
        rewards = drops.find_relic_rewards(soup, "Lith V1 Relic")

        assert [(r.item, r.rarity) for r in rewards] == [
            ("Volt Prime Systems Blueprint", "Rare"),
            ("Forma Blueprint", "Common"),
            ("Lex Prime Barrel", "Uncommon"),
        ]
        assert all(r.source == "Lith V1 Relic" for r in rewards)

    def test_skips_nested_header_rows(self, soup):
        rewards = drops.find_relic_rewards(soup, "Axi A2 Relic")

        assert [r.item for r in rewards] == ["Volt Prime Blueprint", "Paris Prime String"]

    def test_reads_to_end_of_document_without_blank_row(self, soup):
        rewards = drops.find_relic_rewards(soup, "Axi A2 Relic")

        assert rewards[-1].item == "Paris Prime String"

    def test_default_relic_state_comes_from_source_config(self, soup, mocker):
        config = mocker.patch("relic_data.drops.SourceConfig")
        config.return_value.relic_state = "Radiant"

        rewards = drops.find_relic_rewards(soup, "Lith V1 Relic", drop_chances=[])

        assert [r.item for r in rewards] == ["Volt Prime Systems Blueprint"]

    def test_relic_state_selects_table(self, soup):
        rewards = drops.find_relic_rewards(soup, "Lith V1 Relic", relic_state="Radiant")

        assert len(rewards) == 1
        assert rewards[0].rarity == ""

    def test_missing_relic_warns_and_returns_empty(self, soup, caplog):
        with caplog.at_level(logging.WARNING):
            result = drops.find_relic_rewards(soup, "Neo Z9 Relic")

        assert result == []
        assert "Relic table not found: Neo Z9 Relic (Intact)" in caplog.text

    def test_row_without_chance_cell_has_empty_rarity(self):
        html = (
            "<table><tr><th>Meso B1 Relic (Intact)</th></tr>"
            "<tr><td>Braton Prime Stock</td></tr></table>"
        )
        soup = BeautifulSoup(html, "html.parser")

        rewards = drops.find_relic_rewards(soup, "Meso B1 Relic")

        assert rewards[0].item == "Braton Prime Stock"
        assert rewards[0].rarity == ""


class TestExtractRelicTables:
    def test_relics_in_first_seen_order_without_duplicates(self):
        relics = drops.extract_relic_tables(DROP_TABLE_HTML, SourceConfig())

        assert list(relics) == ["Lith V1 Relic", "Axi A2 Relic"]
        assert relics["Lith V1 Relic"].name == "Lith V1 Relic"
        assert len(relics["Lith V1 Relic"].rewards) == 3
        assert relics["Axi A2 Relic"].location == ""

    def test_missing_sub_tables_give_partial_result(self, caplog):
        sources = SourceConfig(subTableTitles=["Nowhere (Survival)", "Void/Ukko (Capture)"])

        with caplog.at_level(logging.WARNING):
            relics = drops.extract_relic_tables(DROP_TABLE_HTML, sources)

        assert list(relics) == ["Lith V1 Relic", "Axi A2 Relic"]
        assert "Nowhere (Survival)" in caplog.text

    def test_no_matching_tables(self):
        sources = SourceConfig(subTableTitles=["Nowhere (Survival)"])

        assert drops.extract_relic_tables(DROP_TABLE_HTML, sources) == {}


def test_fetch_page_success(mocker):
    mock_get = mocker.patch("httpx.get")
    mock_get.return_value.text = "<html></html>"
    mock_get.return_value.raise_for_status = lambda: None

    assert drops.fetch_page("https://example.com/drops.html") == "<html></html>"
    mock_get.assert_called_once()


def test_fetch_page_http_error(mocker):
    mock_get = mocker.patch("httpx.get")
    mock_response = Response(404, request=Request("GET", "http://test.com"))
    mock_get.return_value.raise_for_status.side_effect = HTTPStatusError(
        "Not found", request=mock_response.request, response=mock_response
    )

    with pytest.raises(FetchError, match="Failed to fetch drop table page.*HTTP 404"):
        drops.fetch_page("http://test.com")


def test_fetch_page_network_error(mocker):
    mock_get = mocker.patch("httpx.get")
    mock_get.side_effect = RequestError("Connection refused")

    with pytest.raises(FetchError, match="Network error fetching drop table page"):
        drops.fetch_page("http://test.com")
