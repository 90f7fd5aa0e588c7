"""
Tests for part and relic ordering.

Parts sort rarest first with unknown rarity last; relics sort by tier
(Lith → Meso → Neo → Axi) then name, with unknown tiers last.
"""

from relic_data import sorter
from relic_data.models import PrimePart


class TestSortParts:
    def test_sort_by_rarity_precedence(self):
        parts = [
            PrimePart(part="A", rarity="Common"),
            PrimePart(part="B", rarity="Rare"),
            PrimePart(part="C", rarity="Uncommon"),
        ]

        result = sorter.sort_parts(parts)

        assert [p.rarity for p in result] == ["Rare", "Uncommon", "Common"]

    def test_unknown_rarity_last(self):
        parts = [
            PrimePart(part="A", rarity=""),
            PrimePart(part="B", rarity="Common"),
        ]

        result = sorter.sort_parts(parts)

        assert [p.part for p in result] == ["B", "A"]

    def test_sort_is_stable(self):
        parts = [
            PrimePart(part="Second", rarity="Common", relic="Lith V1 Relic"),
            PrimePart(part="First", rarity="Common", relic="Axi A2 Relic"),
        ]

        result = sorter.sort_parts(parts)

        assert [p.part for p in result] == ["Second", "First"]

    def test_sort_empty_list(self):
        assert sorter.sort_parts([]) == []


class TestSortRelicNames:
    def test_sort_by_tier_then_name(self):
        names = ["Axi A1 Relic", "Lith Z1 Relic", "Meso B2 Relic", "Lith A3 Relic", "Neo N1 Relic"]

        result = sorter.sort_relic_names(names)

        assert result == [
            "Lith A3 Relic",
            "Lith Z1 Relic",
            "Meso B2 Relic",
            "Neo N1 Relic",
            "Axi A1 Relic",
        ]

    def test_unknown_tier_last(self):
        result = sorter.sort_relic_names(["Requiem I Relic", "Axi A1 Relic"])

        assert result == ["Axi A1 Relic", "Requiem I Relic"]

    def test_duplicates_removed(self):
        result = sorter.sort_relic_names(["Lith A1 Relic", "Lith A1 Relic"])

        assert result == ["Lith A1 Relic"]

    def test_custom_tier_order(self):
        result = sorter.sort_relic_names(["Lith A1 Relic", "Axi A1 Relic"], tier_order=["Axi"])

        assert result == ["Axi A1 Relic", "Lith A1 Relic"]

    def test_default_tier_order_comes_from_source_config(self, mocker):
        config = mocker.patch("relic_data.sorter.SourceConfig")
        config.return_value.tier_order = ["Axi", "Lith"]

        result = sorter.sort_relic_names(["Lith A1 Relic", "Axi A1 Relic"])

        assert result == ["Axi A1 Relic", "Lith A1 Relic"]


def test_relic_tier():
    assert sorter.relic_tier("Neo V8 Relic") == "Neo"
