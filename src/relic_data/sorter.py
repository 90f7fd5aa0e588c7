"""
Deterministic ordering for prime parts and relic names.

Parts are sorted by rarity precedence (rarest first) so the most valuable
drop leads each prime's list. Relics are sorted by tier, then by name.
Rarity order is fixed below; tier order defaults to the configured
tierOrder. Anything not listed sorts after everything that is.
"""

from collections.abc import Iterable, Sequence

from relic_data.config import SourceConfig
from relic_data.models import PrimePart

# Rarest first; unspecified rarity ("") falls through to the end
RARITY_ORDER = ["Rare", "Uncommon", "Common"]


def relic_tier(relic_name: str) -> str:
    return relic_name.split(" ")[0]


def sort_parts(parts: Iterable[PrimePart]) -> list[PrimePart]:
    """Sort parts by rarity precedence. Stable, so ties keep source order."""
    return sorted(parts, key=_rarity_rank)


def sort_relic_names(
    relic_names: Iterable[str], tier_order: Sequence[str] | None = None
) -> list[str]:
    """Return unique relic names ordered by tier, then alphabetically."""
    order = list(tier_order) if tier_order is not None else SourceConfig().tier_order

    def sort_key(name: str) -> tuple[int, str]:
        tier = relic_tier(name)
        try:
            return (order.index(tier), name)
        except ValueError:
            return (len(order), name)

    return sorted(set(relic_names), key=sort_key)


def _rarity_rank(part: PrimePart) -> int:
    try:
        return RARITY_ORDER.index(part.rarity)
    except ValueError:
        return len(RARITY_ORDER)
