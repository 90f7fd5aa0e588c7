"""
Grouping of relic rewards into Prime items, and Prime categorisation.

A reward belongs to a Prime when its name carries the "Prime" marker and
is not a Forma blueprint. The Prime's key is everything before the first
" Prime" with the marker put back, so "Volt Prime Systems Blueprint" and
"Volt Prime Blueprint" both land under "Volt Prime".
"""

import logging
from collections.abc import Iterable, Mapping

from relic_data.config import SourceConfig
from relic_data.models import CategorizedPrimes, Container, PrimePart, ProducedItem

log = logging.getLogger(__name__)

PRIME_MARKER = "Prime"
EXCLUDED_MARKER = "Forma"


def is_prime_part(item: str) -> bool:
    return PRIME_MARKER in item and EXCLUDED_MARKER not in item


def prime_name(item: str) -> str:
    # Anything after the first " Prime" is a part or variant suffix.
    # TODO: names with punctuation right after "Prime" are merged as-is;
    # confirm whether e.g. "Lex Prime, Akimbo" should stay separate.
    return item.split(f" {PRIME_MARKER}")[0] + f" {PRIME_MARKER}"


def group_primes(relics: Mapping[str, Container]) -> dict[str, ProducedItem]:
    """
    Collect every Prime part dropped by the given relics.

    Relics are scanned in mapping order and rewards in table order; each
    Prime's parts keep the order they were first seen in. The result is a
    fresh mapping on every call, so grouping the same relics twice gives
    equal output.
    """
    primes: dict[str, ProducedItem] = {}

    for relic_name, relic in relics.items():
        for reward in relic.rewards:
            if not is_prime_part(reward.item):
                continue
            name = prime_name(reward.item)
            if name not in primes:
                primes[name] = ProducedItem(name=name)
            primes[name].parts.append(
                PrimePart(part=reward.item, rarity=reward.rarity, relic=relic_name)
            )

    log.debug("Grouped %d prime(s) from %d relic(s)", len(primes), len(relics))
    return primes


def is_warframe(prime: ProducedItem, frame_parts: Iterable[str] | None = None) -> bool:
    components = list(frame_parts) if frame_parts is not None else SourceConfig().frame_parts
    return any(
        component in part.part for part in prime.parts for component in components
    )


def categorize_primes(
    primes: Mapping[str, ProducedItem], frame_parts: Iterable[str] | None = None
) -> CategorizedPrimes:
    components = list(frame_parts) if frame_parts is not None else SourceConfig().frame_parts
    categorized = CategorizedPrimes()

    for name, prime in primes.items():
        if is_warframe(prime, components):
            categorized.warframes[name] = prime
        else:
            categorized.weapons[name] = prime

    return categorized
