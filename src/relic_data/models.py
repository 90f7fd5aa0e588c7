"""Pydantic models for relic rewards and the Prime items they drop."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

# Empty string marks a drop chance that matched no known tier.
Rarity = Literal["Common", "Uncommon", "Rare", ""]

RARITIES: tuple[str, ...] = ("Common", "Uncommon", "Rare")


class RewardEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    item: str
    rarity: Rarity = ""
    source: str | None = None


class Container(BaseModel):
    name: str = Field(min_length=1)
    location: str = ""
    rewards: list[RewardEntry] = Field(default_factory=list)


class PrimePart(BaseModel):
    model_config = ConfigDict(frozen=True)

    part: str
    rarity: Rarity = ""
    relic: str = ""


class ProducedItem(BaseModel):
    name: str = Field(min_length=1)
    parts: list[PrimePart] = Field(default_factory=list)


class RelicDocument(BaseModel):
    primes: dict[str, ProducedItem] = Field(default_factory=dict)
    relics: dict[str, Container] = Field(default_factory=dict)

    def dangling_references(self) -> list[tuple[str, str]]:
        """Return (prime, relic) pairs whose relic is not in this document."""
        missing = []
        for prime in self.primes.values():
            for part in prime.parts:
                if part.relic and part.relic not in self.relics:
                    missing.append((prime.name, part.relic))
        return missing


class CategorizedPrimes(BaseModel):
    warframes: dict[str, ProducedItem] = Field(default_factory=dict)
    weapons: dict[str, ProducedItem] = Field(default_factory=dict)
