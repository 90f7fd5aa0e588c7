"""
Reader and writer for the relic markdown format.

The extractor writes this file and the page renderer reads it back, so
the two halves below must stay in step:

    # Primes

    - Volt Prime
      - Volt Prime Systems Blueprint (Rare) -> Axi V8 Relic

    # Relics

    ## Axi V8 Relic

    - Volt Prime Systems Blueprint (Rare)

    **Location**: Lua/Apollo (Disruption)

Writing sorts primes by name and each prime's parts by rarity. Reading
keeps whatever order the file has. Lines the reader does not understand
are logged and skipped; reading never raises on file content.
"""

import logging
import re
from collections.abc import Mapping
from datetime import date
from pathlib import Path

from relic_data import sorter
from relic_data.exceptions import DataFileError
from relic_data.models import (
    RARITIES,
    Container,
    PrimePart,
    ProducedItem,
    Rarity,
    RelicDocument,
    RewardEntry,
)

log = logging.getLogger(__name__)

PRIMES_HEADER = "# Primes"
RELICS_HEADER = "# Relics"
LOCATION_PREFIX = "**Location**:"
PART_DELIMITER = "->"

_SECTIONS = {
    PRIMES_HEADER: "primes",
    RELICS_HEADER: "relics",
}

_RARITY_SUFFIX = re.compile(r"\(([^()]*)\)$")


def format_generated_on(day: date) -> str:
    return f"{day:%B} {day.day}, {day.year}"


def write_markdown(
    primes: Mapping[str, ProducedItem],
    relics: Mapping[str, Container],
    locations_by_tier: Mapping[str, str] | None = None,
    generated_on: date | None = None,
) -> str:
    """
    Render primes and relics to the markdown format.

    When ``locations_by_tier`` is given, each relic's location is looked
    up by its tier (the first word of its name) and an unknown tier gives
    an empty location. Without it, the relic's own location is written.
    """
    generated_on = generated_on or date.today()
    lines = [f"# Generated on {format_generated_on(generated_on)}", "", PRIMES_HEADER, ""]

    for name in sorted(primes):
        lines.append(f"- {name}")
        for part in sorter.sort_parts(primes[name].parts):
            lines.append(f"  - {part.part} ({part.rarity}) {PART_DELIMITER} {part.relic}")

    lines.extend(["", RELICS_HEADER, ""])

    for name, relic in relics.items():
        lines.append(f"## {name}")
        lines.append("")
        for reward in relic.rewards:
            lines.append(f"- {reward.item} ({reward.rarity})")

        if locations_by_tier is not None:
            location = locations_by_tier.get(sorter.relic_tier(name), "")
        else:
            location = relic.location
        lines.append("")
        lines.append(f"{LOCATION_PREFIX} {location}")
        lines.append("")

    return "\n".join(lines) + "\n"


def split_rarity(text: str) -> tuple[str, Rarity]:
    """Split "Name (Rarity)" into its name and rarity.

    Text without a trailing rarity is all name, with an empty rarity.
    """
    text = text.strip()
    match = _RARITY_SUFFIX.search(text)
    if not match:
        return text, ""

    label = match.group(1).strip()
    if label and label not in RARITIES:
        log.warning("Unknown rarity '%s' in '%s', keeping it in the name", label, text)
        return text, ""

    return text[: match.start()].strip(), label  # type: ignore[return-value]


class RelicMarkdownParser:
    def __init__(self) -> None:
        self.primes: dict[str, ProducedItem] = {}
        self.relics: dict[str, Container] = {}
        self.section: str | None = None
        self.current: str | None = None

    def parse(self, content: str) -> RelicDocument:
        for line_no, raw in enumerate(content.splitlines(), start=1):
            line = raw.rstrip()
            if not line.strip():
                continue

            handled = (
                self._handle_section_header(line)
                or self._handle_primes_line(line, line_no)
                or self._handle_relics_line(line, line_no)
            )
            if not handled and self.section is not None:
                log.warning("Skipping unrecognised line %d: %s", line_no, line.strip())

        return RelicDocument(primes=self.primes, relics=self.relics)

    def _handle_section_header(self, line: str) -> bool:
        section = _SECTIONS.get(line.strip())
        if section is None:
            return False
        self.section = section
        self.current = None
        return True

    def _handle_primes_line(self, line: str, line_no: int) -> bool:
        if self.section != "primes":
            return False

        if line.startswith("- ") and PART_DELIMITER not in line:
            name = line[2:].strip()
            if not name:
                return False
            if name in self.primes:
                log.warning("Line %d: prime '%s' listed twice, replacing", line_no, name)
            self.primes[name] = ProducedItem(name=name)
            self.current = name
            return True

        stripped = line.strip()
        if line.startswith("  - ") or (stripped.startswith("- ") and PART_DELIMITER in stripped):
            if self.current is None:
                log.warning("Line %d: part outside of a prime: %s", line_no, stripped)
                return True
            part = self._parse_part(stripped, line_no)
            if part is not None:
                self.primes[self.current].parts.append(part)
            return True

        return False

    def _handle_relics_line(self, line: str, line_no: int) -> bool:
        if self.section != "relics":
            return False

        stripped = line.strip()
        if stripped.startswith("## "):
            name = stripped[3:].strip()
            if not name:
                return False
            if name in self.relics:
                log.warning("Line %d: relic '%s' listed twice, replacing", line_no, name)
            self.relics[name] = Container(name=name)
            self.current = name
            return True

        if stripped.startswith(LOCATION_PREFIX):
            if self.current is None:
                log.warning("Line %d: location outside of a relic: %s", line_no, stripped)
                return True
            self.relics[self.current].location = stripped.split(":", 1)[1].strip()
            return True

        if stripped.startswith("- "):
            text = stripped[2:].strip()
            if self.current is None or not text:
                log.warning("Line %d: couldn't parse reward: %s", line_no, stripped)
                return True
            item, rarity = split_rarity(text)
            self.relics[self.current].rewards.append(
                RewardEntry(item=item, rarity=rarity, source=self.current)
            )
            return True

        return False

    def _parse_part(self, line: str, line_no: int) -> PrimePart | None:
        text = re.sub(r"^[- ]+", "", line)
        part_info, delimiter, relic = text.partition(PART_DELIMITER)
        relic = relic.strip()
        if not delimiter or not relic:
            log.warning("Line %d: couldn't parse part info: %s", line_no, line)
            return None

        part, rarity = split_rarity(part_info)
        if not part:
            log.warning("Line %d: part has no name: %s", line_no, line)
            return None

        return PrimePart(part=part, rarity=rarity, relic=relic)


def parse_markdown(content: str) -> RelicDocument:
    return RelicMarkdownParser().parse(content)


def read_markdown_file(path: Path) -> RelicDocument:
    try:
        content = path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise DataFileError(str(path), "Markdown file not found") from e
    except OSError as e:
        raise DataFileError(str(path), f"Couldn't read markdown file ({e})") from e

    return parse_markdown(content)


def write_text_file(path: Path, content: str) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise DataFileError(str(path), f"Couldn't write file ({e})") from e
