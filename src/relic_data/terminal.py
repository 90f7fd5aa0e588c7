"""
Terminal output for the extract and render scripts.

Colors are tuned for dark backgrounds and switched off when stdout is not
a TTY (CI logs, redirected output). Rarity tags use the same palette as
the rendered page.
"""

import sys
from collections.abc import Mapping
from enum import Enum

from relic_data import sorter
from relic_data.models import ProducedItem


class Color(Enum):
    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    BRIGHT_BLACK = "\033[90m"
    BRIGHT_RED = "\033[91m"
    BRIGHT_GREEN = "\033[92m"
    BRIGHT_YELLOW = "\033[93m"
    BRIGHT_BLUE = "\033[94m"
    BRIGHT_CYAN = "\033[96m"
    BRIGHT_WHITE = "\033[97m"


RARITY_COLORS = {
    "Rare": Color.BRIGHT_RED,
    "Uncommon": Color.BRIGHT_YELLOW,
    "Common": Color.BRIGHT_BLACK,
}


def _supports_color() -> bool:
    return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


def colorize(text: str, *colors: Color) -> str:
    if not _supports_color():
        return text
    prefix = "".join(c.value for c in colors)
    return f"{prefix}{text}{Color.RESET.value}"


def info(message: str) -> None:
    print(message)


def success(message: str) -> None:
    print(colorize(message, Color.BRIGHT_GREEN))


def error(message: str) -> None:
    print(colorize(f"✗ {message}", Color.BRIGHT_RED), file=sys.stderr)


def section_header(title: str) -> None:
    separator = "=" * 60
    print(f"\n{colorize(separator, Color.BRIGHT_BLUE)}")
    print(colorize(title, Color.BOLD, Color.BRIGHT_CYAN))
    print(colorize(separator, Color.BRIGHT_BLUE))


def key_value(key: str, value: str, indent: int = 0) -> None:
    spaces = " " * indent
    print(f"{spaces}{colorize(f'{key}:', Color.BRIGHT_WHITE)} {value}")


def rarity_tag(rarity: str) -> str:
    label = rarity or "Unknown"
    color = RARITY_COLORS.get(rarity, Color.DIM)
    return colorize(f"[{label}]", color)


def prime_summary(primes: Mapping[str, ProducedItem]) -> None:
    """Print each prime with its parts, rarest first."""
    for name in sorted(primes):
        print(colorize(name, Color.BOLD))
        for part in sorter.sort_parts(primes[name].parts):
            arrow = colorize("->", Color.DIM)
            print(f"  {rarity_tag(part.rarity)} {part.part} {arrow} {part.relic}")
