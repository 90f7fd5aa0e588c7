"""
Configuration management for relic data extraction and page rendering.

Runtime settings come from environment variables (RELIC_ prefix) and an
optional .env file. The upstream-coupled lookup tables (table headings,
drop-chance tokens, tier locations) live in a YAML file so they can be
updated when the source page changes wording.
"""

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from relic_data.exceptions import DataFileError
from relic_data.models import Rarity

log = logging.getLogger(__name__)

_DEFAULT_SOURCE_URL = (
    "https://warframe-web-assets.nyc3.cdn.digitaloceanspaces.com"
    "/uploads/cms/hnfvc0o3jnfvc873njb03enrf56.html"
)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="RELIC_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    source_url: str = Field(default=_DEFAULT_SOURCE_URL, description="Drop table page URL")
    api_timeout: float = Field(default=30.0, description="HTTP request timeout in seconds")
    sources_file: Path = Field(
        default_factory=lambda: Path("data/sources.yaml"),
        description="Lookup tables for the drop table page",
    )
    markdown_path: Path = Field(
        default_factory=lambda: Path("currentPrimes.md"),
        description="Intermediate markdown file",
    )
    html_path: Path = Field(
        default_factory=lambda: Path("index.html"),
        description="Rendered page",
    )
    log_level: str = Field(default="INFO", description="Logging level")


class DropChance(BaseModel):
    match: str = Field(min_length=1)
    rarity: Rarity


class SourceConfig(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    sub_table_titles: list[str] = Field(
        default_factory=lambda: [
            "Void/Hepit (Capture)",
            "Void/Ukko (Capture)",
            "Lua/Apollo (Disruption)",
        ],
        alias="subTableTitles",
    )
    locations_by_tier: dict[str, str] = Field(
        default_factory=lambda: {
            "Lith": "Void/Hepit (Capture)",
            "Meso": "Void/Ukko (Capture)",
            "Neo": "Void/Ukko (Capture), Lua/Apollo (Disruption)",
            "Axi": "Lua/Apollo (Disruption)",
        },
        alias="locationsByTier",
    )
    drop_chances: list[DropChance] = Field(
        default_factory=lambda: [
            DropChance(match="25.33%", rarity="Common"),
            DropChance(match="11.00%", rarity="Uncommon"),
            DropChance(match="2.00%", rarity="Rare"),
        ],
        alias="dropChances",
    )
    relic_state: str = Field(default="Intact", alias="relicState")
    tier_order: list[str] = Field(
        default_factory=lambda: ["Lith", "Meso", "Neo", "Axi"], alias="tierOrder"
    )
    frame_parts: list[str] = Field(
        default_factory=lambda: ["Systems", "Chassis", "Neuroptics"], alias="frameParts"
    )


def load_source_config(path: Path | None = None) -> SourceConfig:
    if path is None:
        path = get_settings().sources_file

    if not path.exists():
        log.info("Source config %s not found, using built-in defaults", path)
        return SourceConfig()

    try:
        with path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise DataFileError(str(path), f"YAML parse error ({e})") from e

    try:
        return SourceConfig.model_validate(data)
    except ValidationError as e:
        reason = f"Invalid source config ({e.error_count()} error(s))"
        raise DataFileError(str(path), reason) from e


_settings: Settings | None = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reload_settings() -> Settings:
    global _settings
    _settings = Settings()
    return _settings
