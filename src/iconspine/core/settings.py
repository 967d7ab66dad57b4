"""Settings for the icon export pipeline.

``ExportSettings`` reads ``ICONSPINE_*`` environment variables and an optional
``.env`` file. CLI options are passed as keyword overrides on top.

Examples:
    >>> settings = ExportSettings(source_dir="carbon-assets", workers=4)
    >>> settings.vectors_dir.as_posix()
    'carbon-assets/32'

Fields
──────
source_dir       : Root holding categories.yml, icons.yml and the SVG tiers
output_dir       : Root of the generated library
vector_tier      : SVG size tier to read (sub-directory of source_dir)
signature_color  : Fill for the Signature variant
white_color      : Fill for the White variant
raster_width     : PNG width in pixels
workers          : Export worker threads (1 = sequential)
skip_failures    : Skip icons that fail to recolor/render instead of aborting
extra_exclusions : Identifiers excluded in addition to the built-in set
log_level        : structlog level
log_format       : console | json
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from iconspine.core.models import SIGNATURE_COLOR, WHITE_COLOR, Variant

_HEX_COLOR = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


class ExportSettings(BaseSettings):
    """Configuration for one export run."""

    model_config = SettingsConfigDict(
        env_prefix="ICONSPINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Inputs ───────────────────────────────────────────────────
    source_dir: Path = Path("carbon-assets")
    vector_tier: int = Field(default=32, gt=0)
    extra_exclusions: list[str] = Field(default_factory=list)

    # ── Outputs ──────────────────────────────────────────────────
    output_dir: Path = Path("output")
    signature_color: str = SIGNATURE_COLOR
    white_color: str = WHITE_COLOR
    raster_width: int = Field(default=1024, gt=0)

    # ── Execution ────────────────────────────────────────────────
    workers: int = Field(default=1, ge=1)
    skip_failures: bool = False

    # ── Observability ────────────────────────────────────────────
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["console", "json"] = "console"

    @field_validator("signature_color", "white_color")
    @classmethod
    def validate_color(cls, value: str) -> str:
        value = value.strip()
        if not _HEX_COLOR.match(value):
            raise ValueError(f"expected a hex color like #002346, got {value!r}")
        return value

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_level(cls, value: str) -> str:
        return value.upper() if isinstance(value, str) else value

    @property
    def categories_path(self) -> Path:
        return self.source_dir / "categories.yml"

    @property
    def icons_path(self) -> Path:
        return self.source_dir / "icons.yml"

    @property
    def vectors_dir(self) -> Path:
        return self.source_dir / str(self.vector_tier)

    @property
    def variants(self) -> tuple[Variant, ...]:
        return (
            Variant(name="Signature", color=self.signature_color),
            Variant(name="White", color=self.white_color),
        )
