"""Domain models for the icon export pipeline.

Two kinds of model live here:

- pydantic schemas for the loosely-typed YAML documents (``categories.yml``
  and ``icons.yml``), validated once at the boundary;
- frozen dataclasses for the values that flow through the pipeline
  (index entries, discovered assets, icon records, variants, summaries).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

# =============================================================================
# Source document schemas
# =============================================================================


def _string_list(value: Any) -> Any:
    # YAML gives None for an empty key and ints for bare numbers (``- 3``).
    if value is None:
        return []
    if isinstance(value, list):
        return [str(item) if isinstance(item, int | float) else item for item in value]
    return value


class SubcategoryDoc(BaseModel):
    """One subcategory and the icon identifiers it lists."""

    model_config = ConfigDict(extra="ignore")

    name: str = Field(..., min_length=1)
    members: list[str] = Field(default_factory=list)

    @field_validator("members", mode="before")
    @classmethod
    def coerce_members(cls, value: Any) -> Any:
        return _string_list(value)


class CategoryDoc(BaseModel):
    """A top-level category."""

    model_config = ConfigDict(extra="ignore")

    name: str = Field(..., min_length=1)
    subcategories: list[SubcategoryDoc] = Field(default_factory=list)


class CategoriesDocument(BaseModel):
    """Root of ``categories.yml``."""

    model_config = ConfigDict(extra="ignore")

    categories: list[CategoryDoc] = Field(default_factory=list)


class IconDescriptor(BaseModel):
    """One entry of ``icons.yml``.

    ``sizes`` is part of the source schema but is not used by the pipeline.
    Names are kept exactly as written; they become file names and join keys.
    """

    model_config = ConfigDict(extra="ignore")

    name: str = Field(..., min_length=1)
    friendly_name: str = Field(..., min_length=1)
    aliases: list[str] = Field(default_factory=list)
    sizes: list[int | str] = Field(default_factory=list)

    @field_validator("aliases", mode="before")
    @classmethod
    def coerce_aliases(cls, value: Any) -> Any:
        return _string_list(value)

    @field_validator("sizes", mode="before")
    @classmethod
    def coerce_sizes(cls, value: Any) -> Any:
        return [] if value is None else value


# =============================================================================
# Pipeline values
# =============================================================================


@dataclass(frozen=True)
class TaxonomyEntry:
    subcategory: str
    top_category: str


@dataclass(frozen=True)
class NamingEntry:
    friendly_name: str
    aliases: tuple[str, ...] = ()


@dataclass(frozen=True)
class DiscoveredAsset:
    """A vector file found on disk; ``identifier`` is the file stem."""

    identifier: str
    markup: str
    path: Path | None = None


@dataclass(frozen=True)
class IconRecord:
    """One fully-resolved icon. Only the registry builder creates these."""

    identifier: str
    friendly_name: str
    aliases: tuple[str, ...]
    category: str
    top_category: str
    markup: str = field(repr=False)

    def to_dict(self) -> dict[str, object]:
        """Metadata view without the markup, for listings."""
        return {
            "identifier": self.identifier,
            "friendly_name": self.friendly_name,
            "aliases": list(self.aliases),
            "category": self.category,
            "top_category": self.top_category,
        }


@dataclass(frozen=True)
class Variant:
    """One color variant (e.g. ``Signature`` → ``#002346``)."""

    name: str
    color: str


SIGNATURE_COLOR = "#002346"
WHITE_COLOR = "#fff"

DEFAULT_VARIANTS: tuple[Variant, ...] = (
    Variant(name="Signature", color=SIGNATURE_COLOR),
    Variant(name="White", color=WHITE_COLOR),
)


@dataclass(frozen=True)
class ProgressEvent:
    """Emitted once per exported icon."""

    current: int
    total: int
    category: str
    friendly_name: str


@dataclass(frozen=True)
class ExportFailure:
    """An icon skipped under the skip-and-report policy."""

    identifier: str
    error_type: str
    message: str


@dataclass
class ExportSummary:
    """Result of one export run."""

    total: int
    exported: int = 0
    artifacts: int = 0
    failures: tuple[ExportFailure, ...] = ()
    started_at: datetime | None = None
    completed_at: datetime | None = None

    @property
    def complete(self) -> bool:
        """True when every record in the registry was exported."""
        return self.exported == self.total and not self.failures

    @property
    def duration_seconds(self) -> float | None:
        if self.started_at is None or self.completed_at is None:
            return None
        return (self.completed_at - self.started_at).total_seconds()
