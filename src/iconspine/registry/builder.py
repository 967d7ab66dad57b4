"""Asset registry construction.

Joins the discovered SVG files with the taxonomy and naming indexes into one
:class:`IconRecord` per non-excluded icon. Any gap in the metadata aborts the
whole build: an inconsistent source set must never produce partial output.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from pathlib import PurePosixPath
from types import MappingProxyType

from iconspine.core.errors import DuplicateOutputPath
from iconspine.core.models import DiscoveredAsset, IconRecord
from iconspine.framework.logging import get_logger, log_step
from iconspine.registry.exclusions import ExclusionFilter
from iconspine.registry.naming import NamingIndex
from iconspine.registry.taxonomy import TaxonomyIndex

logger = get_logger(__name__)

Registry = Mapping[str, IconRecord]


def build_registry(
    assets: Iterable[DiscoveredAsset],
    taxonomy: TaxonomyIndex,
    naming: NamingIndex,
    exclusions: ExclusionFilter,
) -> Registry:
    """Build the immutable identifier → IconRecord mapping.

    Assets are processed in discovery order. Excluded identifiers are skipped
    before any lookup. A missing naming or taxonomy entry raises
    ``UnresolvedName`` / ``UnresolvedCategory``; two records sharing a
    category and friendly name raise ``DuplicateOutputPath``. A later asset
    with an already-seen identifier replaces the earlier one.
    """
    records: dict[str, IconRecord] = {}
    discovered = 0
    excluded = 0

    with log_step("registry.build") as timer:
        for asset in assets:
            discovered += 1
            if exclusions.is_excluded(asset.identifier):
                excluded += 1
                logger.debug("registry.asset_excluded", identifier=asset.identifier)
                continue

            name = naming.lookup(asset.identifier)
            place = taxonomy.lookup(asset.identifier)

            if asset.identifier in records:
                logger.warning(
                    "registry.identifier_replaced",
                    identifier=asset.identifier,
                    path=str(asset.path) if asset.path else None,
                )

            records[asset.identifier] = IconRecord(
                identifier=asset.identifier,
                friendly_name=name.friendly_name,
                aliases=name.aliases,
                category=place.subcategory,
                top_category=place.top_category,
                markup=asset.markup,
            )

        _check_output_paths(records.values())

        timer.add_metric("discovered", discovered)
        timer.add_metric("excluded", excluded)
        timer.add_metric("records", len(records))

    return MappingProxyType(records)


def _check_output_paths(records: Iterable[IconRecord]) -> None:
    seen: dict[tuple[str, str], str] = {}
    for record in records:
        key = (record.category, record.friendly_name)
        if key in seen:
            raise DuplicateOutputPath(
                str(PurePosixPath(*key)),
                (seen[key], record.identifier),
            )
        seen[key] = record.identifier
