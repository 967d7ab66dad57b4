"""Registry construction: metadata indexes, exclusions and the asset join."""

from iconspine.registry.builder import Registry, build_registry
from iconspine.registry.exclusions import DEFAULT_EXCLUSIONS, ExclusionFilter
from iconspine.registry.naming import NamingIndex, build_naming_index
from iconspine.registry.sources import discover_assets, load_categories, load_icons
from iconspine.registry.taxonomy import TaxonomyIndex, build_taxonomy_index

__all__ = [
    "DEFAULT_EXCLUSIONS",
    "ExclusionFilter",
    "NamingIndex",
    "Registry",
    "TaxonomyIndex",
    "build_naming_index",
    "build_registry",
    "build_taxonomy_index",
    "discover_assets",
    "load_categories",
    "load_icons",
]
