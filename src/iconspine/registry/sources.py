"""
Source adapters for the icon set on disk.

Reads the two YAML metadata documents and enumerates the SVG assets of one
size tier. These are thin I/O wrappers: documents are validated into typed
models here, so the index builders never see raw dictionaries.

Usage:
    from iconspine.registry.sources import discover_assets, load_categories, load_icons

    categories = load_categories(Path("carbon-assets/categories.yml"))
    icons = load_icons(Path("carbon-assets/icons.yml"))
    assets = discover_assets(Path("carbon-assets/32"))
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import TypeAdapter, ValidationError

from iconspine.core.errors import DocumentError, SourceNotFoundError
from iconspine.core.models import CategoriesDocument, DiscoveredAsset, IconDescriptor
from iconspine.framework.logging import get_logger, log_timing

logger = get_logger(__name__)

SVG_SUFFIX = ".svg"

_ICONS = TypeAdapter(list[IconDescriptor])


def load_yaml(path: Path) -> Any:
    """Parse a YAML file with ``safe_load``."""
    if not path.is_file():
        raise SourceNotFoundError(f"Document not found: {path}").with_context(path=str(path))
    try:
        with open(path, encoding="utf-8") as f:
            return yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise DocumentError(f"Invalid YAML in {path.name}: {e}", cause=e).with_context(path=str(path)) from e


def load_categories(path: Path) -> CategoriesDocument:
    """Load and validate ``categories.yml``."""
    data = load_yaml(path)
    try:
        return CategoriesDocument.model_validate(data or {})
    except ValidationError as e:
        raise DocumentError(f"{path.name} does not match the categories schema", cause=e).with_context(
            path=str(path)
        ) from e


def load_icons(path: Path) -> list[IconDescriptor]:
    """Load and validate ``icons.yml`` (a flat list of icon descriptors)."""
    data = load_yaml(path)
    try:
        return _ICONS.validate_python(data or [])
    except ValidationError as e:
        raise DocumentError(f"{path.name} does not match the icons schema", cause=e).with_context(
            path=str(path)
        ) from e


@log_timing("sources.discover", level="debug")
def discover_assets(root: Path) -> list[DiscoveredAsset]:
    """Enumerate ``root/**/*.svg``.

    Files are returned sorted by their path relative to ``root`` so the
    registry order is stable across platforms. The identifier is the file
    name without its extension.
    """
    if not root.is_dir():
        raise SourceNotFoundError(f"Asset directory not found: {root}").with_context(path=str(root))

    paths = sorted(
        (p for p in root.rglob(f"*{SVG_SUFFIX}") if p.is_file()),
        key=lambda p: p.relative_to(root).as_posix(),
    )
    assets = [
        DiscoveredAsset(identifier=p.stem, markup=p.read_text(encoding="utf-8"), path=p)
        for p in paths
    ]
    logger.debug("sources.assets_found", root=str(root), count=len(assets))
    return assets
