"""
Test support utilities for iconspine tests.

Sample markup, an on-disk icon set writer and a recording progress observer;
helpers that are not fixtures but are shared across test modules.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Any

import yaml

from iconspine.core.models import ProgressEvent

SVG_NS = "http://www.w3.org/2000/svg"

# =============================================================================
# Sample markup
# =============================================================================

CHAT_BUBBLE_SVG = """<?xml version="1.0" encoding="utf-8"?>
<svg id="icon" xmlns="http://www.w3.org/2000/svg" width="32" height="32" viewBox="0 0 32 32">
  <defs>
    <style>.cls-1 { fill: none; }</style>
  </defs>
  <title>chat--bubble</title>
  <path d="M17.74,30,16,29l4-7h6a2,2,0,0,0,2-2V8a2,2,0,0,0-2-2H6A2,2,0,0,0,4,8V20a2,2,0,0,0,2,2h9v2H6a4,4,0,0,1-4-4V8A4,4,0,0,1,6,4H26a4,4,0,0,1,4,4V20a4,4,0,0,1-4,4H21.16Z"/>
  <rect id="_Transparent_Rectangle_" data-name="&lt;Transparent Rectangle&gt;" class="cls-1" width="32" height="32"/>
</svg>
"""

SINGLE_PATH_SVG = (
    '<svg xmlns="http://www.w3.org/2000/svg" width="32" height="32" viewBox="0 0 32 32">'
    '<path d="M4 4h24v24H4z"/>'
    "</svg>"
)

WIDE_SVG = (
    '<svg xmlns="http://www.w3.org/2000/svg" width="32" height="16" viewBox="0 0 32 16">'
    '<rect x="2" y="2" width="28" height="12"/>'
    "</svg>"
)

MALFORMED_SVG = '<svg xmlns="http://www.w3.org/2000/svg"><path d="M0 0h1"</svg>'


# =============================================================================
# On-disk icon set
# =============================================================================

CATEGORIES_DOC: dict[str, Any] = {
    "categories": [
        {
            "name": "Communication",
            "subcategories": [{"name": "Chat", "members": ["chat--bubble"]}],
        }
    ]
}

ICONS_DOC: list[dict[str, Any]] = [
    {"name": "chat--bubble", "friendly_name": "Chat Bubble", "aliases": ["bubble"], "sizes": [16, 20, 24, 32]},
]


def write_icon_set(
    root: Path,
    categories: dict[str, Any] | None = None,
    icons: list[dict[str, Any]] | None = None,
    svgs: dict[str, str] | None = None,
    tier: int = 32,
) -> Path:
    """Write categories.yml, icons.yml and ``{tier}/<relative>.svg`` under ``root``."""
    root.mkdir(parents=True, exist_ok=True)
    with open(root / "categories.yml", "w", encoding="utf-8") as f:
        yaml.dump(CATEGORIES_DOC if categories is None else categories, f, default_flow_style=False)
    with open(root / "icons.yml", "w", encoding="utf-8") as f:
        yaml.dump(ICONS_DOC if icons is None else icons, f, default_flow_style=False)

    svg_dir = root / str(tier)
    svg_dir.mkdir(exist_ok=True)
    for relative, markup in (svgs or {"chat--bubble.svg": CHAT_BUBBLE_SVG}).items():
        target = svg_dir / relative
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(markup, encoding="utf-8")
    return root


def list_files(root: Path) -> list[str]:
    """All files under ``root`` as sorted posix paths relative to it."""
    return sorted(p.relative_to(root).as_posix() for p in root.rglob("*") if p.is_file())


# =============================================================================
# SVG inspection
# =============================================================================


def effective_fills(markup: str) -> dict[str, str | None]:
    """Map each element carrying a ``data-label`` label to its effective fill.

    The effective fill is the element's own fill (style beats attribute) or
    the nearest ancestor's, following SVG inheritance.
    """
    result: dict[str, str | None] = {}

    def own(el: ET.Element) -> str | None:
        for item in el.get("style", "").split(";"):
            key, _, value = item.partition(":")
            if key.strip() == "fill":
                return value.strip()
        return el.get("fill")

    def walk(el: ET.Element, inherited: str | None) -> None:
        fill = own(el) or inherited
        if "data-label" in el.attrib:
            result[el.attrib["data-label"]] = fill
        for child in el:
            walk(child, fill)

    walk(ET.fromstring(markup), None)
    return result


# =============================================================================
# Observers
# =============================================================================


class RecordingObserver:
    """Progress observer that keeps every call."""

    def __init__(self) -> None:
        self.total: int | None = None
        self.events: list[ProgressEvent] = []
        self.finished = False

    def start(self, total: int) -> None:
        self.total = total

    def advance(self, event: ProgressEvent) -> None:
        self.events.append(event)

    def finish(self) -> None:
        self.finished = True
