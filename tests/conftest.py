"""
Shared pytest fixtures for iconspine tests.

This module provides:
- Record/asset builders for registry and export tests
- A complete on-disk icon set (categories.yml, icons.yml, 32/*.svg)
- A recording progress observer
- Logging context cleanup for test isolation
"""

import sys
from collections.abc import Callable, Generator
from pathlib import Path

import pytest

# Ensure iconspine package is importable
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from iconspine.core.models import DiscoveredAsset, IconRecord
from iconspine.framework.logging import clear_context
from tests._support import SINGLE_PATH_SVG, RecordingObserver, write_icon_set

# =============================================================================
# Isolation
# =============================================================================


@pytest.fixture(autouse=True)
def clean_log_context() -> Generator[None, None, None]:
    """Reset the logging contextvar before and after each test."""
    clear_context()
    yield
    clear_context()


# =============================================================================
# Builders
# =============================================================================


@pytest.fixture
def make_record() -> Callable[..., IconRecord]:
    """Factory for IconRecord with sensible defaults."""

    def _make(
        identifier: str = "chat--bubble",
        friendly_name: str = "Chat Bubble",
        category: str = "Chat",
        top_category: str = "Communication",
        aliases: tuple[str, ...] = ("bubble",),
        markup: str = SINGLE_PATH_SVG,
    ) -> IconRecord:
        return IconRecord(
            identifier=identifier,
            friendly_name=friendly_name,
            aliases=aliases,
            category=category,
            top_category=top_category,
            markup=markup,
        )

    return _make


@pytest.fixture
def make_asset() -> Callable[..., DiscoveredAsset]:
    def _make(identifier: str, markup: str = SINGLE_PATH_SVG) -> DiscoveredAsset:
        return DiscoveredAsset(identifier=identifier, markup=markup)

    return _make


@pytest.fixture
def observer() -> RecordingObserver:
    return RecordingObserver()


# =============================================================================
# On-disk icon set
# =============================================================================


@pytest.fixture
def icon_set(tmp_path: Path) -> Path:
    """The single-icon set: Communication > Chat > chat--bubble."""
    return write_icon_set(tmp_path / "carbon-assets")
