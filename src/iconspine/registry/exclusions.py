"""Icons skipped entirely during registry construction.

The exclusion check runs before any metadata lookup, so an excluded icon never
triggers ``UnresolvedName``/``UnresolvedCategory`` even when it has no
entries in the documents.
"""

from __future__ import annotations

from collections.abc import Iterable

# Deprecated icons, and icons whose friendly name collides with another icon
# in the same subcategory (they would overwrite each other's output files).
DEFAULT_EXCLUSIONS: frozenset[str] = frozenset(
    {
        "cloud-foundry--1",
        "cloud-foundry--2",
        "data--1",
        "data--2",
        "logo--vmware-alt",
        "text--link--analysis",
        "watson-health--3d-software",
    }
)


class ExclusionFilter:
    """A fixed set of identifiers to skip."""

    def __init__(self, identifiers: Iterable[str] = ()) -> None:
        self._identifiers = frozenset(identifiers)

    @classmethod
    def default(cls, extra: Iterable[str] = ()) -> ExclusionFilter:
        """Built-in exclusions plus any configured extras."""
        return cls(DEFAULT_EXCLUSIONS | frozenset(extra))

    def is_excluded(self, identifier: str) -> bool:
        return identifier in self._identifiers

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._identifiers

    def __len__(self) -> int:
        return len(self._identifiers)

    def __repr__(self) -> str:
        return f"ExclusionFilter({len(self._identifiers)} identifiers)"
