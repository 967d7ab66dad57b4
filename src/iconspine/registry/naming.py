"""Naming index: icon identifier → (friendly name, aliases)."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from typing import Any

from pydantic import TypeAdapter, ValidationError

from iconspine.core.errors import DocumentError, UnresolvedName
from iconspine.core.models import IconDescriptor, NamingEntry

_DESCRIPTORS = TypeAdapter(list[IconDescriptor])


class NamingIndex(Mapping[str, NamingEntry]):
    """Read-only lookup built by :func:`build_naming_index`."""

    def __init__(self, entries: dict[str, NamingEntry]) -> None:
        self._entries = dict(entries)

    def lookup(self, identifier: str) -> NamingEntry:
        """Return the entry for ``identifier`` or raise ``UnresolvedName``."""
        try:
            return self._entries[identifier]
        except KeyError:
            raise UnresolvedName(identifier) from None

    def __getitem__(self, identifier: str) -> NamingEntry:
        return self._entries[identifier]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)


def build_naming_index(document: Iterable[IconDescriptor | Mapping[str, Any]] | None) -> NamingIndex:
    """One entry per icon descriptor.

    Identifiers missing from the document are simply absent; the error
    surfaces when the registry builder looks them up.
    """
    items = list(document or [])
    if not all(isinstance(item, IconDescriptor) for item in items):
        try:
            items = _DESCRIPTORS.validate_python(
                [item.model_dump() if isinstance(item, IconDescriptor) else item for item in items]
            )
        except ValidationError as e:
            raise DocumentError("Invalid icons document", cause=e).with_context(step="naming") from e

    return NamingIndex(
        {
            icon.name: NamingEntry(friendly_name=icon.friendly_name, aliases=tuple(icon.aliases))
            for icon in items
        }
    )
