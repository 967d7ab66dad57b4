"""Taxonomy index: icon identifier → (subcategory, top category)."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any

from pydantic import ValidationError

from iconspine.core.errors import DocumentError, UnresolvedCategory
from iconspine.core.models import CategoriesDocument, TaxonomyEntry
from iconspine.framework.logging import get_logger

logger = get_logger(__name__)


class TaxonomyIndex(Mapping[str, TaxonomyEntry]):
    """Read-only lookup built by :func:`build_taxonomy_index`."""

    def __init__(self, entries: dict[str, TaxonomyEntry]) -> None:
        self._entries = dict(entries)

    def lookup(self, identifier: str) -> TaxonomyEntry:
        """Return the entry for ``identifier`` or raise ``UnresolvedCategory``."""
        try:
            return self._entries[identifier]
        except KeyError:
            raise UnresolvedCategory(identifier) from None

    def __getitem__(self, identifier: str) -> TaxonomyEntry:
        return self._entries[identifier]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)


def build_taxonomy_index(document: CategoriesDocument | Mapping[str, Any]) -> TaxonomyIndex:
    """Flatten the two-level category document.

    Every member of every subcategory maps to that subcategory and its
    enclosing top category. If a member is listed twice the last listing wins.
    """
    if not isinstance(document, CategoriesDocument):
        try:
            document = CategoriesDocument.model_validate(document or {})
        except ValidationError as e:
            raise DocumentError("Invalid categories document", cause=e).with_context(step="taxonomy") from e

    entries: dict[str, TaxonomyEntry] = {}
    for category in document.categories:
        for subcategory in category.subcategories:
            for member in subcategory.members:
                entry = TaxonomyEntry(subcategory=subcategory.name, top_category=category.name)
                previous = entries.get(member)
                if previous is not None and previous != entry:
                    logger.debug(
                        "taxonomy.member_relisted",
                        identifier=member,
                        previous=previous.subcategory,
                        current=entry.subcategory,
                    )
                entries[member] = entry

    return TaxonomyIndex(entries)
