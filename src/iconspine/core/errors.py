"""
Structured error types for iconspine.

Every failure the export pipeline can raise carries a category, a structured
context and an optional chained cause, so the CLI and the logs can report
*what* broke (an icon, a document, a path) without parsing messages.

Hierarchy::

        ┌───────────────────────────────────────────────────────────┐
        │                     IconSpineError                         │
        │            (category, context, cause)                      │
        ├───────────────────────────────────────────────────────────┤
        │  RegistryError          AssetError        ExportWriteError │
        │  (REGISTRY, fatal)      (ASSET)           (STORAGE)        │
        │       │                     │                              │
        │  UnresolvedCategory     MalformedAsset    SourceNotFound   │
        │  UnresolvedName         RenderFailure     (SOURCE)         │
        │  DuplicateOutputPath                                       │
        │  DocumentError                                             │
        └───────────────────────────────────────────────────────────┘

Policy:
    - RegistryError: always fatal, raised before any export work starts.
    - AssetError: fatal by default; the export driver may skip-and-report.
    - ExportWriteError: always fatal, no retry.

Example:
    >>> err = UnresolvedName("chat--bubble")
    >>> err.identifier
    'chat--bubble'
    >>> err.category.value
    'REGISTRY'

    >>> MalformedAsset("bad markup").with_context(identifier="x").context.identifier
    'x'
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Where a failure originated; shown in logs and in the CLI error line."""

    REGISTRY = "REGISTRY"  # metadata join and document problems
    SOURCE = "SOURCE"  # input files missing
    ASSET = "ASSET"  # a single icon cannot be recolored or rendered
    STORAGE = "STORAGE"  # output writes
    CONFIG = "CONFIG"
    INTERNAL = "INTERNAL"


@dataclass
class ErrorContext:
    """Which icon, variant, path or step an error concerns."""

    identifier: str | None = None
    step: str | None = None
    path: str | None = None
    variant: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        known = {f.name: getattr(self, f.name) for f in fields(self) if f.name != "metadata"}
        return {**{k: v for k, v in known.items() if v is not None}, **self.metadata}


class IconSpineError(Exception):
    """
    Root of every error iconspine raises on purpose.

    Subclasses pick a ``default_category``. Raise sites attach the icon,
    variant or path through :meth:`with_context`, and pass the library
    exception they are wrapping as ``cause``.
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category if category is not None else self.default_category
        self.context = context if context is not None else ErrorContext()
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **values: Any) -> IconSpineError:
        """
        Record where the error happened and return the same error, so a
        raise site can chain it::

            raise MalformedAsset("unparseable").with_context(identifier="chat--bubble", step="recolor")

        Names that are not :class:`ErrorContext` fields land in ``metadata``.
        """
        known = {f.name for f in fields(self.context)} - {"metadata"}
        for name, value in values.items():
            if name in known:
                setattr(self.context, name, value)
            else:
                self.context.metadata[name] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Flatten into log fields: type, message, category, then context and cause when present."""
        data: dict[str, Any] = {
            "error_type": type(self).__name__,
            "message": self.message,
            "category": self.category.value,
        }
        if context := self.context.to_dict():
            data["context"] = context
        if self.cause is not None:
            data["cause"] = str(self.cause)
        return data

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, category={self.category.value})"


# -- registry: fatal, raised before any export work -------------------------


class RegistryError(IconSpineError):
    """The source set is inconsistent; no output may be produced from it."""

    default_category = ErrorCategory.REGISTRY


class UnresolvedCategory(RegistryError):
    """A discovered, non-excluded icon is missing from the taxonomy document."""

    def __init__(self, identifier: str, message: str | None = None):
        super().__init__(
            message or f"No category found for icon '{identifier}'",
            context=ErrorContext(identifier=identifier, step="taxonomy"),
        )
        self.identifier = identifier


class UnresolvedName(RegistryError):
    """A discovered, non-excluded icon is missing from the naming document."""

    def __init__(self, identifier: str, message: str | None = None):
        super().__init__(
            message or f"No friendly name found for icon '{identifier}'",
            context=ErrorContext(identifier=identifier, step="naming"),
        )
        self.identifier = identifier


class DuplicateOutputPath(RegistryError):
    """Two icons resolve to the same category and friendly name."""

    def __init__(self, path: str, identifiers: tuple[str, ...]):
        super().__init__(
            f"Icons {', '.join(repr(i) for i in identifiers)} would both be written to '{path}'",
            context=ErrorContext(path=path, metadata={"identifiers": list(identifiers)}),
        )
        self.path = path
        self.identifiers = identifiers


class DocumentError(RegistryError):
    """A metadata document could not be parsed or does not match its schema."""


# -- source: missing inputs ------------------------------------------------


class SourceNotFoundError(IconSpineError):
    """An input document or directory does not exist."""

    default_category = ErrorCategory.SOURCE


# -- asset: one icon at a time ---------------------------------------------


class AssetError(IconSpineError):
    """A single icon could not be transformed."""

    default_category = ErrorCategory.ASSET


class MalformedAsset(AssetError):
    """Vector markup cannot be parsed."""


class RenderFailure(AssetError):
    """The rasterization backend failed on otherwise well-formed markup."""


# -- storage and config ----------------------------------------------------


class ExportWriteError(IconSpineError):
    """Writing an artifact to the output tree failed."""

    default_category = ErrorCategory.STORAGE


class ConfigError(IconSpineError):
    """Invalid settings."""

    default_category = ErrorCategory.CONFIG


def is_fatal(error: Exception, *, skip_asset_errors: bool = False) -> bool:
    """Decide whether an error must abort the run.

    Asset errors are fatal unless the caller opted into skip-and-report;
    everything else is always fatal.
    """
    if isinstance(error, AssetError):
        return not skip_asset_errors
    return True

