"""iconspine.core -- errors, domain models and settings.

Architecture::

    errors.py      Structured error hierarchy (IconSpineError, RegistryError, AssetError)
    models.py      Document schemas (pydantic) and pipeline values (dataclasses)
    settings.py    ExportSettings (pydantic-settings, ICONSPINE_* env vars)
"""

from iconspine.core.errors import (
    AssetError,
    DocumentError,
    DuplicateOutputPath,
    ErrorCategory,
    ErrorContext,
    ExportWriteError,
    IconSpineError,
    MalformedAsset,
    RegistryError,
    RenderFailure,
    SourceNotFoundError,
    UnresolvedCategory,
    UnresolvedName,
)
from iconspine.core.models import (
    DEFAULT_VARIANTS,
    DiscoveredAsset,
    ExportSummary,
    IconRecord,
    NamingEntry,
    ProgressEvent,
    TaxonomyEntry,
    Variant,
)

__all__ = [
    # Errors
    "IconSpineError",
    "ErrorCategory",
    "ErrorContext",
    "RegistryError",
    "UnresolvedCategory",
    "UnresolvedName",
    "DuplicateOutputPath",
    "DocumentError",
    "SourceNotFoundError",
    "AssetError",
    "MalformedAsset",
    "RenderFailure",
    "ExportWriteError",
    # Models
    "DEFAULT_VARIANTS",
    "DiscoveredAsset",
    "ExportSummary",
    "IconRecord",
    "NamingEntry",
    "ProgressEvent",
    "TaxonomyEntry",
    "Variant",
]
