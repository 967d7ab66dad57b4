"""The icon library pipeline: load → index → discover → build registry → export.

Registry construction completes (or fails) before the first artifact is
written, so a metadata gap never produces a partial library.

Usage:
    from iconspine.core.settings import ExportSettings
    from iconspine.pipeline import IconLibraryPipeline

    result = IconLibraryPipeline(ExportSettings(source_dir="carbon-assets")).run()
    print(result.metrics["artifacts"])
"""

from __future__ import annotations

import uuid
from datetime import UTC, datetime

from iconspine.core.errors import IconSpineError
from iconspine.core.models import ExportSummary
from iconspine.core.settings import ExportSettings
from iconspine.export import FileSink, OutputLayout, ProgressObserver, Sink, export_registry
from iconspine.framework.logging import bind_context, get_logger, log_step
from iconspine.framework.pipelines import Pipeline, PipelineResult, PipelineStatus
from iconspine.registry import (
    ExclusionFilter,
    Registry,
    build_naming_index,
    build_registry,
    build_taxonomy_index,
    discover_assets,
    load_categories,
    load_icons,
)

logger = get_logger(__name__)


class IconLibraryPipeline(Pipeline):
    """Builds the full Signature/White SVG+PNG library from one icon set."""

    name = "icon_library"
    description = "Recolor and rasterize every known icon into the library layout"

    def __init__(
        self,
        settings: ExportSettings,
        *,
        sink: Sink | None = None,
        observer: ProgressObserver | None = None,
    ) -> None:
        self.settings = settings
        self.sink = sink if sink is not None else FileSink(settings.output_dir)
        self.observer = observer
        self.summary: ExportSummary | None = None
        self.error: IconSpineError | None = None

    @property
    def layout(self) -> OutputLayout:
        return OutputLayout(vector_tier=self.settings.vector_tier, raster_width=self.settings.raster_width)

    def build(self) -> Registry:
        """Load the documents and assets and join them into the registry."""
        settings = self.settings
        with log_step("pipeline.load", source=str(settings.source_dir)) as timer:
            taxonomy = build_taxonomy_index(load_categories(settings.categories_path))
            naming = build_naming_index(load_icons(settings.icons_path))
            assets = discover_assets(settings.vectors_dir)
            timer.add_metric("categorized", len(taxonomy))
            timer.add_metric("named", len(naming))
            timer.add_metric("assets", len(assets))

        exclusions = ExclusionFilter.default(settings.extra_exclusions)
        return build_registry(assets, taxonomy, naming, exclusions)

    def run(self) -> PipelineResult:
        """Build the registry, then export it.

        An ``IconSpineError`` ends the run with a FAILED result (the error is
        kept on ``self.error``); files written before the failure stay on
        disk. Any other exception propagates.
        """
        started_at = datetime.now(UTC)
        bind_context(run_id=uuid.uuid4().hex[:12])
        self.error = None

        try:
            registry = self.build()
            self.summary = export_registry(
                registry,
                self.sink,
                variants=self.settings.variants,
                layout=self.layout,
                observer=self.observer,
                workers=self.settings.workers,
                skip_failures=self.settings.skip_failures,
            )
        except IconSpineError as e:
            self.error = e
            logger.error("pipeline.failed", **e.to_dict())
            return PipelineResult(
                status=PipelineStatus.FAILED,
                started_at=started_at,
                completed_at=datetime.now(UTC),
                error=e.message,
                metrics={"error_type": type(e).__name__, "category": e.category.value},
            )

        result = PipelineResult(
            status=PipelineStatus.COMPLETED,
            started_at=started_at,
            completed_at=datetime.now(UTC),
            metrics={
                "records": len(registry),
                "exported": self.summary.exported,
                "artifacts": self.summary.artifacts,
                "failures": len(self.summary.failures),
            },
        )
        logger.info("pipeline.completed", **result.metrics)
        return result
