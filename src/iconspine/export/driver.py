"""Export driver: four artifacts per icon record.

For each record, in registry order:

1. recolor the raw markup once per variant (Signature, White);
2. rasterize each *recolored* document, so PNG and SVG always match;
3. write the two SVGs, then the two PNGs, through the sink;
4. report one progress event.

With ``workers > 1`` the recolor/rasterize work for different icons runs on a
thread pool; results are still consumed, written and reported in registry
order from the calling thread, so the sink and the observer never see
concurrent calls. At most ``IN_FLIGHT_PER_WORKER * workers`` icons are
submitted ahead of the writes, and each result is released once written.
Writes are not transactional: a fatal error leaves the files of earlier icons
in place.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Mapping, Sequence
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import PurePosixPath

from iconspine.core.errors import AssetError, is_fatal
from iconspine.core.models import (
    DEFAULT_VARIANTS,
    ExportFailure,
    ExportSummary,
    IconRecord,
    ProgressEvent,
    Variant,
)
from iconspine.export.paths import OutputLayout
from iconspine.export.sink import NullObserver, ProgressObserver, Sink
from iconspine.framework.logging import get_logger, log_step, push_context
from iconspine.transform import rasterize, recolor

logger = get_logger(__name__)

# Rendered-but-unwritten icons allowed per worker thread.
IN_FLIGHT_PER_WORKER = 2


@dataclass(frozen=True)
class IconArtifacts:
    """Rendered output of one record, in write order."""

    record: IconRecord
    files: tuple[tuple[PurePosixPath, bytes | str], ...]


def render_icon(
    record: IconRecord,
    variants: Sequence[Variant] = DEFAULT_VARIANTS,
    layout: OutputLayout | None = None,
) -> IconArtifacts:
    """Recolor and rasterize one record. Pure: no writes, no shared state."""
    layout = layout or OutputLayout()
    vectors: list[tuple[Variant, str]] = []
    for variant in variants:
        token = push_context(identifier=record.identifier, variant=variant.name)
        try:
            vectors.append((variant, recolor(record.markup, variant.color)))
        except AssetError as e:
            raise e.with_context(identifier=record.identifier, variant=variant.name, step="recolor")
        finally:
            token.restore()

    rasters: list[tuple[Variant, bytes]] = []
    for variant, svg in vectors:
        token = push_context(identifier=record.identifier, variant=variant.name)
        try:
            rasters.append((variant, rasterize(svg, layout.raster_width)))
        except AssetError as e:
            raise e.with_context(identifier=record.identifier, variant=variant.name, step="rasterize")
        finally:
            token.restore()

    files: list[tuple[PurePosixPath, bytes | str]] = [
        (layout.vector_path(record, variant), svg) for variant, svg in vectors
    ]
    files.extend((layout.raster_path(record, variant), png) for variant, png in rasters)
    return IconArtifacts(record=record, files=tuple(files))


def export_registry(
    registry: Mapping[str, IconRecord],
    sink: Sink,
    *,
    variants: Sequence[Variant] = DEFAULT_VARIANTS,
    layout: OutputLayout | None = None,
    observer: ProgressObserver | None = None,
    workers: int = 1,
    skip_failures: bool = False,
) -> ExportSummary:
    """Export every record of ``registry`` through ``sink``.

    Asset errors (``MalformedAsset``, ``RenderFailure``) abort the run unless
    ``skip_failures`` is set, in which case the icon is skipped and listed in
    ``ExportSummary.failures``. Write errors always abort.
    """
    if workers < 1:
        raise ValueError(f"workers must be >= 1, got {workers}")

    layout = layout or OutputLayout()
    observer = observer or NullObserver()
    records = list(registry.values())
    summary = ExportSummary(total=len(records), started_at=datetime.now(UTC))
    failures: list[ExportFailure] = []

    def consume(position: int, record: IconRecord, outcome: Future[IconArtifacts] | None) -> None:
        try:
            artifacts = outcome.result() if outcome is not None else render_icon(record, variants, layout)
        except AssetError as e:
            if is_fatal(e, skip_asset_errors=skip_failures):
                raise
            logger.warning("export.icon_skipped", identifier=record.identifier, **e.to_dict())
            failures.append(
                ExportFailure(identifier=record.identifier, error_type=type(e).__name__, message=e.message)
            )
        else:
            for path, data in artifacts.files:
                sink.write(path, data)
            summary.exported += 1
            summary.artifacts += len(artifacts.files)

        observer.advance(
            ProgressEvent(
                current=position,
                total=summary.total,
                category=record.category,
                friendly_name=record.friendly_name,
            )
        )

    observer.start(summary.total)
    with log_step("export.run", total=summary.total, workers=workers) as timer:
        try:
            if workers == 1:
                for position, record in enumerate(records, start=1):
                    consume(position, record, None)
            else:
                window = IN_FLIGHT_PER_WORKER * workers
                pending: deque[tuple[int, IconRecord, Future[IconArtifacts]]] = deque()
                with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="iconspine-export") as pool:
                    try:
                        for position, record in enumerate(records, start=1):
                            pending.append((position, record, pool.submit(render_icon, record, variants, layout)))
                            if len(pending) >= window:
                                consume(*pending.popleft())
                        while pending:
                            consume(*pending.popleft())
                    except BaseException:
                        for _, _, future in pending:
                            future.cancel()
                        raise
        finally:
            observer.finish()
            summary.failures = tuple(failures)
            summary.completed_at = datetime.now(UTC)

        timer.add_metric("exported", summary.exported)
        timer.add_metric("artifacts", summary.artifacts)
        timer.add_metric("failures", len(summary.failures))

    return summary
