from collections.abc import Callable
from datetime import datetime
from functools import partial
from pathlib import Path

import httpx

from app.canvas.factory import CanvasClientFactory
from app.config.settings import Settings
from app.logging.logger import Log
from app.processor.aggregator import OutcomeAggregator
from app.processor.mapping_loader import MappingLoader
from app.processor.models import OutcomeSnapshot, RunResult
from app.processor.report import ReportBuilder
from app.worker.partitioner import partition
from app.worker.pool import WorkerPool


class BulkDeleteProcessor:
    """Orchestrates one bulk delete run.

    Pipeline: load mapping -> partition -> delete in parallel -> aggregate -> report.
    """

    def __init__(
        self,
        *,
        mapping_loader: MappingLoader,
        worker_pool: WorkerPool,
        report_builder: ReportBuilder,
        target_workers: int,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._mapping_loader = mapping_loader
        self._worker_pool = worker_pool
        self._report_builder = report_builder
        self._target_workers = target_workers
        self._clock = clock

    def process(self, map_path: Path) -> RunResult:
        """Run every task in the mapping file and persist the run report.

        Raises:
            InputFormatError: before any task runs, if the mapping is malformed.
            ReportWriteError: after all tasks ran, if the report can't be written.
        """
        started_at = self._clock()
        Log.info(f"Sourcing map from {map_path}")

        records = self._mapping_loader.load(map_path)
        chunks = partition(records, self._target_workers)
        Log.info(f"Loaded {len(records)} task(s) into {len(chunks)} chunk(s)")

        aggregator = OutcomeAggregator()
        self._worker_pool.run(chunks, aggregator)
        snapshot = aggregator.snapshot()
        self._log_summary(snapshot, len(records))

        report = self._report_builder.build(started_at, self._clock(), snapshot)
        report_path = self._report_builder.write(report)
        Log.info(f"Wrote log to {report_path}")

        return RunResult(
            total_records=len(records),
            snapshot=snapshot,
            report=report,
            report_path=report_path,
        )

    @staticmethod
    def _log_summary(snapshot: OutcomeSnapshot, total_records: int) -> None:
        Log.info(
            f"{snapshot.completed_count} out of {total_records} operations were completed"
        )
        if snapshot.error:
            Log.warning(
                f"Operation failed for the following userkeys: {', '.join(snapshot.error)}"
            )
        if snapshot.user_not_found:
            Log.warning(
                "The following userkeys could not be resolved: "
                f"{', '.join(snapshot.user_not_found)}"
            )
        if snapshot.no_matching_file:
            Log.info(
                "The following userkeys were missing at least one file "
                f"(usually not an error): {', '.join(snapshot.no_matching_file)}"
            )


def build_processor(
    settings: Settings,
    transport: httpx.BaseTransport | None = None,
) -> BulkDeleteProcessor:
    """Build a BulkDeleteProcessor with all required collaborators."""
    session_factory = partial(CanvasClientFactory.create, settings, transport)
    return BulkDeleteProcessor(
        mapping_loader=MappingLoader(),
        worker_pool=WorkerPool(session_factory, id_is_sis=settings.id_is_sis),
        report_builder=ReportBuilder(Path(settings.report_dir)),
        target_workers=settings.target_workers,
    )
