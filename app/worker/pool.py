from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor, wait

from app.canvas.client_base import BaseCanvasClient
from app.logging.logger import Log
from app.processor.aggregator import OutcomeAggregator
from app.processor.models import OutcomeCategory, TaskOutcome, TaskRecord
from app.worker.task_runner import TaskRunner


class WorkerPool:
    """One thread and one Canvas session per chunk; blocks until all finish."""

    def __init__(
        self,
        session_factory: Callable[[], BaseCanvasClient],
        *,
        id_is_sis: bool,
    ) -> None:
        self._session_factory = session_factory
        self._id_is_sis = id_is_sis

    def run(
        self,
        chunks: Sequence[Sequence[TaskRecord]],
        aggregator: OutcomeAggregator,
    ) -> None:
        """Process every chunk in parallel and record one outcome per record."""
        if not chunks:
            Log.info("No tasks to run")
            return
        Log.info(f"Using {len(chunks)} threads")
        with ThreadPoolExecutor(
            max_workers=len(chunks),
            thread_name_prefix="worker",
        ) as executor:
            futures = [
                executor.submit(self._run_chunk, index, chunk, aggregator)
                for index, chunk in enumerate(chunks)
            ]
            wait(futures)

    def _run_chunk(
        self,
        index: int,
        chunk: Sequence[TaskRecord],
        aggregator: OutcomeAggregator,
    ) -> None:
        processed = 0
        session: BaseCanvasClient | None = None
        try:
            session = self._session_factory()
            runner = TaskRunner(session, id_is_sis=self._id_is_sis)
            for record in chunk:
                aggregator.record(runner.run(record))
                processed += 1
        except Exception as exc:
            # Only reachable when the session itself fails; the rest of the
            # chunk is marked as errored so every record still has an outcome.
            Log.exception(
                f"Worker {index} aborted after {processed} of {len(chunk)} task(s): {exc}"
            )
            for record in chunk[processed:]:
                aggregator.record(
                    TaskOutcome(
                        record=record,
                        category=OutcomeCategory.ERROR,
                        error_message=str(exc),
                    )
                )
        finally:
            if session is not None:
                self._close_session(index, session)
        Log.debug(f"Worker {index} finished {processed} of {len(chunk)} task(s)")

    @staticmethod
    def _close_session(index: int, session: BaseCanvasClient) -> None:
        try:
            session.close()
        except Exception as exc:
            Log.warning(f"Worker {index} failed to close its Canvas session: {exc}")
