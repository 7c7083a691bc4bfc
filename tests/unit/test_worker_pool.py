import threading
from collections.abc import Callable

from app.canvas.models import CanvasFile, CanvasUser
from app.processor.aggregator import OutcomeAggregator
from app.processor.models import OutcomeCategory, TaskRecord
from app.worker.partitioner import partition
from app.worker.pool import WorkerPool
from tests.fakes import FakeCanvasClient


def _records(count: int) -> list[TaskRecord]:
    return [TaskRecord(user_key=f"user-{i}", target_filename="a.txt") for i in range(count)]


def _session_factory(
    sessions: list[FakeCanvasClient],
    count: int,
) -> Callable[[], FakeCanvasClient]:
    lock = threading.Lock()
    users = {f"user-{i}": CanvasUser(id=i, sis_user_id=f"user-{i}") for i in range(count)}
    files = {i: [CanvasFile(id=1000 + i, filename="a.txt")] for i in range(count)}

    def factory() -> FakeCanvasClient:
        session = FakeCanvasClient(users=users, files=files)
        with lock:
            sessions.append(session)
        return session

    return factory


class TestWorkerPoolRun:
    def test_one_outcome_per_record(self) -> None:
        sessions: list[FakeCanvasClient] = []
        records = _records(30)
        chunks = partition(records)
        aggregator = OutcomeAggregator()

        WorkerPool(_session_factory(sessions, 30), id_is_sis=True).run(chunks, aggregator)

        snapshot = aggregator.snapshot()
        assert len(aggregator) == 30
        assert snapshot.deleted == tuple(sorted(r.user_key for r in records))

    def test_one_isolated_session_per_chunk(self) -> None:
        sessions: list[FakeCanvasClient] = []
        chunks = partition(_records(30))

        WorkerPool(_session_factory(sessions, 30), id_is_sis=True).run(
            chunks, OutcomeAggregator()
        )

        assert len(sessions) == len(chunks)
        assert len({id(s) for s in sessions}) == len(chunks)
        assert all(s.closed for s in sessions)
        assert all(len(s.thread_ids) == 1 for s in sessions)

    def test_tasks_in_a_chunk_run_in_order(self) -> None:
        sessions: list[FakeCanvasClient] = []
        chunks = partition(_records(20))

        WorkerPool(_session_factory(sessions, 20), id_is_sis=True).run(
            chunks, OutcomeAggregator()
        )

        seen_chunks = []
        for session in sessions:
            lookups = [call[1] for call in session.calls if call[0] == "get_user_by_sis_id"]
            seen_chunks.append([TaskRecord(user_key=k, target_filename="a.txt") for k in lookups])
        assert sorted(seen_chunks, key=lambda c: c[0].user_key) == sorted(
            chunks, key=lambda c: c[0].user_key
        )

    def test_empty_chunks_do_nothing(self) -> None:
        sessions: list[FakeCanvasClient] = []
        aggregator = OutcomeAggregator()

        WorkerPool(_session_factory(sessions, 0), id_is_sis=True).run([], aggregator)

        assert sessions == []
        assert len(aggregator) == 0


class TestWorkerPoolFailures:
    def test_session_failure_marks_chunk_as_error_without_stopping_siblings(self) -> None:
        records = _records(9)
        chunks = partition(records)
        sessions: list[FakeCanvasClient] = []
        healthy = _session_factory(sessions, 9)
        calls = {"n": 0}
        lock = threading.Lock()

        def flaky_factory() -> FakeCanvasClient:
            with lock:
                calls["n"] += 1
                first = calls["n"] == 1
            if first:
                raise RuntimeError("could not open session")
            return healthy()

        aggregator = OutcomeAggregator()
        WorkerPool(flaky_factory, id_is_sis=True).run(chunks, aggregator)

        snapshot = aggregator.snapshot()
        assert len(aggregator) == len(records)
        assert len(snapshot.error) in {len(chunk) for chunk in chunks}
        assert len(snapshot.deleted) + len(snapshot.error) == len(records)

    def test_task_errors_do_not_stop_the_chunk(self) -> None:
        records = _records(3)
        sessions: list[FakeCanvasClient] = []

        def factory() -> FakeCanvasClient:
            session = FakeCanvasClient(errors={"get_user_by_sis_id": RuntimeError("503")})
            sessions.append(session)
            return session

        aggregator = OutcomeAggregator()
        WorkerPool(factory, id_is_sis=True).run([records], aggregator)

        assert aggregator.snapshot().error == ("user-0", "user-1", "user-2")
        assert sessions[0].count("get_user_by_sis_id") == 3

    def test_close_failure_is_swallowed(self) -> None:
        class BrokenClose(FakeCanvasClient):
            def close(self) -> None:
                raise RuntimeError("already closed")

        aggregator = OutcomeAggregator()
        WorkerPool(BrokenClose, id_is_sis=True).run([_records(2)], aggregator)

        assert aggregator.snapshot().user_not_found == ("user-0", "user-1")
        assert aggregator.snapshot().recorded[OutcomeCategory.USER_NOT_FOUND] == 2
