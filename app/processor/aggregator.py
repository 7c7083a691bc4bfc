import threading
from collections import Counter

from app.processor.models import OutcomeCategory, OutcomeSnapshot, TaskOutcome


class OutcomeAggregator:
    """Append-only, thread-safe collection of task outcomes.

    Workers append concurrently; snapshot() is taken once they are all done.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._entries: list[tuple[OutcomeCategory, str]] = []

    def append(self, category: OutcomeCategory, user_key: str) -> None:
        with self._lock:
            self._entries.append((category, user_key))

    def record(self, outcome: TaskOutcome) -> None:
        self.append(outcome.category, outcome.user_key)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def snapshot(self) -> OutcomeSnapshot:
        """Collapse duplicate user keys into one category each.

        A key recorded under several categories lands in the last one observed.
        """
        with self._lock:
            entries = list(self._entries)

        final_category: dict[str, OutcomeCategory] = {}
        for category, user_key in entries:
            final_category[user_key] = category

        buckets: dict[OutcomeCategory, list[str]] = {c: [] for c in OutcomeCategory}
        for user_key, category in final_category.items():
            buckets[category].append(user_key)

        return OutcomeSnapshot(
            deleted=tuple(sorted(buckets[OutcomeCategory.DELETED])),
            no_matching_file=tuple(sorted(buckets[OutcomeCategory.NO_MATCHING_FILE])),
            user_not_found=tuple(sorted(buckets[OutcomeCategory.USER_NOT_FOUND])),
            error=tuple(sorted(buckets[OutcomeCategory.ERROR])),
            recorded=dict(Counter(category for category, _ in entries)),
        )
