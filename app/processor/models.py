from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path


@dataclass(frozen=True)
class TaskRecord:
    """One line of the mapping file: delete target_filename for user_key."""

    user_key: str
    target_filename: str


class OutcomeCategory(str, Enum):
    DELETED = "deleted"
    NO_MATCHING_FILE = "no_matching_file"
    USER_NOT_FOUND = "user_not_found"
    ERROR = "error"


@dataclass(frozen=True)
class TaskOutcome:
    """Result of running one TaskRecord. Exactly one category per task."""

    record: TaskRecord
    category: OutcomeCategory
    deleted_file_ids: tuple[int, ...] = ()
    error_message: str = ""

    @property
    def user_key(self) -> str:
        return self.record.user_key


@dataclass(frozen=True)
class OutcomeSnapshot:
    """Deduplicated, sorted user keys per category after all workers finished.

    ``recorded`` holds the raw per-category append counts before deduplication.
    """

    deleted: tuple[str, ...] = ()
    no_matching_file: tuple[str, ...] = ()
    user_not_found: tuple[str, ...] = ()
    error: tuple[str, ...] = ()
    recorded: Mapping[OutcomeCategory, int] = field(default_factory=dict)

    @property
    def recorded_count(self) -> int:
        return sum(self.recorded.values())

    @property
    def completed_count(self) -> int:
        """Tasks that ran to the end, whether or not a file was deleted."""
        return self.recorded.get(OutcomeCategory.DELETED, 0) + self.recorded.get(
            OutcomeCategory.NO_MATCHING_FILE, 0
        )

    def keys_for(self, category: OutcomeCategory) -> tuple[str, ...]:
        return {
            OutcomeCategory.DELETED: self.deleted,
            OutcomeCategory.NO_MATCHING_FILE: self.no_matching_file,
            OutcomeCategory.USER_NOT_FOUND: self.user_not_found,
            OutcomeCategory.ERROR: self.error,
        }[category]


@dataclass(frozen=True)
class RunReport:
    """Persisted summary of one run."""

    started_at: datetime
    completed_at: datetime
    completed_with_deletion: tuple[str, ...]
    completed_without_deletion: tuple[str, ...]
    error: tuple[str, ...]
    user_not_found: tuple[str, ...]

    def to_document(self) -> dict[str, object]:
        return {
            "dateStarted": self.started_at.isoformat(timespec="seconds"),
            "dateCompleted": self.completed_at.isoformat(timespec="seconds"),
            "completedWithDeletion": list(self.completed_with_deletion),
            "completedWithoutDeletion": list(self.completed_without_deletion),
            "error": list(self.error),
            "userNotFound": list(self.user_not_found),
        }


@dataclass(frozen=True)
class RunResult:
    total_records: int
    snapshot: OutcomeSnapshot
    report: RunReport
    report_path: Path
