import json
from datetime import datetime
from pathlib import Path

from app.processor.exceptions import ReportWriteError
from app.processor.models import OutcomeSnapshot, RunReport


def report_file_path(report_dir: Path, started_at: datetime) -> Path:
    """Build path to the run report: {report_dir}/BulkFileDelete_Log_{start}.json"""
    return report_dir / f"BulkFileDelete_Log_{started_at:%Y%m%dT%H%M%S%f}.json"


class ReportBuilder:
    """Builds the run report and writes it once, keyed by the start time."""

    def __init__(self, report_dir: Path) -> None:
        self._report_dir = report_dir

    def build(
        self,
        started_at: datetime,
        completed_at: datetime,
        snapshot: OutcomeSnapshot,
    ) -> RunReport:
        return RunReport(
            started_at=started_at,
            completed_at=completed_at,
            completed_with_deletion=snapshot.deleted,
            completed_without_deletion=snapshot.no_matching_file,
            error=snapshot.error,
            user_not_found=snapshot.user_not_found,
        )

    def write(self, report: RunReport) -> Path:
        """Persist the report as indented JSON.

        Raises:
            ReportWriteError: if the report cannot be serialized or the file
                cannot be created, including when a report for the same start
                time already exists. Nothing is written in either case.
        """
        path = report_file_path(self._report_dir, report.started_at)
        try:
            content = json.dumps(report.to_document(), indent=2) + "\n"
        except (TypeError, ValueError) as exc:
            raise ReportWriteError(f"Failed to serialize report for {path}: {exc}") from exc
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with path.open("x", encoding="utf-8") as outfile:
                outfile.write(content)
        except OSError as exc:
            raise ReportWriteError(f"Failed to write report to {path}: {exc}") from exc
        return path
