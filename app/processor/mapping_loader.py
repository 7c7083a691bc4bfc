from collections.abc import Iterable
from pathlib import Path

from app.processor.exceptions import InputFormatError
from app.processor.models import TaskRecord


class MappingLoader:
    """Reads a mapping file of 'userKey,filename' lines into TaskRecords."""

    DELIMITER = ","

    def load(self, path: Path) -> list[TaskRecord]:
        """Read and parse the mapping file.

        Raises:
            FileNotFoundError: if the file does not exist.
            InputFormatError: on the first malformed line.
        """
        if not path.exists():
            raise FileNotFoundError(f"Mapping file not found: {path}")
        with path.open("r", encoding="utf-8-sig") as infile:
            return self.parse(infile)

    def parse(self, lines: Iterable[str]) -> list[TaskRecord]:
        records: list[TaskRecord] = []
        for line_number, line in enumerate(lines, start=1):
            if not line.strip():
                continue
            records.append(self._parse_line(line, line_number))
        return records

    def _parse_line(self, line: str, line_number: int) -> TaskRecord:
        fields = line.rstrip("\r\n").split(self.DELIMITER)
        if len(fields) != 2:
            raise InputFormatError(
                f"Line {line_number}: expected 'userKey,filename', "
                f"got {len(fields)} field(s)",
                line_number=line_number,
            )
        user_key, target_filename = (value.strip() for value in fields)
        if not user_key or not target_filename:
            raise InputFormatError(
                f"Line {line_number}: userKey and filename must not be empty",
                line_number=line_number,
            )
        return TaskRecord(user_key=user_key, target_filename=target_filename)
