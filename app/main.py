from pathlib import Path

from app.config.settings import Settings
from app.logging.logger import Log
from app.processor.exceptions import InputFormatError, ReportWriteError
from app.processor.processor import build_processor


def main() -> int:
    """Entry point: load settings -> validate -> run the bulk delete -> exit code."""
    settings = Settings()
    Log.configure(settings.log_level)

    if not settings.canvas_api_token:
        Log.error("CANVAS_API_TOKEN is not set. Put it in the environment or .env")
        return 1

    map_path = Path(settings.map_file)
    if not map_path.exists():
        Log.error(f"Mapping file not found: {map_path}")
        return 1

    Log.info(
        "Interpreting userkey as SIS ID"
        if settings.id_is_sis
        else "Interpreting userkey as Canvas ID"
    )
    if settings.dry_run:
        Log.warning("Dry run enabled: no files will be deleted")

    processor = build_processor(settings)
    try:
        processor.process(map_path)
    except InputFormatError as exc:
        Log.error(f"Invalid mapping file, nothing was deleted: {exc}")
        return 1
    except ReportWriteError as exc:
        Log.error(f"{exc}. Deletions already performed are not undone")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
