from pathlib import Path

import pytest

from app.config.settings import Settings
from tests.fakes import TOKEN, FakeCanvasServer


@pytest.fixture
def canvas_server() -> FakeCanvasServer:
    return FakeCanvasServer(
        users={"alice": 1, "bob": 2, "carol": 3, "dave": 4, "erin": 5},
        files={
            1: [
                {"id": 11, "filename": "report.pdf"},
                {"id": 12, "filename": "report.pdf"},
                {"id": 13, "filename": "report.pdf.bak"},
                {"id": 14, "filename": "old report.pdf"},
            ],
            2: [{"id": 21, "filename": "notes.txt"}],
            3: [{"id": 31, "filename": "a.txt"}, {"id": 32, "filename": "b.txt"}],
            4: [{"id": 41, "filename": "report.pdf"}],
            5: [{"id": 51, "filename": "final report.pdf"}],
        },
        failing_user_ids={4},
    )


@pytest.fixture
def integration_settings(tmp_path: Path) -> Settings:
    return Settings(
        canvas_api_token=TOKEN,
        canvas_base_url="https://canvas.test/api/v1/",
        map_file=str(tmp_path / "map.csv"),
        report_dir=str(tmp_path / "reports"),
        id_is_sis=True,
    )
