"""Dry-run Canvas session.

Resolves users and searches files through a real session, but only logs the
deletions it would perform.
"""

from collections.abc import Iterator

from app.canvas.client_base import BaseCanvasClient
from app.canvas.models import CanvasFile, CanvasUser, DeletedFile
from app.logging.logger import Log


class DryRunCanvasClient(BaseCanvasClient):
    """Wraps a session and turns deletes into log lines."""

    def __init__(self, inner: BaseCanvasClient) -> None:
        self._inner = inner

    def get_user_by_sis_id(self, sis_user_id: str) -> CanvasUser | None:
        return self._inner.get_user_by_sis_id(sis_user_id)

    def get_user(self, user_id: int) -> CanvasUser | None:
        return self._inner.get_user(user_id)

    def begin_impersonation(self, user_id: int) -> None:
        self._inner.begin_impersonation(user_id)

    def end_impersonation(self) -> None:
        self._inner.end_impersonation()

    def stream_personal_files(self, search_term: str) -> Iterator[CanvasFile]:
        return self._inner.stream_personal_files(search_term)

    def delete_file(self, file_id: int, permanent: bool = False) -> DeletedFile:
        Log.info(f"[DRY RUN] Would delete file {file_id} (permanent={permanent})")
        return DeletedFile(id=file_id)

    def close(self) -> None:
        self._inner.close()
