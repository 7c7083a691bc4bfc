from abc import ABC, abstractmethod
from collections.abc import Generator, Iterator
from contextlib import contextmanager

from app.canvas.models import CanvasFile, CanvasUser, DeletedFile


class BaseCanvasClient(ABC):
    """Contract for a single Canvas API session.

    A session carries impersonation state, so one instance must never be
    shared between threads.
    """

    @abstractmethod
    def get_user_by_sis_id(self, sis_user_id: str) -> CanvasUser | None:
        """Look up a user by SIS id. Returns None when Canvas has no such user."""

    @abstractmethod
    def get_user(self, user_id: int) -> CanvasUser | None:
        """Look up a user by Canvas id. Returns None when Canvas has no such user."""

    @abstractmethod
    def begin_impersonation(self, user_id: int) -> None:
        """Act as the given user for every following call on this session."""

    @abstractmethod
    def end_impersonation(self) -> None:
        """Stop acting as another user."""

    @abstractmethod
    def stream_personal_files(self, search_term: str) -> Iterator[CanvasFile]:
        """Lazily yield the current user's personal files matching search_term.

        The search is a substring match on Canvas' side; callers must check
        exact names themselves.
        """

    @abstractmethod
    def delete_file(self, file_id: int, permanent: bool = False) -> DeletedFile:
        """Delete a file. Non-permanent deletes leave it recoverable by admins."""

    @abstractmethod
    def close(self) -> None:
        """Release the underlying connection resources."""

    @contextmanager
    def impersonating(self, user: CanvasUser) -> Generator[CanvasUser, None, None]:
        """Scope impersonation of user; always ended on exit, even on error."""
        self.begin_impersonation(user.id)
        try:
            yield user
        finally:
            self.end_impersonation()
