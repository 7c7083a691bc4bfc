from app.canvas.client_base import BaseCanvasClient
from app.canvas.models import CanvasUser
from app.logging.logger import Log
from app.processor.exceptions import UserNotFoundError
from app.processor.models import OutcomeCategory, TaskOutcome, TaskRecord


class TaskRunner:
    """Run one mapping task on a worker's Canvas session and classify it.

    resolve -> impersonate -> search -> delete -> stop impersonating.
    Exceptions never leave run(); they become an ERROR outcome.
    """

    def __init__(self, client: BaseCanvasClient, *, id_is_sis: bool) -> None:
        self._client = client
        self._id_is_sis = id_is_sis

    def run(self, record: TaskRecord) -> TaskOutcome:
        try:
            user = self._resolve(record.user_key)
            Log.info(
                f"Preparing to delete filename(s) {record.target_filename} from userkey "
                f"{record.user_key}, Id {user.id}, SIS {user.sis_user_id}"
            )
            with self._client.impersonating(user):
                deleted_ids = self._delete_matches(record)
        except UserNotFoundError:
            Log.warning(f"Couldn't find the user for userkey {record.user_key}")
            return TaskOutcome(record=record, category=OutcomeCategory.USER_NOT_FOUND)
        except Exception as exc:
            Log.error(f"Task failed for userkey {record.user_key}: {exc!r}")
            return TaskOutcome(
                record=record,
                category=OutcomeCategory.ERROR,
                error_message=str(exc),
            )

        if not deleted_ids:
            Log.info(f"Userkey {record.user_key} has no {record.target_filename} to delete")
            return TaskOutcome(record=record, category=OutcomeCategory.NO_MATCHING_FILE)
        return TaskOutcome(
            record=record,
            category=OutcomeCategory.DELETED,
            deleted_file_ids=deleted_ids,
        )

    def _resolve(self, user_key: str) -> CanvasUser:
        if self._id_is_sis:
            user = self._client.get_user_by_sis_id(user_key)
        else:
            if not (user_key.isascii() and user_key.isdigit()):
                raise ValueError(f"userkey {user_key!r} is not a numeric Canvas id")
            user = self._client.get_user(int(user_key))
        if user is None:
            raise UserNotFoundError(f"No Canvas user for userkey {user_key}")
        return user

    def _delete_matches(self, record: TaskRecord) -> tuple[int, ...]:
        # Search is substring-based; collect exact matches before deleting so
        # deletions don't shift the pages still being read.
        matches = [
            file
            for file in self._client.stream_personal_files(record.target_filename)
            if file.filename == record.target_filename
        ]
        deleted_ids: list[int] = []
        for file in matches:
            deleted = self._client.delete_file(file.id, permanent=False)
            Log.info(
                f"Deleted {record.target_filename}, id {deleted.id}, "
                f"from userkey {record.user_key}"
            )
            deleted_ids.append(deleted.id)
        return tuple(deleted_ids)
