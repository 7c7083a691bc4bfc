from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class CanvasUser:
    """Subset of a Canvas user object needed for impersonation."""

    id: int
    name: str = ""
    sis_user_id: str | None = None

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "CanvasUser":
        return cls(
            id=int(payload["id"]),
            name=str(payload.get("name") or ""),
            sis_user_id=payload.get("sis_user_id"),
        )


@dataclass(frozen=True)
class CanvasFile:
    """A file from a user's personal files listing."""

    id: int
    filename: str
    display_name: str = ""

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "CanvasFile":
        return cls(
            id=int(payload["id"]),
            filename=str(payload.get("filename") or ""),
            display_name=str(payload.get("display_name") or ""),
        )


@dataclass(frozen=True)
class DeletedFile:
    """Canvas' acknowledgement of a file deletion."""

    id: int
