from collections.abc import Iterator
from typing import Any, ClassVar
from urllib.parse import quote

import httpx

from app.canvas.client_base import BaseCanvasClient
from app.canvas.exceptions import CanvasApiError, CanvasNetworkError
from app.canvas.models import CanvasFile, CanvasUser, DeletedFile


class CanvasClientAdapter(BaseCanvasClient):
    """Canvas REST API session built on httpx.

    Impersonation uses Canvas masquerading: while active, every request
    carries the ``as_user_id`` parameter.
    """

    PAGE_SIZE: ClassVar[int] = 100

    def __init__(
        self,
        *,
        api_token: str,
        base_url: str,
        timeout_seconds: int,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._client = httpx.Client(
            base_url=base_url,
            headers={"Authorization": f"Bearer {api_token}"},
            timeout=timeout_seconds,
            transport=transport,
        )
        self._as_user_id: int | None = None

    @property
    def impersonated_user_id(self) -> int | None:
        return self._as_user_id

    def get_user_by_sis_id(self, sis_user_id: str) -> CanvasUser | None:
        return self._lookup_user(f"users/sis_user_id:{quote(sis_user_id, safe='')}")

    def get_user(self, user_id: int) -> CanvasUser | None:
        return self._lookup_user(f"users/{user_id}")

    def begin_impersonation(self, user_id: int) -> None:
        self._as_user_id = user_id

    def end_impersonation(self) -> None:
        self._as_user_id = None

    def stream_personal_files(self, search_term: str) -> Iterator[CanvasFile]:
        url: str | None = "users/self/files"
        params: dict[str, Any] | None = {
            "search_term": search_term,
            "per_page": self.PAGE_SIZE,
        }
        while url is not None:
            response = self._request("GET", url, params=params)
            self._raise_for_status(response)
            for item in response.json():
                yield CanvasFile.from_payload(item)
            # The next link carries search_term, per_page and page itself.
            url = response.links.get("next", {}).get("url")
            params = None

    def delete_file(self, file_id: int, permanent: bool = False) -> DeletedFile:
        params = {"replace": "true"} if permanent else None
        response = self._request("DELETE", f"files/{file_id}", params=params)
        self._raise_for_status(response)
        payload = response.json()
        return DeletedFile(id=int(payload.get("id", file_id)))

    def close(self) -> None:
        self._client.close()

    def _lookup_user(self, url: str) -> CanvasUser | None:
        response = self._request("GET", url)
        if response.status_code == httpx.codes.NOT_FOUND:
            return None
        self._raise_for_status(response)
        return CanvasUser.from_payload(response.json())

    def _request(
        self,
        method: str,
        url: str,
        *,
        params: dict[str, Any] | None = None,
    ) -> httpx.Response:
        overrides: dict[str, Any] = dict(params or {})
        if self._as_user_id is not None:
            overrides["as_user_id"] = self._as_user_id
        # Pagination links carry their own query; fold it into the params so
        # httpx never drops it when params are sent.
        path, _, query = url.partition("?")
        carried = [
            (key, value)
            for key, value in httpx.QueryParams(query).multi_items()
            if key not in overrides
        ]
        merged = carried + list(overrides.items())
        try:
            return self._client.request(method, path, params=merged or None)
        except httpx.TransportError as exc:
            raise CanvasNetworkError(f"Canvas network error: {exc}") from exc

    @staticmethod
    def _raise_for_status(response: httpx.Response) -> None:
        if response.is_success:
            return
        request = response.request
        raise CanvasApiError(
            f"Canvas API error {response.status_code} for "
            f"{request.method} {request.url.path}: {response.text[:200]}",
            status_code=response.status_code,
        )
