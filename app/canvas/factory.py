import httpx

from app.canvas.canvas_client_adapter import CanvasClientAdapter
from app.canvas.client_base import BaseCanvasClient
from app.canvas.dry_run_client_adapter import DryRunCanvasClient
from app.config.settings import Settings


class CanvasClientFactory:
    """Creates a fresh Canvas session from settings.

    Every call returns a new, unshared session.
    """

    @classmethod
    def create(
        cls,
        settings: Settings,
        transport: httpx.BaseTransport | None = None,
    ) -> BaseCanvasClient:
        client = CanvasClientAdapter(
            api_token=settings.canvas_api_token,
            base_url=settings.canvas_base_url,
            timeout_seconds=settings.canvas_timeout_seconds,
            transport=transport,
        )
        if settings.dry_run:
            return DryRunCanvasClient(client)
        return client
