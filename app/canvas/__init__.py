from app.canvas.client_base import BaseCanvasClient
from app.canvas.factory import CanvasClientFactory
from app.canvas.models import CanvasFile, CanvasUser, DeletedFile

__all__ = [
    "BaseCanvasClient",
    "CanvasClientFactory",
    "CanvasFile",
    "CanvasUser",
    "DeletedFile",
]
