"""WebSocket host that serves quick-play sessions to a UI client."""

from .server import ClientConnection, QuickPlayServer

__all__ = ["ClientConnection", "QuickPlayServer"]
