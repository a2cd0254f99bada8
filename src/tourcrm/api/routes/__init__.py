"""Route group exports."""

from . import clients, health, position, radar, sync, tours

__all__ = ["clients", "health", "position", "radar", "sync", "tours"]
