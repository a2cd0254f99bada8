"""Field-sales CRM engine: client search, radar, tour routing and remote sync."""

__version__ = "0.1.0"
