"""PostgreSQL user and address store."""

__version__ = "0.1.0"
