"""Self-hosted music review and article site."""

__version__ = "0.1.0"
