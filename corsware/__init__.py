"""CORS middleware for WSGI applications: configuration, origin checks and header sets."""

__version__ = "0.1.0"
__all__ = ["config", "cors", "utils"]