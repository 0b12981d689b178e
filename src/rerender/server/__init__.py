"""HTTP request handler for the analysis engine."""

from rerender.server.app import create_app

__all__ = ["create_app"]
