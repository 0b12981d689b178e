"""Rerender — static heuristics for React re-render and accessibility leaks."""

__version__ = "0.1.0"

from rerender.scanner.engine import analyze  # noqa: E402

__all__ = ["__version__", "analyze"]
