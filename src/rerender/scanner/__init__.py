"""Scanner — context detection, match extraction, suppression, engine."""

from rerender.scanner.context import ContextFacts, detect_context
from rerender.scanner.engine import INVALID_INPUT_MESSAGE, analyze
from rerender.scanner.extractor import extract, iter_occurrences
from rerender.scanner.suppression import SuppressionFilter, is_suppressed

__all__ = [
    "INVALID_INPUT_MESSAGE",
    "ContextFacts",
    "SuppressionFilter",
    "analyze",
    "detect_context",
    "extract",
    "is_suppressed",
    "iter_occurrences",
]
