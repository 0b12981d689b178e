"""Occurrence, issue, and report data models."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional


class ReportStatus(str, Enum):
    ERROR = "Error"
    CLEAN = "Clean"
    ISSUES_FOUND = "Issues Found"


@dataclass(frozen=True)
class Occurrence:
    """One match of one rule. ``char_end`` is exclusive."""

    line_number: int
    snippet: str
    char_start: int
    char_end: int
    capture: Optional[str] = None  # first capture group, if the pattern has one


@dataclass(frozen=True)
class Issue:
    """An occurrence carrying its rule's descriptive fields."""

    id: str
    type: str
    title: str
    why: str
    fix: str
    severity: str
    occurrence: Occurrence


def utc_timestamp() -> str:
    """ISO-8601 UTC with millisecond precision, e.g. 2025-01-31T12:00:00.000Z."""
    return (
        datetime.now(timezone.utc)
        .isoformat(timespec="milliseconds")
        .replace("+00:00", "Z")
    )


@dataclass(frozen=True)
class Report:
    """Result of one ``analyze`` call.

    On the error path ``issues`` is None and ``error`` holds the message; a
    clean analysis has an empty ``issues`` list instead.
    """

    timestamp: str
    status: ReportStatus
    total_issues: int = 0
    issues: Optional[List[Issue]] = None
    error: Optional[str] = None

    @property
    def is_error(self) -> bool:
        return self.status is ReportStatus.ERROR

    @property
    def is_clean(self) -> bool:
        return self.status is ReportStatus.CLEAN

    @classmethod
    def failure(cls, message: str) -> "Report":
        return cls(timestamp=utc_timestamp(), status=ReportStatus.ERROR, error=message)
