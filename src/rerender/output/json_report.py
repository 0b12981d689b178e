"""JSON reporter — the wire format returned to API callers."""

from __future__ import annotations

import json
from typing import Any, Dict, List

from rerender.findings.models import Issue, Report


def issue_to_dict(issue: Issue) -> Dict[str, Any]:
    occ = issue.occurrence
    return {
        "id": issue.id,
        "type": issue.type,
        "title": issue.title,
        "why": issue.why,
        "fix": issue.fix,
        "severity": issue.severity,
        "occurrence": {
            "lineNumber": occ.line_number,
            "snippet": occ.snippet,
            "charStart": occ.char_start,
            "charEnd": occ.char_end,
        },
    }


def to_dict(report: Report) -> Dict[str, Any]:
    """Convert a Report to a JSON-serialisable dict.

    Error reports carry ``error`` and no ``issues`` key at all.
    """
    if report.is_error:
        return {
            "timestamp": report.timestamp,
            "status": report.status.value,
            "error": report.error,
        }

    issues: List[Dict[str, Any]] = [issue_to_dict(i) for i in report.issues or []]
    return {
        "timestamp": report.timestamp,
        "status": report.status.value,
        "totalIssues": report.total_issues,
        "issues": issues,
    }


def render(report: Report) -> str:
    """Return formatted JSON string."""
    return json.dumps(to_dict(report), indent=2)
