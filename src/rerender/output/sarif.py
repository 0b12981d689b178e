"""SARIF v2.1.0 reporter — for code-scanning integrations."""

from __future__ import annotations

import json
from typing import Any, Dict, List

from rerender import __version__
from rerender.findings.models import Report

_SEVERITY_MAP = {
    "High": "error",
    "Medium": "warning",
    "Low": "note",
    "Info": "note",
}

_SARIF_SCHEMA = (
    "https://raw.githubusercontent.com/oasis-tcs/sarif-spec/main/"
    "sarif-2.1/schema/sarif-schema-2.1.0.json"
)


def to_dict(report: Report, *, uri: str = "<stdin>") -> Dict[str, Any]:
    """Convert a Report to a SARIF v2.1.0 dict. Error reports yield no results."""
    rules: List[Dict[str, Any]] = []
    seen_rules: set[str] = set()
    results: List[Dict[str, Any]] = []

    for issue in report.issues or []:
        # Rule definition (only once per rule id)
        if issue.id not in seen_rules:
            seen_rules.add(issue.id)
            rules.append({
                "id": issue.id,
                "name": issue.type,
                "shortDescription": {"text": issue.title},
                "fullDescription": {"text": issue.why},
                "help": {"text": issue.fix},
                "defaultConfiguration": {
                    "level": _SEVERITY_MAP.get(issue.severity, "warning"),
                },
                "properties": {"severity": issue.severity},
            })

        occ = issue.occurrence
        results.append({
            "ruleId": issue.id,
            "level": _SEVERITY_MAP.get(issue.severity, "warning"),
            "message": {"text": issue.title},
            "locations": [
                {
                    "physicalLocation": {
                        "artifactLocation": {"uri": uri},
                        "region": {
                            "startLine": occ.line_number,
                            "charOffset": occ.char_start,
                            "charLength": occ.char_end - occ.char_start,
                            "snippet": {"text": occ.snippet},
                        },
                    }
                }
            ],
        })

    run: Dict[str, Any] = {
        "tool": {
            "driver": {
                "name": "rerender",
                "version": __version__,
                "rules": rules,
            }
        },
        "results": results,
    }
    if report.is_error:
        run["invocations"] = [{
            "executionSuccessful": False,
            "toolExecutionNotifications": [{"message": {"text": report.error}}],
        }]

    return {
        "$schema": _SARIF_SCHEMA,
        "version": "2.1.0",
        "runs": [run],
    }


def render(report: Report, *, uri: str = "<stdin>") -> str:
    """Return SARIF JSON string."""
    return json.dumps(to_dict(report, uri=uri), indent=2)
