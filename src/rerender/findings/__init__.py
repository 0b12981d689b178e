"""Issue models, construction, and ranking."""

from rerender.findings.aggregator import rank, to_issue
from rerender.findings.models import Issue, Occurrence, Report, ReportStatus

__all__ = ["Issue", "Occurrence", "Report", "ReportStatus", "rank", "to_issue"]
