"""Configuration schema — dataclasses for every config section."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Literal

Severity = Literal["High", "Medium", "Low", "Info"]

SEVERITIES: tuple[str, ...] = ("High", "Medium", "Low", "Info")

SEVERITY_RANK: dict[str, int] = {
    "High": 3,
    "Medium": 2,
    "Low": 1,
    "Info": 0,
}

# Lower-case spellings accepted on the command line and in .rerender.toml
FAIL_ON_LEVELS: dict[str, str] = {
    "info": "Info",
    "low": "Low",
    "medium": "Medium",
    "high": "High",
}


def severity_rank(severity: str) -> int:
    return SEVERITY_RANK.get(severity, 0)


def severity_at_or_above(issue_sev: str, threshold: str) -> bool:
    """Return True if *issue_sev* is at or above *threshold*.

    *threshold* may be given in either spelling (``"high"`` or ``"High"``).
    """
    threshold = FAIL_ON_LEVELS.get(threshold, threshold)
    return severity_rank(issue_sev) >= severity_rank(threshold)


@dataclass
class ScanConfig:
    max_input_kb: int = 256  # enforced by the CLI and server, not the engine
    fail_on: str = "high"  # info | low | medium | high


@dataclass
class OutputConfig:
    format: Literal["terminal", "json", "sarif"] = "terminal"
    show_summary: bool = True
    explain: bool = False  # print why/fix text under each issue


@dataclass
class RulesConfig:
    enable: List[str] = field(default_factory=list)  # empty = all enabled
    disable: List[str] = field(default_factory=list)


@dataclass
class ServerConfig:
    cors_origins: List[str] = field(default_factory=lambda: ["*"])


@dataclass
class RerenderConfig:
    version: str = "1.0"
    scan: ScanConfig = field(default_factory=ScanConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    rules: RulesConfig = field(default_factory=RulesConfig)
    # allow-list name -> extra values appended to the built-in list
    allowlist: Dict[str, List[str]] = field(default_factory=dict)
    server: ServerConfig = field(default_factory=ServerConfig)

    @property
    def max_input_bytes(self) -> int:
        return self.scan.max_input_kb * 1024
