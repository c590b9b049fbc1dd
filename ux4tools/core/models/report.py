"""
TestReport — the structured outcome of one browser test run.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class TestReport(BaseModel):
    """Results returned by the in-page runner plus the console transcript."""

    __test__ = False

    json_report: dict[str, Any] = Field(default_factory=dict)
    html_report: str = ""
    console_output: list[str] = Field(default_factory=list)
    error: str | None = None

    @property
    def passed(self) -> int:
        return _count(self.json_report.get("passed"))

    @property
    def failed(self) -> int:
        return _count(self.json_report.get("failed"))

    @property
    def transcript(self) -> str:
        return "\n".join(self.console_output)

    @classmethod
    def from_page(cls, results: dict[str, Any] | None, console_output: list[str]) -> TestReport:
        """Build a report from the ``{json, html}`` object the page returns."""
        results = results or {}
        json_report = results.get("json")
        html_report = results.get("html")
        return cls(
            json_report=json_report if isinstance(json_report, dict) else {},
            html_report=html_report if isinstance(html_report, str) else "",
            console_output=list(console_output),
        )


def _count(value: Any) -> int:
    # The in-page runner may report counts or lists of test results
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, list):
        return len(value)
    return 0
