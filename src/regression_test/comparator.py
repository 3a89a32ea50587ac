"""
Comparison engine for recorded entries.

Entries are rendered text, so comparison is exact string equality. On a
mismatch the result carries a line diff for the failure message.
"""
from __future__ import annotations

import difflib
from dataclasses import dataclass
from typing import Any, Optional


@dataclass
class ComparisonResult:
    """Result of comparing a recorded entry with its baseline."""

    match: bool
    index: int
    expected: Optional[str] = None
    actual: Optional[str] = None
    diff: Optional[str] = None
    error_message: Optional[str] = None


def diff_lines(expected: str, actual: str) -> str:
    """Line diff of two renderings.

    Unchanged lines are prefixed with two spaces, removed lines with ``- ``
    and added lines with ``+ ``.
    """
    lines = difflib.ndiff(expected.splitlines(), actual.splitlines())
    return "\n".join(line for line in lines if not line.startswith("? "))


class Comparator:
    """Compares recorded entries with baseline entries."""

    def compare(self, index: int, expected: str, actual: str) -> ComparisonResult:
        """Compare the entry recorded at ``index`` with the expected one."""
        if expected == actual:
            return ComparisonResult(match=True, index=index, expected=expected, actual=actual)

        return ComparisonResult(
            match=False,
            index=index,
            expected=expected,
            actual=actual,
            diff=diff_lines(expected, actual),
            error_message=f"Entries differ at index {index}",
        )

    def get_summary_stats(self, results: list[ComparisonResult]) -> dict[str, Any]:
        """Get summary statistics for a list of comparison results."""
        total = len(results)
        matches = sum(1 for r in results if r.match)
        failures = total - matches

        return {
            "total": total,
            "matches": matches,
            "failures": failures,
            "first_failure": next((r.index for r in results if not r.match), None),
        }
