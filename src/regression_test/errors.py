"""
Errors raised by the regression recorder.

Every error derives from AssertionError so that test runners report it as
a test failure rather than an internal error.
"""
from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence, Union

PathLike = Union[str, Path]

_REGENERATE_HINT = "If the change is expected, delete the baseline file and rerun the test to regenerate it."


class RegressionTestError(AssertionError):
    """Base class for all recorder failures."""

    def __init__(self, path: PathLike, message: str):
        self.path = Path(path)
        super().__init__(message)


class MalformedBaseline(RegressionTestError):
    """The baseline file exists but does not hold a list of strings."""

    def __init__(self, path: PathLike, reason: str):
        self.reason = reason
        super().__init__(
            path,
            f"Failed to read regression baseline {path}: {reason}\n{_REGENERATE_HINT}",
        )


class MismatchAtIndex(RegressionTestError):
    """A recorded entry differs from the baseline entry at the same index."""

    def __init__(self, path: PathLike, index: int, expected: str, actual: str, diff: Optional[str] = None):
        self.index = index
        self.expected = expected
        self.actual = actual
        self.diff = diff
        message = (
            f"Regression mismatch at index {index} in {path}:\n"
            f"Expected: {expected}\n"
            f"Actual:   {actual}\n"
        )
        if diff:
            message += f"\nDiff:\n{diff}\n"
        super().__init__(path, message + _REGENERATE_HINT)


class UnexpectedExtraEntry(RegressionTestError):
    """More entries were recorded than the baseline holds."""

    def __init__(self, path: PathLike, index: int, expected_count: int, actual: str):
        self.index = index
        self.expected_count = expected_count
        self.actual = actual
        super().__init__(
            path,
            f"No more regression entries in {path}, but the test recorded another one "
            f"at index {index} (baseline has {expected_count}):\n"
            f"Actual:   {actual}\n{_REGENERATE_HINT}",
        )


class MissingEntries(RegressionTestError):
    """Fewer entries were recorded than the baseline holds."""

    def __init__(self, path: PathLike, expected_count: int, actual_count: int):
        self.expected_count = expected_count
        self.actual_count = actual_count
        super().__init__(
            path,
            f"Regression baseline {path} has {expected_count} entries, "
            f"but the test recorded only {actual_count}.\n{_REGENERATE_HINT}",
        )


class WriteError(RegressionTestError):
    """The baseline could not be persisted."""

    def __init__(self, path: PathLike, reason: str):
        self.reason = reason
        super().__init__(path, f"Failed to write regression baseline {path}: {reason}")


class RegressionFailures(RegressionTestError):
    """Several failures collected over one test when fail_fast is disabled."""

    def __init__(self, path: PathLike, failures: Sequence[RegressionTestError]):
        self.failures = list(failures)
        details = "\n\n".join(str(failure) for failure in self.failures)
        super().__init__(
            path,
            f"{len(self.failures)} regression failure(s) in {path}:\n\n{details}",
        )
