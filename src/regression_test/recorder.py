"""
The regression recorder.

A Recorder is bound to one baseline file. When the file does not exist it
collects every recorded entry and writes them at finalization. When it
exists, each recorded entry is compared to the baseline entry at the same
index.
"""
from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import Any, Optional, Union

from .comparator import Comparator
from .config import RegTestConfig
from .errors import (
    MismatchAtIndex,
    MissingEntries,
    RegressionFailures,
    RegressionTestError,
    UnexpectedExtraEntry,
)
from .rendering import Rendering, render
from .storage import load_baseline, write_baseline

logger = logging.getLogger(__name__)


class Mode(Enum):
    """Recorder operating mode."""

    # No baseline yet: entries are collected and written at finalization.
    GENERATE = "generate"
    # A baseline exists: entries are compared against it.
    VERIFY = "verify"


class Recorder:
    """Records rendered values and checks them against a baseline file.

    Use it as a context manager so that finalization runs on every exit
    path::

        with Recorder("regtest_data/test_add.json") as rt:
            rt.record_display(add(2, 2))
            rt.record_debug([1, 2, 3])
    """

    def __init__(self, path: Union[str, Path], config: Optional[RegTestConfig] = None):
        self.path = Path(path)
        self.config = config or RegTestConfig()
        self.comparator = Comparator()

        self.baseline = load_baseline(self.path)
        self.mode = Mode.GENERATE if self.baseline is None else Mode.VERIFY
        self.entries: list[str] = []
        self.cursor = 0
        self.failures: list[RegressionTestError] = []
        self.finalized = False

        logger.debug(f"Recorder for {self.path} in {self.mode.value} mode")

    def record(self, value: Any, rendering: Rendering = Rendering.DISPLAY) -> None:
        """Render ``value`` and record it as the next entry."""
        if self.finalized:
            raise RuntimeError(f"Recorder for {self.path} is already finalized")

        message = render(value, rendering)
        index = self.cursor
        self.entries.append(message)
        self.cursor += 1

        if self.mode is Mode.VERIFY:
            failure = self._check_entry(index, message)
            if failure is not None:
                if self.config.fail_fast:
                    raise failure
                self.failures.append(failure)

    def record_display(self, value: Any) -> None:
        """Record the human-readable rendering (``str``) of ``value``."""
        self.record(value, Rendering.DISPLAY)

    def record_debug(self, value: Any) -> None:
        """Record the structural rendering (``repr``) of ``value``."""
        self.record(value, Rendering.DEBUG)

    def _check_entry(self, index: int, message: str) -> Optional[RegressionTestError]:
        if index >= len(self.baseline):
            return UnexpectedExtraEntry(self.path, index, len(self.baseline), message)

        result = self.comparator.compare(index, self.baseline[index], message)
        if not result.match:
            return MismatchAtIndex(self.path, index, result.expected, result.actual, result.diff)
        return None

    def finalize(self) -> None:
        """Write the baseline, or run the end-of-test checks. Runs once."""
        if self.finalized:
            return
        self.finalized = True

        if self.mode is Mode.GENERATE:
            write_baseline(self.path, self.entries, indent=self.config.indent)
            if not self.config.quiet:
                logger.info(f"Created regression baseline {self.path} ({len(self.entries)} entries)")
            return

        failures = list(self.failures)
        if self.cursor < len(self.baseline):
            failures.append(MissingEntries(self.path, len(self.baseline), self.cursor))

        if len(failures) == 1:
            raise failures[0]
        if failures:
            raise RegressionFailures(self.path, failures)

        logger.debug(f"Verified {self.cursor} entries against {self.path}")

    def finalize_after_error(self, error: BaseException) -> None:
        """Finalize after the test body raised.

        Recorded entries are still persisted in generate mode. In verify mode
        the end-of-test checks are skipped so the body's error is reported.
        """
        if self.finalized:
            return

        if self.mode is Mode.GENERATE:
            self.finalize()
            return

        self.finalized = True
        if isinstance(error, RegressionTestError):
            return
        logger.warning(
            f"Test body failed after {self.cursor} of {len(self.baseline)} entries; "
            f"skipping end-of-test checks for {self.path}"
        )
        for failure in self.failures:
            logger.warning(str(failure))

    def abandon(self) -> None:
        """Finalize without writing or checking anything.

        For a test body that never ran, e.g. when a later fixture failed
        during setup. No baseline is created in generate mode.
        """
        if self.finalized:
            return
        self.finalized = True
        logger.warning(f"Test body did not run; leaving {self.path} untouched")

    def __enter__(self) -> "Recorder":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):  # pylint: disable=unused-argument
        if exc_type is None:
            self.finalize()
        else:
            self.finalize_after_error(exc_val)
        return False

    def __repr__(self) -> str:
        return f"Recorder(path={str(self.path)!r}, mode={self.mode.value}, cursor={self.cursor})"
