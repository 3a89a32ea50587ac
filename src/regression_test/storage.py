"""
Baseline storage.

This module handles reading and writing baseline files, each a pretty
printed JSON list of rendered entries, and inventories a directory of them.
"""
from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Optional, Sequence, Union

from .errors import MalformedBaseline, WriteError

logger = logging.getLogger(__name__)

BASELINE_SUFFIX = ".json"


def load_baseline(path: Union[str, Path]) -> Optional[list[str]]:
    """Load the entries stored at ``path``.

    Returns None when no baseline exists yet. Raises MalformedBaseline when
    the file cannot be read or does not hold a list of strings.
    """
    path = Path(path)
    if not path.exists():
        logger.debug(f"No baseline at {path}")
        return None

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise MalformedBaseline(path, f"invalid JSON: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise MalformedBaseline(path, str(e)) from e

    if not isinstance(data, list):
        raise MalformedBaseline(path, f"expected a list of entries, found {type(data).__name__}")

    for index, entry in enumerate(data):
        if not isinstance(entry, str):
            raise MalformedBaseline(
                path, f"entry {index} is {type(entry).__name__}, expected a string"
            )

    logger.debug(f"Loaded {len(data)} entries from {path}")
    return data


def dump_baseline(entries: Sequence[str], indent: int = 2) -> str:
    """Serialize entries to the on-disk text form."""
    return json.dumps(list(entries), indent=indent, ensure_ascii=False) + "\n"


def write_baseline(path: Union[str, Path], entries: Sequence[str], indent: int = 2) -> Path:
    """Atomically write entries to ``path``, creating parent directories.

    The content goes to a temporary file next to the target, which is then
    renamed over it. Raises WriteError on any I/O failure.
    """
    path = Path(path)
    content = dump_baseline(entries, indent=indent)

    tmp_name = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
        ) as f:
            tmp_name = f.name
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_name, path)
    except OSError as e:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise WriteError(path, str(e)) from e

    logger.debug(f"Wrote {len(entries)} entries to {path}")
    return path


class BaselineManager:
    """Inventories the baselines stored under a data directory."""

    def __init__(self, data_dir: Union[str, Path]):
        self.data_dir = Path(data_dir)

    def iter_baseline_files(self) -> list[Path]:
        """All baseline files under the data directory, sorted."""
        if not self.data_dir.exists():
            return []
        return sorted(p for p in self.data_dir.rglob(f"*{BASELINE_SUFFIX}") if p.is_file())

    def list_baselines(self) -> list[tuple[Path, int]]:
        """List every readable baseline with its entry count."""
        baselines = []
        for baseline_file in self.iter_baseline_files():
            try:
                entries = load_baseline(baseline_file)
            except MalformedBaseline as e:
                logger.warning(f"Skipping unreadable baseline {baseline_file}: {e.reason}")
                continue
            baselines.append((baseline_file, len(entries or [])))
        return baselines

    def find_malformed(self) -> list[tuple[Path, str]]:
        """Return the path and reason of every baseline that fails to load."""
        malformed = []
        for baseline_file in self.iter_baseline_files():
            try:
                load_baseline(baseline_file)
            except MalformedBaseline as e:
                malformed.append((baseline_file, e.reason))
        return malformed

    def get_baseline_stats(self) -> dict[str, Any]:
        """Get statistics about stored baselines."""
        baselines = self.list_baselines()

        stats = {
            "total_baselines": len(baselines),
            "total_entries": 0,
            "total_size_bytes": 0,
        }

        for baseline_file, count in baselines:
            stats["total_entries"] += count
            try:
                stats["total_size_bytes"] += baseline_file.stat().st_size
            except OSError:
                pass

        return stats
