"""
Command-line interface for regression baselines.

This module provides CLI commands for inspecting and checking the
baseline files written by the recorder.
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from .comparator import Comparator
from .config import ConfigManager
from .errors import MalformedBaseline
from .storage import BaselineManager, load_baseline

logger = logging.getLogger(__name__)


class RegTestCLI:
    """Command-line interface for regression baselines."""

    def __init__(self):
        self.config_manager = ConfigManager()
        self.config = self.config_manager.get_config()

    def run(self, args: Optional[list[str]] = None) -> int:
        """Run the CLI with given arguments."""
        parser = self._create_parser()
        parsed_args = parser.parse_args(args)

        if parsed_args.config:
            self.config_manager = ConfigManager(parsed_args.config)
            self.config = self.config_manager.get_config()
        if parsed_args.verbose:
            self.config_manager.update_config(verbose=True)
            package_logger = logging.getLogger("regression_test")
            package_logger.setLevel(logging.DEBUG)
            for handler in package_logger.handlers:
                handler.setLevel(logging.DEBUG)
        if parsed_args.quiet:
            self.config_manager.update_config(quiet=True)

        if not hasattr(parsed_args, "func"):
            parser.print_help()
            return 1

        try:
            return parsed_args.func(parsed_args)
        except KeyboardInterrupt:
            logger.info("\nInterrupted by user")
            return 1
        except (OSError, MalformedBaseline) as e:
            logger.error(f"Error: {e}")
            return 1

    def _create_parser(self) -> argparse.ArgumentParser:
        """Create the argument parser."""
        parser = argparse.ArgumentParser(
            description="Inspect regression test baselines",
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )

        parser.add_argument("--config", "-c", type=Path, help="Configuration file path")

        parser.add_argument("--verbose", "-v", action="store_true", help="Verbose output")

        parser.add_argument("--quiet", "-q", action="store_true", help="Quiet output")

        subparsers = parser.add_subparsers(dest="command", help="Available commands")

        # List command
        list_parser = subparsers.add_parser("list", help="List stored baselines")
        list_parser.add_argument(
            "root", type=Path, nargs="?", default=Path("."), help="Project root (default: .)"
        )
        list_parser.set_defaults(func=self._list_command)

        # Show command
        show_parser = subparsers.add_parser("show", help="Show the entries of a baseline")
        show_parser.add_argument("baseline", type=Path, help="Baseline file")
        show_parser.set_defaults(func=self._show_command)

        # Check command
        check_parser = subparsers.add_parser("check", help="Report baselines that fail to load")
        check_parser.add_argument(
            "root", type=Path, nargs="?", default=Path("."), help="Project root (default: .)"
        )
        check_parser.set_defaults(func=self._check_command)

        # Diff command
        diff_parser = subparsers.add_parser("diff", help="Compare two baseline files")
        diff_parser.add_argument("expected", type=Path, help="Baseline holding the expected entries")
        diff_parser.add_argument("actual", type=Path, help="Baseline holding the actual entries")
        diff_parser.set_defaults(func=self._diff_command)

        # Config command
        config_parser = subparsers.add_parser("config", help="Configuration management")
        config_parser.add_argument(
            "--init", action="store_true", help="Initialize default configuration file"
        )
        config_parser.add_argument("--show", action="store_true", help="Show current configuration")
        config_parser.set_defaults(func=self._config_command)

        return parser

    def _list_command(self, args) -> int:
        """Handle the list command."""
        data_dir = self.config.get_data_dir(args.root)
        manager = BaselineManager(data_dir)
        baselines = manager.list_baselines()

        logger.info(f"Found {len(baselines)} baselines in {data_dir}:")
        for baseline_file, count in baselines:
            if self.config.quiet:
                break
            logger.info(f"  {baseline_file.relative_to(data_dir)} ({count} entries)")

        if self.config.verbose:
            stats = manager.get_baseline_stats()
            logger.info(f"Total entries: {stats['total_entries']}")
            logger.info(f"Total size: {stats['total_size_bytes'] / 1024:.2f} KB")

        return 0

    def _show_command(self, args) -> int:
        """Handle the show command."""
        entries = load_baseline(args.baseline)
        if entries is None:
            logger.error(f"No baseline at {args.baseline}")
            return 1

        logger.info(f"{args.baseline}: {len(entries)} entries")
        for index, entry in enumerate(entries):
            logger.info(f"[{index}] {entry}")
        return 0

    def _check_command(self, args) -> int:
        """Handle the check command."""
        data_dir = self.config.get_data_dir(args.root)
        manager = BaselineManager(data_dir)
        malformed = manager.find_malformed()

        for baseline_file, reason in malformed:
            logger.error(f"  ✗ {baseline_file}: {reason}")

        total = len(manager.iter_baseline_files())
        logger.info(f"Checked {total} baselines in {data_dir}: {len(malformed)} malformed")
        return 0 if not malformed else 1

    def _diff_command(self, args) -> int:
        """Handle the diff command."""
        expected_entries = load_baseline(args.expected)
        actual_entries = load_baseline(args.actual)
        for baseline, entries in ((args.expected, expected_entries), (args.actual, actual_entries)):
            if entries is None:
                logger.error(f"No baseline at {baseline}")
                return 1

        comparator = Comparator()
        results = [
            comparator.compare(index, expected, actual)
            for index, (expected, actual) in enumerate(zip(expected_entries, actual_entries))
        ]

        for result in results:
            if result.match:
                if self.config.verbose:
                    logger.info(f"  ✓ [{result.index}]")
                continue
            logger.error(f"  ✗ {result.error_message}")
            for line in result.diff.splitlines():
                logger.error(f"    {line}")

        stats = comparator.get_summary_stats(results)
        logger.info(f"Compared {stats['total']} entries: {stats['failures']} differ")

        if len(expected_entries) != len(actual_entries):
            logger.error(
                f"Entry counts differ: {len(expected_entries)} expected, {len(actual_entries)} actual"
            )
            return 1

        return 0 if stats["failures"] == 0 else 1

    def _config_command(self, args) -> int:
        """Handle the config command."""
        if args.init:
            self.config_manager.create_default_config()
            return 0

        if args.show:
            logger.info("Current configuration:")
            config_dict = self.config.to_dict()
            for key, value in config_dict.items():
                logger.info(f"  {key}: {value}")
            return 0

        logger.info("Use --init to create default config or --show to display current config")
        return 0


def main(args: Optional[list[str]] = None):
    """Main entry point for the CLI."""
    cli = RegTestCLI()
    return cli.run(args)


if __name__ == "__main__":
    sys.exit(main())
