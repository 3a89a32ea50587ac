"""Tests for the command-line interface."""

import json
import logging

import pytest

from regression_test.cli import main
from regression_test.storage import write_baseline


@pytest.fixture
def project(temp_dir, monkeypatch):
    """A project root holding a few baselines, used as working directory."""
    monkeypatch.chdir(temp_dir)
    data_dir = temp_dir / "regtest_data"
    write_baseline(data_dir / "tests" / "test_calc" / "test_add.json", ["4", "five"])
    write_baseline(data_dir / "tests" / "test_calc" / "test_sub.json", ["1"])
    return temp_dir


@pytest.fixture
def caplog_info(caplog):
    caplog.set_level(logging.INFO, logger="regression_test")
    return caplog


class TestListCommand:
    """Tests for `list`."""

    def test_lists_baselines(self, project, caplog_info):
        """Test that every baseline is listed with its entry count."""
        assert main(["list"]) == 0

        assert "Found 2 baselines" in caplog_info.text
        assert "test_add.json (2 entries)" in caplog_info.text
        assert "test_sub.json (1 entries)" in caplog_info.text

    def test_explicit_root(self, project, temp_dir, caplog_info, monkeypatch):
        """Test listing a root other than the working directory."""
        elsewhere = temp_dir / "elsewhere"
        elsewhere.mkdir()
        monkeypatch.chdir(elsewhere)

        assert main(["list", str(project)]) == 0
        assert "Found 2 baselines" in caplog_info.text

    def test_quiet_list(self, project, caplog_info):
        """Test that --quiet only prints the summary line."""
        assert main(["--quiet", "list"]) == 0

        assert "Found 2 baselines" in caplog_info.text
        assert "test_add.json" not in caplog_info.text


class TestShowCommand:
    """Tests for `show`."""

    def test_shows_entries(self, project, caplog_info):
        """Test that entries are printed with their index."""
        path = project / "regtest_data" / "tests" / "test_calc" / "test_add.json"

        assert main(["show", str(path)]) == 0
        assert "[0] 4" in caplog_info.text
        assert "[1] five" in caplog_info.text

    def test_missing_baseline(self, project, caplog_info):
        """Test that showing a missing baseline fails."""
        assert main(["show", "nope.json"]) == 1
        assert "No baseline at nope.json" in caplog_info.text

    def test_malformed_baseline(self, project, caplog_info):
        """Test that showing a malformed baseline fails cleanly."""
        (project / "bad.json").write_text("{")

        assert main(["show", "bad.json"]) == 1
        assert "Failed to read regression baseline" in caplog_info.text


class TestCheckCommand:
    """Tests for `check`."""

    def test_all_valid(self, project, caplog_info):
        """Test that a clean data directory passes."""
        assert main(["check"]) == 0
        assert "Checked 2 baselines" in caplog_info.text

    def test_reports_malformed(self, project, caplog_info):
        """Test that malformed baselines make the check fail."""
        (project / "regtest_data" / "tests" / "broken.json").write_text("[1]")

        assert main(["check"]) == 1
        assert "broken.json" in caplog_info.text
        assert "1 malformed" in caplog_info.text


class TestDiffCommand:
    """Tests for `diff`."""

    def test_identical(self, project, caplog_info):
        """Test comparing a baseline with a copy of itself."""
        write_baseline(project / "a.json", ["1", "2"])
        write_baseline(project / "b.json", ["1", "2"])

        assert main(["diff", "a.json", "b.json"]) == 0
        assert "Compared 2 entries: 0 differ" in caplog_info.text

    def test_different(self, project, caplog_info):
        """Test that differing entries are shown as a diff."""
        write_baseline(project / "a.json", ["1", "2"])
        write_baseline(project / "b.json", ["1", "3"])

        assert main(["diff", "a.json", "b.json"]) == 1
        assert "✗ Entries differ at index 1" in caplog_info.text
        assert "- 2" in caplog_info.text
        assert "+ 3" in caplog_info.text

    def test_different_counts(self, project, caplog_info):
        """Test that a count difference fails even when the prefix matches."""
        write_baseline(project / "a.json", ["1", "2"])
        write_baseline(project / "b.json", ["1"])

        assert main(["diff", "a.json", "b.json"]) == 1
        assert "Entry counts differ: 2 expected, 1 actual" in caplog_info.text


class TestConfigCommand:
    """Tests for `config`."""

    def test_init(self, project):
        """Test creating the default configuration file."""
        assert main(["config", "--init"]) == 0

        assert json.loads((project / "regtest_config.json").read_text())["data_dir"] == "regtest_data"

    def test_show_uses_config_file(self, project, caplog_info):
        """Test that --config selects the configuration shown."""
        path = project / "custom.json"
        path.write_text(json.dumps({"data_dir": "golden"}))

        assert main(["--config", str(path), "config", "--show"]) == 0
        assert "data_dir: golden" in caplog_info.text

    def test_no_command(self, project):
        """Test that running without a command prints help and fails."""
        assert main([]) == 1
