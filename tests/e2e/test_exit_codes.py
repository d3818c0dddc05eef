"""End-to-end tests for CLI exit codes.

These run the installed package as a subprocess, the way scripts and
automation invoke it.
"""

import subprocess
import sys

import pytest


@pytest.mark.e2e
class TestExitCodes:
    """Test suite for CLI exit codes."""

    def _run_cli(self, args: list[str], cwd=None) -> subprocess.CompletedProcess:
        """Run ``python -m mdlayout`` with the given arguments."""
        cmd = [sys.executable, "-m", "mdlayout"] + args
        return subprocess.run(cmd, capture_output=True, text=True, cwd=cwd)

    def test_exit_code_success(self, tmp_path):
        """Test exit code 0 for a successful dump."""
        md_file = tmp_path / "test.md"
        md_file.write_text("# Test\n\nBody\n")

        result = self._run_cli([str(md_file), "--dump", "--no-config"], cwd=tmp_path)

        assert result.returncode == 0
        assert "Test" in result.stdout

    def test_exit_code_nonexistent_file(self, tmp_path):
        """Test exit code 4 (FILE_ERROR) for a nonexistent file."""
        result = self._run_cli([str(tmp_path / "does_not_exist.md"), "--no-config"], cwd=tmp_path)

        assert result.returncode == 4
        assert "Error" in result.stderr

    def test_exit_code_invalid_config(self, tmp_path):
        """Test exit code 3 (VALIDATION_ERROR) for a malformed config file."""
        md_file = tmp_path / "test.md"
        md_file.write_text("# Test\n")
        config = tmp_path / "config.json"
        config.write_text("{ invalid json }")

        result = self._run_cli([str(md_file), "--config", str(config)], cwd=tmp_path)

        assert result.returncode == 3

    def test_exit_code_missing_argument(self):
        """Test argparse exits with code 2 when the input is missing."""
        result = self._run_cli([])

        assert result.returncode == 2
