"""Unit tests for dependency checking, timing and encoding helpers."""

import io
import logging
from pathlib import Path

import pytest

from mdlayout.exceptions import DependencyError
from mdlayout.logging_utils import NOISY_LOGGERS, TRACE_LOGGER, configure_logging
from mdlayout.utils.decorators import check_dependencies, debug_timer, requires_dependencies
from mdlayout.utils.encoding import load_text, read_text_with_encoding_detection
from mdlayout.utils.packages import check_version_requirement, get_package_version


@pytest.mark.unit
class TestRequiresDependencies:
    """Test the dependency-checking decorator."""

    def test_available_package_runs_method(self):
        """Test the wrapped method runs when the package is importable."""

        @requires_dependencies("test", [("pytest", "pytest", "")])
        def run():
            return "ran"

        assert run() == "ran"

    def test_missing_package_raises(self):
        """Test a missing package raises DependencyError with details."""

        @requires_dependencies("widget", [("no-such-package-xyz", "no_such_package_xyz", ">=1.0")])
        def run():
            return "ran"

        with pytest.raises(DependencyError) as exc_info:
            run()

        error = exc_info.value
        assert error.converter_name == "widget"
        assert error.missing_packages == [("no-such-package-xyz", ">=1.0")]
        assert "pip install" in str(error)
        assert isinstance(error.original_import_error, ImportError)

    def test_version_mismatch_raises(self):
        """Test an installed package below the required version is reported."""

        @requires_dependencies("widget", [("pytest", "pytest", ">=9999.0")])
        def run():
            return "ran"

        with pytest.raises(DependencyError) as exc_info:
            run()

        assert exc_info.value.missing_packages == []
        assert exc_info.value.version_mismatches[0][0] == "pytest"


@pytest.mark.unit
class TestPackages:
    """Test installed-version helpers."""

    def test_get_package_version(self):
        """Test the version of an installed distribution is returned."""
        assert get_package_version("pytest")
        assert get_package_version("no-such-package-xyz") is None

    def test_check_version_requirement(self):
        """Test version specifiers are evaluated against installed versions."""
        ok, version = check_version_requirement("pytest", ">=1.0")
        assert ok is True
        assert version

        ok, version = check_version_requirement("no-such-package-xyz", ">=1.0")
        assert ok is False
        assert version is None


@pytest.mark.unit
class TestDebugTimer:
    """Test the debug timing context manager."""

    def test_logs_when_debug_enabled(self, caplog):
        """Test elapsed time is logged at DEBUG level."""
        logger = logging.getLogger("mdlayout.test_timer")
        with caplog.at_level(logging.DEBUG, logger="mdlayout.test_timer"):
            with debug_timer(logger, "Layout"):
                pass

        assert any("Layout completed in" in record.message for record in caplog.records)

    def test_silent_when_debug_disabled(self, caplog):
        """Test nothing is logged above DEBUG level."""
        logger = logging.getLogger("mdlayout.test_timer_quiet")
        with caplog.at_level(logging.INFO, logger="mdlayout.test_timer_quiet"):
            with debug_timer(logger, "Layout"):
                pass

        assert not caplog.records


@pytest.mark.unit
class TestEncoding:
    """Test decoding of byte sources."""

    def test_utf8_with_bom(self):
        """Test a UTF-8 BOM is stripped."""
        assert read_text_with_encoding_detection("\ufeff# Título".encode("utf-8")) == "# Título"

    def test_plain_utf8(self):
        """Test plain UTF-8 is decoded unchanged."""
        assert read_text_with_encoding_detection("naïve café".encode("utf-8")) == "naïve café"

    def test_single_byte_encoding(self):
        """Test non-UTF-8 bytes are still decoded to text."""
        text = read_text_with_encoding_detection("caf\xe9 au lait".encode("latin-1"))
        assert text.startswith("caf")
        assert text.endswith(" au lait")
        assert len(text) == len("café au lait")

    def test_load_text_sources(self, tmp_path):
        """Test every accepted source kind yields the Markdown text."""
        path = tmp_path / "doc.md"
        path.write_bytes(b"# Title\n")

        assert load_text("# Title\n") == "# Title\n"
        assert load_text(b"# Title\n") == "# Title\n"
        assert load_text(Path(path)) == "# Title\n"
        assert load_text(io.BytesIO(b"# Title\n")) == "# Title\n"
        assert load_text(io.StringIO("# Title\n")) == "# Title\n"

    def test_str_is_content_not_path(self, tmp_path):
        """Test a string naming an existing file is still treated as content."""
        path = tmp_path / "doc.md"
        path.write_text("# Title\n")

        assert load_text(str(path)) == str(path)


@pytest.mark.unit
class TestCheckDependencies:
    """Test the dependency probe used by the decorator."""

    def test_reports_missing_and_satisfied(self):
        """Test only unavailable packages are reported."""
        missing, mismatches, error = check_dependencies(
            [("pytest", "pytest", ">=1.0"), ("no-such-package-xyz", "no_such_package_xyz", "")]
        )

        assert missing == [("no-such-package-xyz", "")]
        assert mismatches == []
        assert isinstance(error, ImportError)


@pytest.mark.unit
@pytest.mark.usefixtures("restore_logging")
class TestConfigureLogging:
    """Test root logger setup for the command line."""

    def test_level_name(self):
        """Test level names are resolved."""
        root = configure_logging("info")

        assert root.level == logging.INFO
        assert len(root.handlers) == 1

    def test_unknown_level_name_defaults_to_info(self):
        """Test an unknown level name falls back to INFO."""
        assert configure_logging("chatty").level == logging.INFO

    def test_debug_mutes_node_trace(self):
        """Test plain DEBUG output leaves out the per-node trace and library noise."""
        configure_logging(logging.DEBUG)

        assert not logging.getLogger(TRACE_LOGGER).isEnabledFor(logging.DEBUG)
        for name in NOISY_LOGGERS:
            assert not logging.getLogger(name).isEnabledFor(logging.DEBUG)

    def test_trace_mode_enables_node_trace(self):
        """Test trace mode lets the per-node trace through."""
        configure_logging(logging.DEBUG, trace_mode=True)

        assert logging.getLogger(TRACE_LOGGER).isEnabledFor(logging.DEBUG)

    def test_log_file(self, tmp_path):
        """Test records are also written to the log file."""
        log_file = tmp_path / "run.log"
        root = configure_logging(logging.INFO, log_file=str(log_file))

        logging.getLogger("mdlayout.test").info("hello file")
        for handler in root.handlers:
            handler.flush()

        assert len(root.handlers) == 2
        assert "hello file" in log_file.read_text(encoding="utf-8")
