"""Tests for structured logging."""

import json
import logging
from pathlib import Path

import pytest
import structlog

from comprel.config.models import LoggingConfig, LogOutputConfig
from comprel.core.logging import (
    _ThirdPartyConsoleFilter,
    analysis_context,
    bind_request,
    clear_request,
    configure_logging,
    get_log_file_path,
    get_logger,
    get_request_id,
)


class TestRequestCorrelation:
    """Correlation fields bound through structlog contextvars."""

    def setup_method(self) -> None:
        clear_request()

    def test_given_bind_request_then_id_retrievable(self) -> None:
        rid = bind_request("analyze_component_dependencies")

        assert len(rid) == 12  # uuid4().hex[:12]
        assert get_request_id() == rid
        assert structlog.contextvars.get_contextvars()["tool"] == "analyze_component_dependencies"

    def test_given_bound_request_when_clear_then_removed(self) -> None:
        bind_request("analyze_component_conflicts")

        clear_request()

        assert get_request_id() is None
        assert structlog.contextvars.get_contextvars() == {}

    def test_given_analysis_context_when_exited_then_fields_unbound(self) -> None:
        bind_request("analyze_component_dependencies")

        with analysis_context(component="dropdown"):
            assert structlog.contextvars.get_contextvars()["component"] == "dropdown"

        assert "component" not in structlog.contextvars.get_contextvars()
        assert get_request_id() is not None


class TestLoggingConfiguration:
    """Logging configuration tests."""

    def setup_method(self) -> None:
        """Reset structlog and stdlib logging before each test."""
        structlog.reset_defaults()
        logging.getLogger().handlers.clear()
        clear_request()

    def teardown_method(self) -> None:
        root = logging.getLogger()
        for handler in root.handlers[:]:
            root.removeHandler(handler)
            handler.close()

    def test_given_json_file_output_when_log_then_valid_json(self, tmp_path: Path) -> None:
        """JSON output carries event, fields, timestamp and level."""
        # Given
        log_file = tmp_path / "comprel.log"
        config = LoggingConfig(outputs=[LogOutputConfig(format="json", destination=str(log_file))])
        configure_logging(config=config)

        # When
        get_logger("test").info("test message", key="value")

        # Then
        data = json.loads(log_file.read_text().strip().splitlines()[-1])
        assert data["event"] == "test message"
        assert data["key"] == "value"
        assert data["level"] == "info"
        assert "timestamp" in data

    def test_given_request_id_when_log_then_included(self, tmp_path: Path) -> None:
        """Active request ID is attached to every event."""
        log_file = tmp_path / "comprel.log"
        configure_logging(
            config=LoggingConfig(outputs=[LogOutputConfig(format="json", destination=str(log_file))])
        )
        rid = bind_request("analyze_component_dependencies")

        with analysis_context(component="dropdown"):
            get_logger("comprel.relations.ops").info("dependency_analysis_complete")

        data = json.loads(log_file.read_text().strip().splitlines()[-1])
        assert data["request_id"] == rid
        assert data["tool"] == "analyze_component_dependencies"
        assert data["component"] == "dropdown"

    def test_given_config_object_when_configure_then_takes_precedence(self, tmp_path: Path) -> None:
        """LoggingConfig object takes precedence over simple params."""
        # Given
        log_file = tmp_path / "test.log"
        config = LoggingConfig(
            level="DEBUG",
            outputs=[LogOutputConfig(format="json", destination=str(log_file))],
        )

        # When
        configure_logging(config=config, json_format=False, level="ERROR")
        get_logger().debug("debug msg")

        # Then
        assert "debug msg" in log_file.read_text()
        assert get_log_file_path() == log_file

    def test_given_multi_output_config_when_configure_then_levels_respected(
        self, tmp_path: Path
    ) -> None:
        """Multiple outputs receive logs according to their levels."""
        # Given
        debug_file = tmp_path / "debug.log"
        info_file = tmp_path / "info.log"
        config = LoggingConfig(
            level="DEBUG",
            outputs=[
                LogOutputConfig(format="json", destination=str(info_file), level="INFO"),
                LogOutputConfig(format="console", destination=str(debug_file)),
            ],
        )

        # When
        configure_logging(config=config)
        logger = get_logger()
        logger.debug("debug only")
        logger.info("info msg")

        # Then
        info_content = info_file.read_text()
        assert "info msg" in info_content
        assert "debug only" not in info_content

        debug_content = debug_file.read_text()
        assert "debug only" in debug_content
        assert "info msg" in debug_content

    def test_given_console_only_when_configure_then_no_log_file(self) -> None:
        configure_logging(level="WARNING")
        assert get_log_file_path() is None

    def test_given_reconfigure_when_called_twice_then_single_handler(
        self, tmp_path: Path
    ) -> None:
        """Reconfiguring replaces handlers instead of stacking them."""
        config = LoggingConfig(outputs=[LogOutputConfig(destination=str(tmp_path / "a.log"))])

        configure_logging(config=config)
        configure_logging(config=config)

        assert len(logging.getLogger().handlers) == 1

    def test_given_stdio_server_when_configure_then_stdout_output_dropped(
        self, tmp_path: Path
    ) -> None:
        """stdout carries the MCP protocol while serving; only the file output remains."""
        config = LoggingConfig(
            outputs=[
                LogOutputConfig(destination="stdout"),
                LogOutputConfig(destination=str(tmp_path / "serve.log")),
            ]
        )

        configure_logging(config=config, stdio_server=True)

        handlers = logging.getLogger().handlers
        assert len(handlers) == 1
        assert isinstance(handlers[0], logging.FileHandler)

    def test_given_console_output_then_third_party_filter_attached(self) -> None:
        configure_logging(level="DEBUG")

        (handler,) = logging.getLogger().handlers
        assert any(isinstance(f, _ThirdPartyConsoleFilter) for f in handler.filters)


class TestThirdPartyConsoleFilter:
    """Console outputs keep comprel chatter and only serious third-party records."""

    @pytest.mark.parametrize(
        ("name", "level", "expected"),
        [
            ("comprel.relations.ops", logging.DEBUG, True),
            ("sqlalchemy.engine", logging.INFO, False),
            ("fastmcp.server", logging.WARNING, True),
        ],
    )
    def test_filter(self, name: str, level: int, expected: bool) -> None:
        record = logging.LogRecord(name, level, __file__, 1, "msg", None, None)

        assert _ThirdPartyConsoleFilter().filter(record) is expected


@pytest.mark.parametrize("name", ["comprel.relations", None])
def test_get_logger_returns_bound_logger(name: str | None) -> None:
    assert get_logger(name) is not None
