"""Tests for ace_uploader.main module."""

import json
import logging
from unittest.mock import Mock, patch

import pytest

from ace_uploader.main import configure_logging, describe_config, main, parse_args
from ace_uploader.mcp_logger import McpLogHandler
from ace_uploader.settings import load_config
from ace_uploader.strategy import select_upload_strategy


class TestParseArgs:
    """Test cases for argument parsing."""

    def test_parse_args_defaults(self, config_argv):
        """Test defaults when only upload settings are given."""
        args = parse_args(config_argv)

        assert args.log_level == "INFO"  # Default
        assert args.rich_logs is False
        assert args.blob_count is None
        assert args.print_config_and_exit is False

    def test_parse_args_all_options(self, config_argv):
        """Test parsing all entrypoint options next to upload settings."""
        args = parse_args(
            config_argv
            + [
                "--enable-log",
                "--log-level",
                "DEBUG",
                "--rich-logs",
                "--blob-count",
                "750",
                "--print-config-and-exit",
            ]
        )

        assert args.log_level == "DEBUG"
        assert args.rich_logs is True
        assert args.blob_count == 750
        assert args.print_config_and_exit is True

    def test_parse_args_invalid_log_level(self):
        """Test parsing with invalid log level."""
        with pytest.raises(SystemExit):
            parse_args(["--log-level", "INVALID"])

    def test_parse_args_invalid_blob_count(self):
        """Test parsing with a non numeric blob count."""
        with pytest.raises(SystemExit):
            parse_args(["--blob-count", "many"])


class TestConfigureLogging:
    """Test cases for logging configuration."""

    @patch("ace_uploader.main.logging.basicConfig")
    @patch("ace_uploader.main.logging.getLogger")
    def test_configure_logging_info_level(self, mock_get_logger, mock_basic_config):
        """Test logging configuration with INFO level."""
        mock_get_logger.return_value = Mock()

        configure_logging("INFO")

        mock_basic_config.assert_called_once()
        call_args = mock_basic_config.call_args
        assert call_args[1]["level"] == 20  # logging.INFO
        assert "%(asctime)s" in call_args[1]["format"]

        # Check that specific loggers are silenced
        mock_get_logger.assert_any_call("mcp")
        mock_get_logger.assert_any_call("httpx")

    @patch("ace_uploader.main.logging.basicConfig")
    def test_configure_logging_rich(self, mock_basic_config):
        """Test logging configuration with the rich handler."""
        from rich.logging import RichHandler

        configure_logging("DEBUG", use_rich=True)

        call_args = mock_basic_config.call_args
        assert call_args[1]["level"] == 10  # logging.DEBUG
        assert isinstance(call_args[1]["handlers"][0], RichHandler)


class TestDescribeConfig:
    """Test cases for the printable configuration."""

    def test_token_masked(self, config_argv):
        """Test that the token is never printed."""
        described = describe_config(load_config(config_argv))

        assert described["token"] == "****"
        assert described["base_url"] == "https://example.com"
        assert "upload_strategy" not in described
        json.dumps(described)

    def test_with_strategy(self, config_argv):
        """Test that the strategy is included when given."""
        described = describe_config(
            load_config(config_argv), select_upload_strategy(2500)
        )

        assert described["upload_strategy"] == {
            "batch_size": 70,
            "concurrency": 4,
            "timeout": 90000,
            "scale_name": "extra-large",
        }


class TestMain:
    """Test cases for main function."""

    @patch("ace_uploader.main.configure_logging")
    def test_main_print_config_and_exit(self, mock_configure_logging, capsys):
        """Test printing the resolved configuration."""
        result = main(
            [
                "--base-url",
                "example.com/",
                "--token",
                "secret",
                "--blob-count",
                "120",
                "--print-config-and-exit",
            ]
        )

        assert result == 0
        mock_configure_logging.assert_called_once_with("INFO", False)

        output = json.loads(capsys.readouterr().out)
        assert output["base_url"] == "https://example.com"
        assert output["token"] == "****"
        assert output["batch_size"] == 10
        assert output["max_lines_per_blob"] == 800
        assert ".py" in output["text_extensions"]
        assert output["exclude_patterns"][-1] == ".ace-tool"
        assert output["upload_strategy"]["scale_name"] == "medium"

    @patch("ace_uploader.main.configure_logging")
    def test_main_success(self, mock_configure_logging, config_argv, capsys):
        """Test a plain run that only validates the configuration."""
        result = main(config_argv)

        assert result == 0
        assert capsys.readouterr().out == ""

    @patch("ace_uploader.main.configure_logging")
    def test_main_missing_required_args(self, mock_configure_logging, caplog):
        """Test main function with missing required arguments."""
        with caplog.at_level(logging.ERROR):
            result = main(["--base-url", "example.com"])

        assert result == 1
        assert "Missing required argument: --token" in caplog.text

    @patch("ace_uploader.main.configure_logging")
    def test_main_reports_enable_log(
        self, mock_configure_logging, config_argv, capsys
    ):
        """Test that --enable-log is reported without attaching an MCP handler."""
        result = main(config_argv + ["--enable-log", "--print-config-and-exit"])

        assert result == 0
        assert json.loads(capsys.readouterr().out)["enable_log"] is True
        assert not any(
            isinstance(handler, McpLogHandler)
            for handler in logging.getLogger("ace_uploader").handlers
        )

    @patch("ace_uploader.main.configure_logging")
    def test_main_token_looking_like_option(self, mock_configure_logging, capsys):
        """Test that a token value is never read as an entrypoint option."""
        result = main(
            ["--base-url", "example.com", "--token", "--print-config-and-exit"]
        )

        assert result == 0
        assert capsys.readouterr().out == ""

    @patch("ace_uploader.main.ConfigStore")
    @patch("ace_uploader.main.configure_logging")
    def test_main_token_consumes_value_option(
        self, mock_configure_logging, mock_store_class
    ):
        """Test that a value option after --token becomes the token."""
        argv = ["--base-url", "example.com", "--token", "--blob-count"]

        result = main(argv)

        assert result == 0
        mock_store_class.return_value.init.assert_called_once_with(argv)
        assert load_config(argv).token == "--blob-count"

    @patch("ace_uploader.main.configure_logging")
    @patch("ace_uploader.main.select_upload_strategy")
    def test_main_unexpected_error(
        self, mock_select, mock_configure_logging, config_argv
    ):
        """Test that unexpected errors give a non-zero exit code."""
        mock_select.side_effect = RuntimeError("boom")

        result = main(config_argv + ["--blob-count", "5"])

        assert result == 1

    @patch("ace_uploader.main.configure_logging")
    def test_main_reads_sys_argv(self, mock_configure_logging):
        """Test that sys.argv is used when no arguments are passed."""
        with patch("sys.argv", ["ace-uploader"]):
            result = main()

        assert result == 1
