"""Tests for perch.cli — flag parsing and startup."""

from unittest.mock import MagicMock, patch

import pytest

from perch.cli import build_parser, config_from_args, main
from perch.config import ServerConfig


def parse(*argv: str) -> ServerConfig:
    return config_from_args(build_parser().parse_args(list(argv)))


class TestFlags:
    def test_defaults(self) -> None:
        cfg = parse()
        assert cfg.rewrite_rules == ()
        assert cfg.public_folder == "./public"
        assert cfg.port == 8080
        assert cfg.host == "0.0.0.0"

    def test_single_rewrite_rule(self) -> None:
        assert parse("--rewriteRule", "/a:/x").rewrite_rules == ("/a:/x",)

    def test_repeated_rewrite_rules(self) -> None:
        cfg = parse("--rewriteRule", "/a:/x", "--rewriteRule", "/b:/y")
        assert cfg.rewrite_rules == ("/a:/x", "/b:/y")

    def test_public_folder_and_port(self) -> None:
        cfg = parse("--publicFolder", "dist", "--port", "3000")
        assert cfg.public_folder == "dist"
        assert cfg.port == 3000

    def test_non_integer_port_is_usage_error(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            parse("--port", "http")
        assert exc_info.value.code == 2


class TestMain:
    @patch("perch.cli._run.configure_logging")
    @patch("perch.server.production.run_production_server")
    def test_default_server(self, mock_server: MagicMock, mock_logging: MagicMock) -> None:
        main([])

        mock_server.assert_called_once()
        app = mock_server.call_args[0][0]
        assert app.config == ServerConfig()
        assert mock_server.call_args[1] == {"host": "0.0.0.0", "port": 8080, "log_level": "info"}
        mock_logging.assert_called_once_with("info")

    @patch("perch.cli._run.configure_logging")
    @patch("perch.server.production.run_production_server")
    def test_rewrite_table_from_flags(self, mock_server: MagicMock, _: MagicMock) -> None:
        main(["--rewriteRule", "/a:/x", "--rewriteRule", "/b:/y", "--rewriteRule", "/a:/z"])

        app = mock_server.call_args[0][0]
        assert dict(app.rewrites) == {"/a": "/z", "/b": "/y"}

    @patch("perch.server.production.run_production_server")
    def test_invalid_rule_exits_1(
        self, mock_server: MagicMock, capsys: pytest.CaptureFixture[str]
    ) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--rewriteRule", "broken"])

        assert exc_info.value.code == 1
        assert "Error:" in capsys.readouterr().err
        mock_server.assert_not_called()


class TestConfigureLogging:
    def test_info_to_stdout_errors_to_stderr(self, capsys: pytest.CaptureFixture[str]) -> None:
        import logging

        from perch.cli._run import configure_logging

        logger = logging.getLogger("perch")
        try:
            configure_logging("info")
            logging.getLogger("perch.server").info("[_] Serve \"/a\".")
            logging.getLogger("perch.server").error("[!] Can't serve \"/b\".")

            captured = capsys.readouterr()
            assert captured.out == '[_] Serve "/a".\n'
            assert captured.err == "[!] Can't serve \"/b\".\n"
        finally:
            for handler in list(logger.handlers):
                logger.removeHandler(handler)
            logger.setLevel(logging.NOTSET)
