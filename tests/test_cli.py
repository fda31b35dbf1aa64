"""Tests for cli.py: argument parsing, token handling, server startup."""

import json
from unittest.mock import MagicMock, patch

import pytest

from todoist_mcp import config
from todoist_mcp.cli import _error_type_from_message, build_parser, main
from todoist_mcp.client import TodoistClient


def _stderr_json(capsys):
    return json.loads(capsys.readouterr().err.strip().splitlines()[-1])


class TestParser:
    def test_defaults(self):
        ns = build_parser().parse_args([])
        assert ns.transport == "stdio"
        assert ns.host == "127.0.0.1"
        assert ns.port == 8000
        assert ns.verbose is False
        assert ns.save_token is None

    def test_rejects_unknown_transport(self):
        with pytest.raises(SystemExit) as exc_info:
            build_parser().parse_args(["--transport", "websocket"])
        assert exc_info.value.code == 2

    @pytest.mark.parametrize("port", ["0", "70000", "http"])
    def test_rejects_bad_port(self, port):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--port", port])

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0
        assert capsys.readouterr().out.strip() == f"todoist-mcp {config.VERSION}"


class TestErrorType:
    @pytest.mark.parametrize(
        "message,expected",
        [
            ("[TOKEN_INVALID] rejected", "token_invalid"),
            ("[SETUP_NEEDED] missing", "setup_needed"),
            ("[ERROR] bad", "error"),
            ("something else", "cli_error"),
        ],
    )
    def test_prefixes(self, message, expected):
        assert _error_type_from_message(message) == expected


class TestMissingToken:
    def test_exits_2_with_json_error(self, monkeypatch, capsys):
        monkeypatch.setattr(config, "API_TOKEN", "")
        with patch("todoist_mcp.cli.create_server") as mock_create:
            with pytest.raises(SystemExit) as exc_info:
                main([])
        assert exc_info.value.code == 2
        mock_create.assert_not_called()
        payload = _stderr_json(capsys)
        assert payload["ok"] is False
        assert payload["error"]["type"] == "setup_needed"
        assert payload["error"]["exit_code"] == 2


class TestSaveToken:
    def test_saves_and_exits(self, tmp_path, monkeypatch, capsys):
        env_file = tmp_path / ".env"
        monkeypatch.setattr(config, "ENV_PATH", str(env_file))
        with pytest.raises(SystemExit) as exc_info:
            main(["--save-token", " tok-123 "])
        assert exc_info.value.code == 0
        assert env_file.read_text() == "TODOIST_API_TOKEN=tok-123\n"
        assert config.API_TOKEN == "tok-123"
        assert "tok-123" not in capsys.readouterr().out

    def test_blank_token_rejected(self, tmp_path, monkeypatch, capsys):
        monkeypatch.setattr(config, "ENV_PATH", str(tmp_path / ".env"))
        with pytest.raises(SystemExit) as exc_info:
            main(["--save-token", "  "])
        assert exc_info.value.code == 1
        assert _stderr_json(capsys)["error"]["type"] == "error"
        assert not (tmp_path / ".env").exists()


class TestStartup:
    def test_stdio(self, capsys):
        server = MagicMock()
        with patch("todoist_mcp.cli.create_server", return_value=server) as mock_create:
            main([])
        (client,), _ = mock_create.call_args
        assert isinstance(client, TodoistClient)
        server.run.assert_called_once_with(transport="stdio")
        captured = capsys.readouterr()
        assert "Todoist MCP server running on stdio" in captured.err
        assert captured.out == ""

    def test_http_transport_binds_host_and_port(self):
        server = MagicMock()
        with patch("todoist_mcp.cli.create_server", return_value=server):
            main(["--transport", "streamable-http", "--host", "0.0.0.0", "--port", "9000"])
        assert server.settings.host == "0.0.0.0"
        assert server.settings.port == 9000
        server.run.assert_called_once_with(transport="streamable-http")

    def test_verbose_enables_http_log(self):
        with patch("todoist_mcp.cli.create_server", return_value=MagicMock()):
            main(["--verbose"])
        assert config.HTTP_LOG_ENABLED is True
