"""
todoist-mcp: start the Todoist MCP server.
"""

import argparse
import json
import sys

from todoist_mcp import config
from todoist_mcp.api import TodoistApi
from todoist_mcp.client import TodoistClient
from todoist_mcp.exceptions import TodoistError
from todoist_mcp.mcp_server import create_server

TRANSPORTS = ("stdio", "sse", "streamable-http")


def _port(value):
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError("must be an integer between 1 and 65535") from exc
    if not 0 < parsed < 65536:
        raise argparse.ArgumentTypeError("must be an integer between 1 and 65535")
    return parsed


def build_parser():
    parser = argparse.ArgumentParser(
        prog="todoist-mcp",
        description="MCP server for Todoist projects, tasks, sections, labels and comments",
    )
    parser.add_argument("--transport", choices=TRANSPORTS, default="stdio")
    parser.add_argument("--host", default="127.0.0.1", help="bind host for HTTP transports")
    parser.add_argument("--port", type=_port, default=8000, help="bind port for HTTP transports")
    parser.add_argument(
        "--verbose", action="store_true", help="log HTTP requests to stderr"
    )
    parser.add_argument(
        "--version", action="version", version=f"todoist-mcp {config.VERSION}"
    )
    parser.add_argument(
        "--save-token",
        metavar="TOKEN",
        help="store TODOIST_API_TOKEN in .env and exit",
    )
    return parser


def _error_type_from_message(message):
    if message.startswith("[TOKEN_INVALID]"):
        return "token_invalid"
    if message.startswith("[SETUP_NEEDED]"):
        return "setup_needed"
    if message.startswith("[ERROR]"):
        return "error"
    return "cli_error"


def _emit_cli_error(err):
    msg = str(err)
    payload = {
        "ok": False,
        "schema_version": config.CONTRACT_SCHEMA_VERSION,
        "error": {
            "type": _error_type_from_message(msg),
            "message": msg,
            "exit_code": getattr(err, "exit_code", 1),
        },
    }
    print(json.dumps(payload, ensure_ascii=False), file=sys.stderr)


def _save_token(token):
    token = token.strip()
    if not token:
        raise TodoistError("[ERROR] --save-token needs a non-empty token.")
    config.save_env_value("TODOIST_API_TOKEN", token)
    config.API_TOKEN = token
    print(f"Saved TODOIST_API_TOKEN to {config.ENV_PATH}", file=sys.stderr)


def main(argv=None):
    ns = build_parser().parse_args(argv)
    if ns.verbose:
        config.HTTP_LOG_ENABLED = True

    try:
        if ns.save_token is not None:
            _save_token(ns.save_token)
            sys.exit(0)
        client = TodoistClient(TodoistApi(config.API_TOKEN))
        mcp = create_server(client)
    except TodoistError as e:
        _emit_cli_error(e)
        sys.exit(e.exit_code)

    if ns.transport != "stdio":
        mcp.settings.host = ns.host
        mcp.settings.port = ns.port
    # stdout belongs to the stdio transport
    print(f"Todoist MCP server running on {ns.transport}", file=sys.stderr)
    mcp.run(transport=ns.transport)


if __name__ == "__main__":
    main()
