"""Command-line interface for the json2video tool server."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

import yaml

from .api_client import Json2VideoClient
from .config import ConfigError, ServerConfig, load_config
from .server import StdioServer
from .tools import ToolDispatcher, get_all_tool_schemas

LOGGER = logging.getLogger("json2video_mcp.cli")


def _add_config_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--config", default=None, help="YAML config file")
    parser.add_argument("--api-key", default=None, help="json2video API key (overrides JSON2VIDEO_API_KEY)")
    parser.add_argument("--base-url", default=None, help="json2video API base URL")
    parser.add_argument("--timeout", type=float, default=None, help="HTTP timeout in seconds (default: none)")
    parser.add_argument("--log-level", default=None, help="Logging level (default: INFO)")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="json2video tool server")
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve_parser = subparsers.add_parser("serve", help="Serve tools over stdin/stdout")
    _add_config_arguments(serve_parser)

    call_parser = subparsers.add_parser("call", help="Run a single tool and print the result")
    call_parser.add_argument("tool", help="Tool name, e.g. list_templates")
    call_parser.add_argument("--args", default="{}", help="Tool arguments as a JSON object")
    _add_config_arguments(call_parser)

    tools_parser = subparsers.add_parser("tools", help="Print tool descriptors")
    tools_parser.add_argument("--format", choices=["json", "yaml"], default="json", help="Output format")

    return parser


def resolve_config(args: argparse.Namespace) -> ServerConfig:
    return load_config(
        Path(args.config) if args.config else None,
        api_key=args.api_key,
        base_url=args.base_url,
        timeout=args.timeout,
        log_level=args.log_level,
    )


def configure_logging(level: str) -> None:
    # stdout carries the protocol; diagnostics go to stderr
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        stream=sys.stderr,
    )


def build_dispatcher(config: ServerConfig) -> tuple[ToolDispatcher, Json2VideoClient]:
    client = Json2VideoClient(base_url=config.base_url, timeout=config.timeout)
    return ToolDispatcher(client, default_api_key=config.api_key), client


def serve(config: ServerConfig) -> int:
    dispatcher, client = build_dispatcher(config)
    try:
        StdioServer(dispatcher).serve()
    finally:
        client.close()
    return 0


def call(config: ServerConfig, tool: str, raw_args: str) -> int:
    try:
        arguments = json.loads(raw_args)
    except json.JSONDecodeError as exc:
        LOGGER.error("Invalid JSON for --args: %s", exc)
        return 2

    dispatcher, client = build_dispatcher(config)
    try:
        result = dispatcher.dispatch(tool, arguments)
    finally:
        client.close()
    print(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
    return 0 if result.success else 1


def print_tools(fmt: str) -> int:
    schemas = get_all_tool_schemas()
    if fmt == "yaml":
        print(yaml.safe_dump(schemas, allow_unicode=True, sort_keys=False), end="")
    else:
        print(json.dumps(schemas, indent=2, ensure_ascii=False))
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "tools":
        return print_tools(args.format)

    try:
        config = resolve_config(args)
    except ConfigError as exc:
        configure_logging("INFO")
        LOGGER.error("%s", exc)
        return 2
    configure_logging(config.log_level)

    if args.command == "serve":
        return serve(config)
    if args.command == "call":
        return call(config, args.tool, args.args)
    parser.error(f"Unknown command {args.command}")
    return 2


if __name__ == "__main__":
    sys.exit(main())
