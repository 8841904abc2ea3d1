#!/usr/bin/env python3
"""
Storefront contract CLI - Main entry point.

Usage:
    storefront-contract operations [--overridden | --added]
    storefront-contract describe readCategory
    storefront-contract invoke searchPage --params '{"search": "shoe", "limit": 10}'
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import re
import sys
from typing import Any, List, Optional

from pydantic import TypeAdapter

from .. import __version__
from ..catalog import STORE_API_CATALOG
from ..config import ClientConfig, load_config
from ..core.defs import OperationContract
from ..core.errors import ConfigurationError, Fault, StructuredApiFault, UnknownOperation
from ..runtime.dispatcher import Dispatcher
from ..runtime.transport import HttpxTransport

logger = logging.getLogger(__name__)

_QUALIFIED_NAME = re.compile(r"\b(?:[A-Za-z_]\w*\.)+([A-Za-z_]\w*)")


def _type_name(schema: Any) -> str:
    if schema is None:
        return "-"
    if isinstance(schema, type):
        return schema.__name__
    return _QUALIFIED_NAME.sub(r"\1", str(schema))


def _resolve_config(args: argparse.Namespace) -> ClientConfig:
    """Config file given on the command line, else ./storefront.yaml, else environment."""
    if args.config:
        config = load_config(args.config)
        if config is None:
            raise ConfigurationError(f"Config file {args.config} not found")
    else:
        config = load_config() or ClientConfig.from_env()

    if args.context_token:
        config = config.with_context_token(args.context_token)
    return config


def cmd_operations(args: argparse.Namespace) -> int:
    """List operation keys of the composed catalog."""
    catalog = STORE_API_CATALOG

    if args.overridden:
        names = sorted(catalog.overridden)
    elif args.added:
        names = sorted(catalog.added)
    else:
        names = sorted(catalog)

    for name in names:
        marker = ""
        if name in catalog.added:
            marker = "  [added]"
        elif name in catalog.overridden:
            marker = "  [overridden]"
        print(f"{catalog[name].key}{marker}")

    return 0


def describe_contract(contract: OperationContract) -> str:
    """Human readable summary of a contract."""
    lines = [str(contract.key)]
    if contract.summary:
        lines.append(f"  {contract.summary}")

    if contract.parameters:
        lines.append("Parameters:")
        for param in contract.parameters:
            required = "required" if param.required else "optional"
            lines.append(
                f"  {param.wire} ({param.location}, {_type_name(param.schema)}, {required})"
                + (f" - {param.description}" if param.description else "")
            )

    if contract.request_body is not None:
        body = contract.request_body
        required = "required" if body.required else "optional"
        lines.append(f"Body: {_type_name(body.schema)} ({body.content_type}, {required})")

    lines.append("Responses:")
    for status, response in sorted(contract.responses.items()):
        lines.append(
            f"  {status}: {_type_name(response.schema)}"
            + (f" - {response.description}" if response.description else "")
        )

    return "\n".join(lines)


def cmd_describe(args: argparse.Namespace) -> int:
    """Print one operation contract."""
    try:
        contract = STORE_API_CATALOG.resolve(args.operation)
    except UnknownOperation as e:
        print(f"Error: {e}")
        return 1

    print(describe_contract(contract))
    return 0


async def _invoke(config: ClientConfig, operation: str, params: dict[str, Any]) -> Any:
    async with HttpxTransport(timeout=config.timeout) as transport:
        dispatcher = Dispatcher(STORE_API_CATALOG, transport, config)
        return await dispatcher.invoke(operation, params)


def cmd_invoke(args: argparse.Namespace) -> int:
    """Dispatch one operation and print the decoded result as JSON."""
    try:
        params = json.loads(args.params) if args.params else {}
    except ValueError as e:
        print(f"Error: --params is not valid JSON: {e}")
        return 1
    if not isinstance(params, dict):
        print("Error: --params must be a JSON object")
        return 1

    try:
        config = _resolve_config(args)
    except ConfigurationError as e:
        print(f"Error: {e}")
        return 1

    logger.debug(f"Invoking {args.operation} against {config.base_url}")
    try:
        result = asyncio.run(_invoke(config, args.operation, params))
    except Fault as e:
        print(f"Error [{e.kind.value}]: {e}")
        if isinstance(e, StructuredApiFault):
            for detail in e.errors:
                print(f"  {detail.summary()}")
        return 1

    output = TypeAdapter(Any).dump_python(result, mode="json", by_alias=True, exclude_none=True)
    print(json.dumps(output, indent=2))
    return 0


def create_parser() -> argparse.ArgumentParser:
    """Create CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="storefront-contract",
        description="Storefront contract - typed Store API operations",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # operations
    operations_parser = subparsers.add_parser("operations", help="List operation keys")
    filters = operations_parser.add_mutually_exclusive_group()
    filters.add_argument("--overridden", action="store_true", help="Only operations replaced by overrides")
    filters.add_argument("--added", action="store_true", help="Only operations added by overrides")

    # describe
    describe_parser = subparsers.add_parser("describe", help="Show an operation contract")
    describe_parser.add_argument("operation", help="Operation name or full key")

    # invoke
    invoke_parser = subparsers.add_parser("invoke", help="Call an operation")
    invoke_parser.add_argument("operation", help="Operation name or full key")
    invoke_parser.add_argument("--params", "-p", help="Parameters as a JSON object")
    invoke_parser.add_argument("--config", "-c", help="Path to a storefront.yaml config file")
    invoke_parser.add_argument("--context-token", "-t", help="Session context token")

    return parser


def app(args: Optional[List[str]] = None) -> int:
    """Main CLI application."""
    parser = create_parser()
    parsed = parser.parse_args(args)

    logging.basicConfig(
        level=logging.DEBUG if parsed.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if not parsed.command:
        parser.print_help()
        return 0

    commands = {
        "operations": cmd_operations,
        "describe": cmd_describe,
        "invoke": cmd_invoke,
    }

    handler = commands.get(parsed.command)
    if handler:
        return handler(parsed)

    parser.print_help()
    return 1


def main() -> None:
    """Entry point for CLI."""
    sys.exit(app())


if __name__ == "__main__":
    main()
