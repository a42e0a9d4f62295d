"""Command-line interface for lspbins."""

from __future__ import annotations

import argparse
import dataclasses
import json
import logging
import sys
from pathlib import Path
from typing import Any

from rich.console import Console

from . import __version__
from .config import LspbinsConfig
from .environment import HostEnvironment
from .errors import LspbinsError
from .extension import Extension
from .models import LANGUAGE_SERVERS
from .utils import setup_logging

# Initialize rich console
console = Console()
logger = logging.getLogger(__name__)


def list_servers(_args: Any, _config: LspbinsConfig) -> None:
    """List the managed language servers."""
    console.print("🔧 [blue]Available language servers:[/blue]")
    for server_id, spec in LANGUAGE_SERVERS.items():
        console.print(f"  [green]{server_id}[/green] ({spec.binary_name} from {spec.repo})")


def show_command(args: argparse.Namespace, config: LspbinsConfig) -> None:
    """Resolve a language server and print its launch command."""
    extension = Extension(config.work_dir)
    command = extension.language_server_command(args.server_id, HostEnvironment(config))
    if args.json:
        print(json.dumps(dataclasses.asdict(command)))
    else:
        print(" ".join([command.command, *command.args]))


def create_parser() -> argparse.ArgumentParser:
    """Create command-line argument parser."""
    parser = argparse.ArgumentParser(
        description="lspbins - Provision language-server binaries",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose output",
    )
    parser.add_argument(
        "--work-dir",
        type=str,
        help="Directory holding downloaded binaries",
    )
    parser.add_argument(
        "--config-file",
        type=str,
        help="Path to configuration file",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    # command command
    command_parser = subparsers.add_parser(
        "command",
        help="Print the launch command for a language server",
    )
    command_parser.add_argument(
        "server_id",
        nargs="?",
        default="dhall",
        help="Language server identity",
    )
    command_parser.add_argument(
        "--json",
        action="store_true",
        help="Print the command as JSON",
    )
    command_parser.set_defaults(func=show_command)

    # list command
    list_parser = subparsers.add_parser("list", help="List managed language servers")
    list_parser.set_defaults(func=list_servers)

    # version command
    version_parser = subparsers.add_parser("version", help="Print version information")
    version_parser.set_defaults(
        func=lambda _, __: console.print(f"[yellow]lspbins[/] [bold]v{__version__}[/]"),
    )

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main function to parse arguments and execute commands."""
    parser = create_parser()
    args = parser.parse_args(argv)

    # Setup logging
    setup_logging(args.verbose)

    config = LspbinsConfig.load_from_file(args.config_file)

    # Override work directory if specified
    if args.work_dir:
        config.work_dir = Path(args.work_dir)

    if not hasattr(args, "func"):
        parser.print_help()
        return

    try:
        args.func(args, config)
    except LspbinsError as e:
        console.print(f"❌ [bold red]Error: {e.message}[/bold red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
