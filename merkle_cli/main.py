"""
Module 04 - CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    python -m merkle_cli root [ADDRESS ...] [--file PATH] [--sorted] [--json]
    python -m merkle_cli proof TARGET [ADDRESS ...] [--file PATH] [--format hex|json|move]
    python -m merkle_cli verify TARGET --root ROOT [--proof HASH ...] [--proof-file PATH]
    python -m merkle_cli config --init | --show

Environment Variables:
    MERKLE_SORT_LEAVES      Sort leaf hashes before building (default: false)
    MERKLE_LOWERCASE        Lower-case addresses before hashing (default: true)
    MERKLE_LOG_LEVEL        Log level (default: INFO)
    MERKLE_LOG_FILE         Optional log file
    MERKLE_OUTPUT_FORMAT    human or json (default: human)
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from merkle_cli import __version__
from merkle_cli.commands import proof, root, verify
from merkle_core.config.runtime import get_default_config_template, load_config


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
        force=True,
    )


def _add_address_source(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "addresses",
        nargs="*",
        help="Allowlist addresses (appended after any --file contents)",
    )
    parser.add_argument(
        "--file", "-f",
        type=str,
        default=None,
        help="Read addresses from a JSON list or a text file (one per line)",
    )
    parser.add_argument(
        "--sorted",
        action="store_true",
        default=None,
        help="Sort leaf hashes before building (root becomes order-independent)",
    )
    parser.add_argument(
        "--strict-addresses",
        action="store_true",
        default=False,
        help="Reject values that are not 20-byte 0x addresses",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="merkle-allowlist",
        description="Merkle allowlist tool - compute roots, generate and verify inclusion proofs.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to configuration file (default: ./merkle.yaml or ./merkle.json)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- root command ---
    root_parser = subparsers.add_parser(
        "root",
        help="Compute the Merkle root of an address list",
        description="Build the tree over the given addresses and print its root.",
    )
    _add_address_source(root_parser)
    root_parser.add_argument(
        "--json",
        action="store_true",
        default=None,
        help="Output machine-readable JSON",
    )
    root_parser.set_defaults(func=root.root_cmd)

    # --- proof command ---
    proof_parser = subparsers.add_parser(
        "proof",
        help="Generate an inclusion proof for one address",
        description="Rebuild the tree from the address list and print the proof for TARGET.",
    )
    proof_parser.add_argument(
        "target",
        type=str,
        help="Address to prove",
    )
    _add_address_source(proof_parser)
    proof_parser.add_argument(
        "--format",
        type=str,
        choices=["hex", "json", "move"],
        default=None,
        help="Output format (default: hex, or json when output_format is json)",
    )
    proof_parser.add_argument(
        "--json",
        action="store_true",
        default=None,
        help="Shorthand for --format json",
    )
    proof_parser.set_defaults(func=proof.proof_cmd)

    # --- verify command ---
    verify_parser = subparsers.add_parser(
        "verify",
        help="Verify an address against a root and proof",
        description="Recompute the root from TARGET and the proof; exit 2 when it does not match.",
    )
    verify_parser.add_argument(
        "target",
        type=str,
        help="Address to verify",
    )
    verify_parser.add_argument(
        "--root", "-r",
        type=str,
        default=None,
        help="Claimed Merkle root (0x hex)",
    )
    verify_parser.add_argument(
        "--proof", "-p",
        nargs="*",
        default=None,
        help="Proof hashes, leaf-most first (space or comma separated)",
    )
    verify_parser.add_argument(
        "--proof-file",
        type=str,
        default=None,
        help="JSON file written by 'proof --format json', or a JSON list of hashes",
    )
    verify_parser.add_argument(
        "--strict",
        action="store_true",
        default=False,
        help="Fail with an error on malformed proof elements instead of reporting invalid",
    )
    verify_parser.add_argument(
        "--json",
        action="store_true",
        default=None,
        help="Output machine-readable JSON",
    )
    verify_parser.set_defaults(func=verify.verify_cmd)

    # --- config command ---
    config_parser = subparsers.add_parser(
        "config",
        help="Manage CLI configuration",
        description="Initialize or display configuration.",
    )
    config_parser.add_argument(
        "--init",
        action="store_true",
        default=False,
        help="Create a template configuration file",
    )
    config_parser.add_argument(
        "--show",
        action="store_true",
        default=False,
        help="Show current configuration",
    )
    config_parser.add_argument(
        "--path",
        type=str,
        default="merkle.yaml",
        help="Path for config file (default: merkle.yaml)",
    )
    config_parser.set_defaults(func=config_cmd)

    return parser


def config_cmd(args: argparse.Namespace) -> int:
    """Handle config command."""
    if args.init:
        config_path = Path(args.path)
        if config_path.exists():
            print(f"Error: Config file already exists: {config_path}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR

        config_path.write_text(get_default_config_template())
        print(f"Created configuration file: {config_path}")
        print("You can also use environment variables (MERKLE_* prefix).")
        return EXIT_SUCCESS

    if args.show:
        print(json.dumps(args.cli_config.to_dict(), indent=2))
        return EXIT_SUCCESS

    print("Usage: merkle-allowlist config [--init|--show]")
    print("  --init  Create a template configuration file")
    print("  --show  Show current configuration")
    return EXIT_SUCCESS


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=error, 2=verification failed)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    try:
        config = load_config(args.config)
    except Exception as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    log_level = args.log_level or config.log_level
    setup_logging(level=log_level, log_file=config.log_file)

    # Attach config to args for commands to use
    args.cli_config = config

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        if args.log_level == "DEBUG":
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
