"""
Module 04 - CLI Root Command

Build a tree over an address list and print its root.

Usage:
    merkle-allowlist root 0xabc... 0xdef... [--json]
    merkle-allowlist root --file whitelist.json [--sorted]
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace

from merkle_cli.addresses import AddressListError, collect_addresses, prepare_values
from merkle_core.config.runtime import RuntimeConfig
from merkle_core.merkle.merkle_tree import MerkleTree, build_merkle_tree
from merkle_core.schemas.errors import EmptyLeafSetException
from merkle_core.schemas.proof import RootExport


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1


def use_json(args: Namespace, config: RuntimeConfig) -> bool:
    if getattr(args, "json", None):
        return True
    return config.output_format == "json"


def sort_leaves_for(args: Namespace, config: RuntimeConfig) -> bool:
    if getattr(args, "sorted", None):
        return True
    return config.tree.sort_leaves


def build_tree_from_args(args: Namespace, config: RuntimeConfig) -> MerkleTree:
    """
    Collect, normalize and build.

    Raises:
        AddressListError: If the address file is unreadable or invalid
        EmptyLeafSetException: If no values were supplied
    """
    addresses = collect_addresses(args.addresses, args.file)
    values = prepare_values(
        addresses,
        lowercase=config.tree.lowercase,
        strict=getattr(args, "strict_addresses", False),
    )
    return build_merkle_tree(values, sort_leaves=sort_leaves_for(args, config))


def root_cmd(args: Namespace) -> int:
    """Handle root command."""
    config: RuntimeConfig = args.cli_config

    try:
        tree = build_tree_from_args(args, config)
    except EmptyLeafSetException:
        print("Whitelist is empty. Add addresses first.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except AddressListError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    logger.info("Built tree over %d values", tree.leaf_count)

    if use_json(args, config):
        export = RootExport(
            root=tree.hex_root,
            leaf_count=tree.leaf_count,
            depth=tree.depth,
            sorted_leaves=sort_leaves_for(args, config),
        )
        print(json.dumps(export.model_dump(), indent=2))
    else:
        print("Merkle Root:")
        print(tree.hex_root)

    return EXIT_SUCCESS
