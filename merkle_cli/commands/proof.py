"""
Module 04 - CLI Proof Command

Rebuild the tree from the address list and print the inclusion proof for
one member.

Usage:
    merkle-allowlist proof 0x3 --file whitelist.txt [--format hex|json|move]
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace

from merkle_cli.addresses import AddressListError, value_for
from merkle_cli.commands.root import build_tree_from_args, use_json
from merkle_core.config.runtime import RuntimeConfig
from merkle_core.merkle.merkle_proofs import build_merkle_proof
from merkle_core.schemas.errors import EmptyLeafSetException, LeafNotFoundException
from merkle_core.schemas.proof import ProofExport


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1


def proof_cmd(args: Namespace) -> int:
    """Handle proof command."""
    config: RuntimeConfig = args.cli_config
    target = value_for(args.target, lowercase=config.tree.lowercase)

    try:
        tree = build_tree_from_args(args, config)
        proof = build_merkle_proof(tree, target)
    except EmptyLeafSetException:
        print("Whitelist is empty. Add addresses first.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except LeafNotFoundException as e:
        if use_json(args, config):
            print(json.dumps(e.to_error_model().model_dump(), indent=2))
        else:
            print(f"Address {args.target} is not in the whitelist", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except AddressListError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    export = ProofExport.from_proof(target, proof)
    fmt = args.format or ("json" if use_json(args, config) else "hex")
    logger.info("Proof for %s has %d elements", target, len(export.proof))

    if fmt == "json":
        print(json.dumps(export.model_dump(), indent=2))
    elif fmt == "move":
        print(f"// Proof for address {target}")
        print(export.to_move())
    else:
        print(f"Merkle Proof for {target}:")
        print(json.dumps(export.proof, indent=2))

    return EXIT_SUCCESS
