"""
Module 04 - CLI Verify Command

Check an address against a root with a proof, without the address list.

Usage:
    merkle-allowlist verify 0x3 --root 0x... --proof 0x... 0x...
    merkle-allowlist verify 0x3 --proof-file proof.json

The proof file may be the JSON written by `proof --format json` (its root
is used unless --root is given) or a plain JSON list of hashes.
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from pathlib import Path
from typing import Any

from merkle_cli.addresses import value_for
from merkle_cli.commands.root import use_json
from merkle_core.config.runtime import RuntimeConfig
from merkle_core.merkle.merkle_proofs import validate_proof, verify
from merkle_core.schemas.errors import MalformedProofException


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def _split_proof_args(values: list[str] | None) -> list[str]:
    """Accept both space-separated and comma-separated proof elements."""
    items: list[str] = []
    for value in values or []:
        items.extend(part.strip() for part in value.split(",") if part.strip())
    return items


def _load_proof_file(path: Path) -> tuple[str | None, list[str]]:
    data: Any = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(data, dict):
        root = data.get("root")
        data = data.get("proof") or []
    else:
        root = None
    if not isinstance(data, list):
        raise ValueError(f"'proof' in {path} must be a list of hashes")
    return root, [str(item) for item in data]


def verify_cmd(args: Namespace) -> int:
    """Handle verify command."""
    config: RuntimeConfig = args.cli_config
    target = value_for(args.target, lowercase=config.tree.lowercase)

    root = args.root
    proof = _split_proof_args(args.proof)
    if args.proof_file:
        try:
            file_root, file_proof = _load_proof_file(Path(args.proof_file))
        except (OSError, ValueError) as e:
            print(f"Error: cannot read proof file: {e}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR
        root = root or file_root
        proof = proof or file_proof

    if not root:
        print("Error: a root is required (--root or a proof file with a root)", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    if args.strict:
        try:
            validate_proof(proof)
        except MalformedProofException as e:
            print(f"Error: {e}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR

    ok = verify(root, target, proof)
    logger.info("Verification of %s against %s: %s", target, root, ok)

    if use_json(args, config):
        print(json.dumps({"address": target, "root": root, "proof": proof, "valid": ok}, indent=2))
    else:
        status = "is" if ok else "is NOT"
        print(f"Address {target} {status} whitelisted under root {root}")

    return EXIT_SUCCESS if ok else EXIT_VERIFICATION_FAILED
