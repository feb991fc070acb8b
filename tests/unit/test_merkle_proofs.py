"""
Module 03 - Merkle Proof Unit Tests
Tests for merkle_core/merkle/merkle_proofs.py

1. Round trip - prove every member, verify passes
2. Odd counts - carried nodes emit no sibling
3. Negative membership - non-members never verify
4. Tamper detection - flipped bytes, truncated or reordered proofs fail
5. verify() never raises on malformed input
"""
import pytest

from merkle_core.crypto.hashing import hash_leaf, keccak256, to_hex
from merkle_core.merkle.merkle_tree import build_merkle_tree, merkle_parent
from merkle_core.merkle.merkle_proofs import (
    MerkleProof,
    MerkleProver,
    MerkleVerifier,
    build_merkle_proof,
    process_proof,
    prove,
    validate_proof,
    verify,
    verify_merkle_proof,
)
from merkle_core.schemas.errors import (
    ErrorCodes,
    LeafNotFoundException,
    MalformedProofException,
)


def _flip(data: bytes, position: int) -> bytes:
    return data[:position] + bytes([data[position] ^ 0x01]) + data[position + 1:]


class TestRoundTrip:
    """Every member of a built tree verifies against its root."""

    @pytest.mark.parametrize("count", [1, 2, 3, 4, 5, 6, 7, 8, 9, 16, 17])
    def test_every_leaf_verifies(self, count):
        values = [hex(i + 1) for i in range(count)]
        tree = build_merkle_tree(values)

        for value in values:
            assert verify(tree.root, value, prove(tree, value)), f"{value} of {count}"

    def test_deploy_addresses(self, deploy_addresses):
        tree = build_merkle_tree(deploy_addresses)

        for address in deploy_addresses:
            assert verify(tree.root, address, prove(tree, address))

    def test_sorted_tree_round_trip(self, deploy_addresses):
        tree = build_merkle_tree(deploy_addresses, sort_leaves=True)

        for address in deploy_addresses:
            assert verify(tree.root, address, prove(tree, address))

    def test_hex_inputs_accepted(self, short_addresses):
        tree = build_merkle_tree(short_addresses)
        proof = [to_hex(s) for s in prove(tree, "0x4")]

        assert verify(tree.hex_root, "0x4", proof)


class TestSingleLeafProof:
    """A single-leaf tree has an empty proof."""

    def test_empty_proof(self):
        tree = build_merkle_tree(["0xabc"])

        assert prove(tree, "0xabc") == []
        assert verify(tree.root, "0xabc", [])
        assert tree.root == hash_leaf("0xabc")


class TestOddLeafCount:
    """Proof shape under the carry rule."""

    def test_three_leaf_proofs(self):
        tree = build_merkle_tree(["0xa", "0xb", "0xc"])
        ha, hb, hc = (hash_leaf(v) for v in ("0xa", "0xb", "0xc"))

        assert prove(tree, "0xa") == [hb, hc]
        assert prove(tree, "0xb") == [ha, hc]
        # c is carried at level 0, so only one sibling
        assert prove(tree, "0xc") == [merkle_parent(ha, hb)]

        for value in ("0xa", "0xb", "0xc"):
            assert verify(tree.root, value, prove(tree, value))


class TestConcreteScenario:
    """Five short addresses, proof for 0x3."""

    def test_proof_for_0x3(self, short_addresses):
        tree = build_merkle_tree(short_addresses)
        h1, h2, h3, h4, h5 = (hash_leaf(v) for v in short_addresses)

        proof = prove(tree, "0x3")

        assert proof == [h4, merkle_parent(h1, h2), h5]
        assert verify(tree.root, "0x3", proof)
        assert not verify(tree.root, "0x6", proof)

    def test_proof_is_root_ward(self, short_addresses):
        tree = build_merkle_tree(short_addresses)
        proof = prove(tree, "0x3")

        assert proof[0] in tree.layers[0]
        assert proof[-1] in tree.layers[-2]


class TestProofGeneration:
    """Tests for build_merkle_proof()."""

    def test_proof_fields(self, short_addresses):
        tree = build_merkle_tree(short_addresses)
        proof = build_merkle_proof(tree, "0x2")

        assert proof.leaf == hash_leaf("0x2")
        assert proof.index == 1
        assert proof.root == tree.root
        assert verify_merkle_proof(proof)

    def test_hex_siblings(self, short_addresses):
        tree = build_merkle_tree(short_addresses)
        proof = build_merkle_proof(tree, "0x5")

        assert proof.hex_siblings() == [to_hex(s) for s in proof.siblings]

    def test_missing_value_raises(self, short_addresses):
        tree = build_merkle_tree(short_addresses)

        with pytest.raises(LeafNotFoundException) as exc_info:
            prove(tree, "0x6")

        assert exc_info.value.code == ErrorCodes.LEAF_NOT_FOUND
        assert exc_info.value.details["leaf"] == to_hex(hash_leaf("0x6"))

    def test_normalization_mismatch_raises(self):
        """Values are matched exactly; a different text encoding is not found."""
        tree = build_merkle_tree(["alice", "bob"])

        with pytest.raises(LeafNotFoundException):
            prove(tree, "Alice")

    def test_duplicate_uses_first_occurrence(self):
        tree = build_merkle_tree(["0x1", "0x2", "0x1"])
        proof = build_merkle_proof(tree, "0x1")

        assert proof.index == 0
        assert verify(tree.root, "0x1", list(proof.siblings))

    def test_negative_index_rejected(self):
        with pytest.raises(ValueError):
            MerkleProof(leaf=b"", siblings=(), root=b"", index=-1)


class TestNegativeMembership:
    """Non-members never verify, whatever proof is supplied."""

    def test_no_member_proof_works_for_outsider(self, short_addresses):
        tree = build_merkle_tree(short_addresses)

        for member in short_addresses:
            assert not verify(tree.root, "0x6", prove(tree, member))

    def test_empty_proof_for_outsider(self, short_addresses):
        tree = build_merkle_tree(short_addresses)

        assert not verify(tree.root, "0x6", [])

    def test_member_with_wrong_proof(self, short_addresses):
        tree = build_merkle_tree(short_addresses)

        assert not verify(tree.root, "0x1", prove(tree, "0x4"))

    def test_wrong_root(self, short_addresses):
        tree = build_merkle_tree(short_addresses)
        other = build_merkle_tree(["0x7", "0x8"])

        assert not verify(other.root, "0x3", prove(tree, "0x3"))


class TestTamperDetection:
    """Altered proofs fail verification."""

    def test_flip_any_byte_of_any_element(self, deploy_addresses):
        tree = build_merkle_tree(deploy_addresses)
        target = deploy_addresses[2]
        proof = prove(tree, target)

        for i, element in enumerate(proof):
            for position in (0, 15, 31):
                tampered = list(proof)
                tampered[i] = _flip(element, position)
                assert not verify(tree.root, target, tampered)

    def test_truncated_proof(self, short_addresses):
        tree = build_merkle_tree(short_addresses)
        proof = prove(tree, "0x3")

        assert not verify(tree.root, "0x3", proof[:-1])

    def test_extra_element(self, short_addresses):
        tree = build_merkle_tree(short_addresses)
        proof = prove(tree, "0x3") + [keccak256(b"extra")]

        assert not verify(tree.root, "0x3", proof)

    def test_reordered_proof(self, short_addresses):
        tree = build_merkle_tree(short_addresses)
        proof = prove(tree, "0x3")

        assert not verify(tree.root, "0x3", list(reversed(proof)))

    def test_tampered_root(self, short_addresses):
        tree = build_merkle_tree(short_addresses)

        assert not verify(_flip(tree.root, 0), "0x3", prove(tree, "0x3"))

    def test_tampered_merkle_proof_dataclass(self, short_addresses):
        tree = build_merkle_tree(short_addresses)
        proof = build_merkle_proof(tree, "0x2")

        tampered = MerkleProof(
            leaf=hash_leaf("0x9"),
            siblings=proof.siblings,
            root=proof.root,
            index=proof.index,
        )

        assert not verify_merkle_proof(tampered)


class TestVerifyNeverRaises:
    """Malformed input yields False rather than an exception."""

    def test_short_root(self, short_addresses):
        tree = build_merkle_tree(short_addresses)

        assert verify(tree.root[:31], "0x3", prove(tree, "0x3")) is False

    def test_bad_hex_root(self, short_addresses):
        tree = build_merkle_tree(short_addresses)

        assert verify("not-a-root", "0x3", prove(tree, "0x3")) is False

    def test_wrong_width_element(self, short_addresses):
        tree = build_merkle_tree(short_addresses)
        proof = prove(tree, "0x3")
        proof[1] = proof[1] + b"\x00"

        assert verify(tree.root, "0x3", proof) is False

    def test_bad_hex_element(self, short_addresses):
        tree = build_merkle_tree(short_addresses)

        assert verify(tree.root, "0x3", ["0xzz"]) is False

    def test_unsupported_value_type(self, short_addresses):
        tree = build_merkle_tree(short_addresses)

        assert verify(tree.root, 3, []) is False

    def test_hex_lookalike_with_newline(self, short_addresses):
        tree = build_merkle_tree(short_addresses)

        assert verify(tree.root, "0x3\n", prove(tree, "0x3")) is False

    def test_unencodable_text(self, short_addresses):
        tree = build_merkle_tree(short_addresses)

        assert verify(tree.root, "\ud800", []) is False

    def test_newline_value_builds_as_text(self):
        tree = build_merkle_tree(["0x1\n", "0x2"])

        assert tree.leaves[0] == keccak256(b"0x1\n")
        assert verify(tree.root, "0x1\n", prove(tree, "0x1\n"))


class TestValidateProof:
    """Tests for strict validate_proof()."""

    def test_valid_proof_decoded(self, short_addresses):
        tree = build_merkle_tree(short_addresses)
        proof = prove(tree, "0x3")

        assert validate_proof([to_hex(p) for p in proof]) == proof

    def test_malformed_element_position(self):
        with pytest.raises(MalformedProofException) as exc_info:
            validate_proof([keccak256(b"ok"), "0x1234"])

        assert exc_info.value.code == ErrorCodes.MALFORMED_PROOF
        assert exc_info.value.details["position"] == 1


class TestProcessProof:
    """Tests for process_proof()."""

    def test_empty_siblings_returns_leaf(self):
        leaf = hash_leaf("0x1")

        assert process_proof(leaf, []) == leaf

    def test_folds_in_order(self):
        leaf = hash_leaf("0x1")
        s1, s2 = keccak256(b"s1"), keccak256(b"s2")

        assert process_proof(leaf, [s1, s2]) == merkle_parent(merkle_parent(leaf, s1), s2)


class TestConvenienceClasses:
    """Tests for MerkleProver and MerkleVerifier classes."""

    def test_prover_build_and_prove(self, short_addresses):
        tree = MerkleProver.build(short_addresses)
        proof = MerkleProver.prove(tree, "0x4")

        assert MerkleVerifier.verify(proof)

    def test_prove_all(self, short_addresses):
        tree = MerkleProver.build(short_addresses)
        proofs = MerkleProver.prove_all(tree, short_addresses)

        assert set(proofs) == set(short_addresses)
        assert all(MerkleVerifier.verify(p) for p in proofs.values())

    def test_verify_value_in_root(self, short_addresses):
        tree = MerkleProver.build(short_addresses)
        proof = MerkleProver.prove(tree, "0x1")

        assert MerkleVerifier.verify_value_in_root("0x1", proof.hex_siblings(), tree.hex_root)
        assert not MerkleVerifier.verify_value_in_root("0x6", proof.hex_siblings(), tree.hex_root)
