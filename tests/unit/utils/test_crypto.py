"""
Unit tests for utils.crypto module.

Tests:
- Hex and SHA-256 helpers
- Secret key validation and generation
- Public key derivation and even-Y normalization
- BIP-340 signing (test vector 0) and verification
- Input shape errors raised before any curve operation
"""

import pytest
from fixtures.samples import (
    BIP340_PUBKEY,
    BIP340_SECRET,
    BIP340_SIGNATURE,
    SeededRandom,
    scripted_random,
)

from groupbrotr.core.exceptions import (
    InvalidEncodingError,
    InvalidInputLengthError,
    InvalidKeyError,
)
from groupbrotr.models.constants import SECP256K1_ORDER
from groupbrotr.utils.crypto import (
    SignatureEngine,
    bytes_to_hex,
    hex_to_bytes,
    sha256,
    validate_secret_key,
)


ZERO_HASH = bytes(32)

# BIP-340 test vector 5: x-coordinate that is not on the curve
OFF_CURVE_PUBKEY = bytes.fromhex(
    "eefdea4cdb677750a420fee807eacf21eb9898ae79b9768766e4faa04a2d4a34"
)


def _scalar(d: int) -> bytes:
    return d.to_bytes(32, "big")


def _odd_y_scalar(engine: SignatureEngine) -> int:
    """Smallest scalar whose public point has odd Y."""
    return next(d for d in range(2, 64) if engine.derive_compressed_public_key(_scalar(d))[0] == 3)


# =============================================================================
# Helper Tests
# =============================================================================


class TestHexHelpers:
    """bytes_to_hex() / hex_to_bytes()."""

    def test_round_trip(self) -> None:
        data = bytes(range(256))
        assert hex_to_bytes(bytes_to_hex(data)) == data

    def test_lowercase_output(self) -> None:
        assert bytes_to_hex(b"\xab\xcd") == "abcd"

    def test_uppercase_input_accepted(self) -> None:
        assert hex_to_bytes("ABCD") == b"\xab\xcd"

    def test_empty(self) -> None:
        assert hex_to_bytes("") == b""

    @pytest.mark.parametrize("value", ["abc", "zz", "0xab", "ab cd", " ab", "ab\n"])
    def test_invalid(self, value: str) -> None:
        with pytest.raises(InvalidEncodingError):
            hex_to_bytes(value)

    def test_non_str(self) -> None:
        with pytest.raises(InvalidEncodingError):
            hex_to_bytes(b"ab")  # type: ignore[arg-type]


class TestSha256:
    """sha256() digests."""

    def test_empty(self) -> None:
        assert bytes_to_hex(sha256(b"")) == (
            "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"
        )

    def test_str_is_utf8(self) -> None:
        assert sha256("héllo") == sha256("héllo".encode())


class TestValidateSecretKey:
    """Scalar range and length checks."""

    def test_valid(self) -> None:
        assert validate_secret_key(BIP340_SECRET) == BIP340_SECRET

    def test_zero(self) -> None:
        with pytest.raises(InvalidKeyError):
            validate_secret_key(bytes(32))

    def test_order(self) -> None:
        with pytest.raises(InvalidKeyError):
            validate_secret_key(_scalar(SECP256K1_ORDER))

    def test_order_minus_one_valid(self) -> None:
        assert validate_secret_key(_scalar(SECP256K1_ORDER - 1))

    @pytest.mark.parametrize("size", [0, 31, 33])
    def test_wrong_length(self, size: int) -> None:
        with pytest.raises(InvalidInputLengthError):
            validate_secret_key(b"\x01" * size)

    def test_hex_string_rejected(self) -> None:
        with pytest.raises(InvalidEncodingError):
            validate_secret_key("03" * 32)  # type: ignore[arg-type]


# =============================================================================
# Key Generation Tests
# =============================================================================


class TestGeneratePrivateKey:
    """generate_private_key() with injected randomness."""

    def test_in_range(self) -> None:
        key = SignatureEngine().generate_private_key()
        assert len(key) == 32
        assert 0 < int.from_bytes(key, "big") < SECP256K1_ORDER

    def test_deterministic_with_seeded_source(self) -> None:
        a = SignatureEngine(SeededRandom()).generate_private_key()
        b = SignatureEngine(SeededRandom()).generate_private_key()
        assert a == b

    def test_rejects_out_of_range_candidates(self) -> None:
        valid = _scalar(7)
        engine = SignatureEngine(scripted_random(bytes(32), b"\xff" * 32, valid))
        assert engine.generate_private_key() == valid

    def test_short_random_output(self) -> None:
        engine = SignatureEngine(lambda n: b"\x01" * (n - 1))
        with pytest.raises(InvalidInputLengthError):
            engine.generate_private_key()

    def test_random_source_failure_propagates(self) -> None:
        def broken(n: int) -> bytes:
            raise OSError("entropy unavailable")

        with pytest.raises(OSError, match="entropy unavailable"):
            SignatureEngine(broken).generate_private_key()


# =============================================================================
# Derivation Tests
# =============================================================================


class TestDerivation:
    """Public key derivation and even-Y normalization."""

    def test_bip340_vector_0_pubkey(self) -> None:
        engine = SignatureEngine()
        assert bytes_to_hex(engine.derive_public_key(BIP340_SECRET)) == BIP340_PUBKEY

    def test_compressed_is_prefix_plus_xonly(self) -> None:
        engine = SignatureEngine()
        compressed = engine.derive_compressed_public_key(BIP340_SECRET)
        assert len(compressed) == 33
        assert compressed[0] in (2, 3)
        assert compressed[1:] == engine.derive_public_key(BIP340_SECRET)

    def test_generator_has_even_y(self) -> None:
        engine = SignatureEngine()
        assert engine.normalize_for_signing(_scalar(1)) == _scalar(1)

    def test_odd_y_is_negated(self) -> None:
        engine = SignatureEngine()
        d = _odd_y_scalar(engine)
        normalized = engine.normalize_for_signing(_scalar(d))
        assert normalized == _scalar(SECP256K1_ORDER - d)
        assert engine.derive_compressed_public_key(normalized)[0] == 2

    def test_negation_keeps_x(self) -> None:
        engine = SignatureEngine()
        d = _odd_y_scalar(engine)
        assert engine.derive_public_key(_scalar(d)) == engine.derive_public_key(
            _scalar(SECP256K1_ORDER - d)
        )

    def test_derive_rejects_invalid_secret(self) -> None:
        with pytest.raises(InvalidKeyError):
            SignatureEngine().derive_public_key(bytes(32))


# =============================================================================
# Sign / Verify Tests
# =============================================================================


class TestSign:
    """BIP-340 signing."""

    def test_bip340_vector_0(self) -> None:
        sig = SignatureEngine().sign(BIP340_SECRET, ZERO_HASH, aux_rand=bytes(32))
        assert bytes_to_hex(sig) == BIP340_SIGNATURE

    def test_default_aux_is_zero(self) -> None:
        engine = SignatureEngine()
        assert engine.sign(BIP340_SECRET, ZERO_HASH) == engine.sign(
            BIP340_SECRET, ZERO_HASH, aux_rand=bytes(32)
        )

    def test_aux_changes_signature(self) -> None:
        engine = SignatureEngine()
        msg = sha256(b"group message")
        a = engine.sign(BIP340_SECRET, msg)
        b = engine.sign(BIP340_SECRET, msg, aux_rand=b"\x01" * 32)
        assert a != b
        pubkey = engine.derive_public_key(BIP340_SECRET)
        assert engine.verify(a, msg, pubkey)
        assert engine.verify(b, msg, pubkey)

    def test_odd_y_secret_signs_for_its_xonly_key(self) -> None:
        engine = SignatureEngine()
        secret = _scalar(_odd_y_scalar(engine))
        msg = sha256(b"odd")
        sig = engine.sign(secret, msg)
        assert engine.verify(sig, msg, engine.derive_public_key(secret))

    @pytest.mark.parametrize("size", [0, 31, 33])
    def test_wrong_hash_length(self, size: int) -> None:
        with pytest.raises(InvalidInputLengthError):
            SignatureEngine().sign(BIP340_SECRET, bytes(size))

    def test_wrong_aux_length(self) -> None:
        with pytest.raises(InvalidInputLengthError):
            SignatureEngine().sign(BIP340_SECRET, ZERO_HASH, aux_rand=bytes(16))

    def test_invalid_secret(self) -> None:
        with pytest.raises(InvalidKeyError):
            SignatureEngine().sign(_scalar(SECP256K1_ORDER), ZERO_HASH)


class TestVerify:
    """BIP-340 verification."""

    @pytest.fixture
    def signed(self) -> tuple[bytes, bytes, bytes]:
        engine = SignatureEngine()
        msg = sha256(b"hello group")
        return engine.sign(BIP340_SECRET, msg), msg, engine.derive_public_key(BIP340_SECRET)

    def test_valid(self, signed: tuple[bytes, bytes, bytes]) -> None:
        sig, msg, pubkey = signed
        assert SignatureEngine().verify(sig, msg, pubkey) is True

    def test_bip340_vector_0(self) -> None:
        assert SignatureEngine().verify(
            hex_to_bytes(BIP340_SIGNATURE), ZERO_HASH, hex_to_bytes(BIP340_PUBKEY)
        )

    @pytest.mark.parametrize("index", [0, 31, 32, 63])
    def test_signature_bit_flip(self, signed: tuple[bytes, bytes, bytes], index: int) -> None:
        sig, msg, pubkey = signed
        tampered = bytearray(sig)
        tampered[index] ^= 0x01
        assert SignatureEngine().verify(bytes(tampered), msg, pubkey) is False

    def test_message_bit_flip(self, signed: tuple[bytes, bytes, bytes]) -> None:
        sig, msg, pubkey = signed
        tampered = bytes([msg[0] ^ 0x80]) + msg[1:]
        assert SignatureEngine().verify(sig, tampered, pubkey) is False

    def test_wrong_pubkey(self, signed: tuple[bytes, bytes, bytes]) -> None:
        sig, msg, _ = signed
        other = SignatureEngine().derive_public_key(_scalar(1))
        assert SignatureEngine().verify(sig, msg, other) is False

    def test_pubkey_not_on_curve(self, signed: tuple[bytes, bytes, bytes]) -> None:
        sig, msg, _ = signed
        assert SignatureEngine().verify(sig, msg, OFF_CURVE_PUBKEY) is False

    @pytest.mark.parametrize("prefix", [2, 3])
    def test_compressed_pubkey_prefix_dropped(
        self, signed: tuple[bytes, bytes, bytes], prefix: int
    ) -> None:
        sig, msg, pubkey = signed
        assert SignatureEngine().verify(sig, msg, bytes([prefix]) + pubkey) is True

    @pytest.mark.parametrize("prefix", [0x00, 0x04, 0xFF])
    def test_any_prefix_byte_ignored(
        self, signed: tuple[bytes, bytes, bytes], prefix: int
    ) -> None:
        sig, msg, pubkey = signed
        assert SignatureEngine().verify(sig, msg, bytes([prefix]) + pubkey) is True

    @pytest.mark.parametrize(
        ("sig_len", "msg_len", "key_len"),
        [(63, 32, 32), (65, 32, 32), (64, 31, 32), (64, 32, 31), (64, 32, 34)],
    )
    def test_shape_errors(self, sig_len: int, msg_len: int, key_len: int) -> None:
        with pytest.raises(InvalidInputLengthError):
            SignatureEngine().verify(bytes(sig_len), bytes(msg_len), b"\x02" * key_len)
