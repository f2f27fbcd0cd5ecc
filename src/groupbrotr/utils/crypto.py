"""BIP-340 Schnorr signing primitives on secp256k1.

[SignatureEngine][groupbrotr.utils.crypto.SignatureEngine] generates secret
keys, derives x-only public keys, and signs or verifies 32-byte message
hashes. Curve arithmetic is delegated to ``coincurve`` (libsecp256k1); this
module owns the input-shape rules and the even-Y normalization that make
x-only keys unambiguous on the wire.

Every shape check runs before any curve operation. Malformed input raises a
[CryptoError][groupbrotr.core.exceptions.CryptoError] subclass; a
well-formed but wrong signature makes
[verify()][groupbrotr.utils.crypto.SignatureEngine.verify] return ``False``.

The random source is injected at construction so tests can make key and
invite-code generation deterministic. The default,
``secrets.token_bytes``, is safe for concurrent use.

Examples:
    ```python
    engine = SignatureEngine()
    secret = engine.generate_private_key()
    digest = sha256(b"hello")
    sig = engine.sign(secret, digest)
    engine.verify(sig, digest, engine.derive_public_key(secret))  # True
    ```
"""

from __future__ import annotations

import hashlib
import logging
import secrets
import string
from collections.abc import Callable
from typing import SupportsBytes, TypeAlias

from coincurve import PrivateKey, PublicKeyXOnly

from groupbrotr.core.exceptions import (
    InvalidEncodingError,
    InvalidInputLengthError,
    InvalidKeyError,
)
from groupbrotr.models.constants import (
    COMPRESSED_PUBKEY_SIZE,
    MESSAGE_HASH_SIZE,
    SECP256K1_ORDER,
    SECRET_KEY_SIZE,
    SIGNATURE_SIZE,
    XONLY_PUBKEY_SIZE,
)


logger = logging.getLogger("groupbrotr.utils.crypto")

RandomSource: TypeAlias = Callable[[int], bytes]
"""Callable returning exactly ``n`` uniformly random bytes."""

SecretLike: TypeAlias = bytes | bytearray | SupportsBytes

_AUX_ZERO = bytes(32)
_EVEN_Y_PREFIX = 0x02
_HEX_DIGITS = frozenset(string.hexdigits)


# =============================================================================
# Pure helpers
# =============================================================================


def sha256(data: bytes | bytearray | str) -> bytes:
    """Return the SHA-256 digest of *data* (``str`` is UTF-8 encoded)."""
    if isinstance(data, str):
        data = data.encode("utf-8")
    return hashlib.sha256(data).digest()


def bytes_to_hex(data: bytes | bytearray) -> str:
    """Encode *data* as lowercase hex."""
    return bytes(data).hex()


def hex_to_bytes(value: str) -> bytes:
    """Decode a hex string.

    Upper- and lowercase digits are accepted. Whitespace, ``0x`` prefixes,
    and odd lengths are rejected.

    Raises:
        InvalidEncodingError: If *value* is not a str, has odd length, or
            contains a non-hex character.
    """
    if not isinstance(value, str):
        raise InvalidEncodingError(f"hex value must be a str, got {type(value).__name__}")
    if len(value) % 2:
        raise InvalidEncodingError(f"hex string must have even length, got {len(value)}")
    if not _HEX_DIGITS.issuperset(value):
        raise InvalidEncodingError("hex string contains non-hex characters")
    return bytes.fromhex(value)


def _require_length(data: bytes, expected: int, name: str) -> None:
    if len(data) != expected:
        raise InvalidInputLengthError(f"{name} must be {expected} bytes, got {len(data)}")


def _as_bytes(value: SecretLike, name: str) -> bytes:
    if isinstance(value, str):
        raise InvalidEncodingError(f"{name} must be bytes; decode hex with hex_to_bytes()")
    return bytes(value)


def validate_secret_key(secret: SecretLike) -> bytes:
    """Check that *secret* is a 32-byte scalar in ``(0, n)`` and return it as bytes.

    Raises:
        InvalidInputLengthError: If *secret* is not 32 bytes.
        InvalidKeyError: If the scalar is zero or not below the group order.
    """
    raw = _as_bytes(secret, "secret key")
    _require_length(raw, SECRET_KEY_SIZE, "secret key")
    d = int.from_bytes(raw, "big")
    if not 0 < d < SECP256K1_ORDER:
        raise InvalidKeyError("secret key scalar must be in the range (0, n)")
    return raw


# =============================================================================
# Engine
# =============================================================================


class SignatureEngine:
    """Key generation, derivation, and BIP-340 signing on secp256k1.

    Holds no mutable state after construction, so one instance can be shared
    across threads as long as the injected random source is thread-safe.

    Args:
        random_source: Callable returning ``n`` random bytes. Defaults to
            ``secrets.token_bytes``.

    See Also:
        [KeyPair][groupbrotr.utils.keys.KeyPair]: Pairs a secret with its
            derived public key using this engine.
        [sign_event()][groupbrotr.nips.nip01.sign_event]: Signs event
            identities through this engine.
    """

    __slots__ = ("_random_source",)

    def __init__(self, random_source: RandomSource | None = None) -> None:
        self._random_source: RandomSource = random_source or secrets.token_bytes

    def random_bytes(self, n: int) -> bytes:
        """Draw *n* bytes from the random source.

        Raises:
            InvalidInputLengthError: If the source returns a different number
                of bytes.
        """
        data = self._random_source(n)
        _require_length(data, n, "random source output")
        return data

    def generate_private_key(self) -> bytes:
        """Draw 32-byte candidates until one is a valid scalar in ``(0, n)``.

        Failures of the random source itself propagate unchanged.
        """
        while True:
            candidate = self.random_bytes(SECRET_KEY_SIZE)
            d = int.from_bytes(candidate, "big")
            if 0 < d < SECP256K1_ORDER:
                return candidate
            logger.debug("secret_key_candidate_rejected")

    def derive_compressed_public_key(self, secret: SecretLike) -> bytes:
        """Return the 33-byte SEC1 compressed public key of *secret*."""
        raw = validate_secret_key(secret)
        return PrivateKey(raw).public_key.format(compressed=True)

    def derive_public_key(self, secret: SecretLike) -> bytes:
        """Return the 32-byte x-only public key of *secret*.

        The Y parity is dropped; verifiers assume the even-Y point.
        """
        return self.derive_compressed_public_key(secret)[1:]

    def normalize_for_signing(self, secret: SecretLike) -> bytes:
        """Return the secret whose public point has even Y.

        If ``d·G`` has odd Y the result is ``n - d``, which shares the same
        x-coordinate with even Y. Otherwise *secret* is returned unchanged.
        """
        raw = validate_secret_key(secret)
        compressed = PrivateKey(raw).public_key.format(compressed=True)
        if compressed[0] == _EVEN_Y_PREFIX:
            return raw
        d = int.from_bytes(raw, "big")
        return ((SECP256K1_ORDER - d) % SECP256K1_ORDER).to_bytes(SECRET_KEY_SIZE, "big")

    def sign(
        self,
        secret: SecretLike,
        message_hash: bytes,
        aux_rand: bytes | None = None,
    ) -> bytes:
        """Produce a 64-byte BIP-340 signature over a 32-byte message hash.

        Args:
            secret: 32-byte secret key; normalized to even Y before signing.
            message_hash: The 32-byte digest to sign (an event id).
            aux_rand: Optional 32 bytes of auxiliary randomness. Defaults to
                zeros, which makes signing deterministic.

        Raises:
            InvalidInputLengthError: If any buffer is mis-sized.
            InvalidKeyError: If the secret scalar is out of range.
        """
        message_hash = _as_bytes(message_hash, "message hash")
        _require_length(message_hash, MESSAGE_HASH_SIZE, "message hash")
        if aux_rand is None:
            aux_rand = _AUX_ZERO
        aux_rand = _as_bytes(aux_rand, "aux_rand")
        _require_length(aux_rand, 32, "aux_rand")

        normalized = self.normalize_for_signing(secret)
        return PrivateKey(normalized).sign_schnorr(message_hash, aux_rand)

    def verify(self, signature: bytes, message_hash: bytes, pubkey: bytes) -> bool:
        """Verify a BIP-340 signature.

        Args:
            signature: 64-byte ``r || s`` signature.
            message_hash: The 32-byte digest that was signed.
            pubkey: 32-byte x-only key, or a 33-byte compressed key whose
                leading parity byte is dropped unread.

        Returns:
            ``True`` if the signature is valid, ``False`` otherwise -- including
            when *pubkey* is not the x-coordinate of a curve point.

        Raises:
            InvalidInputLengthError: If a buffer is mis-sized.
        """
        signature = _as_bytes(signature, "signature")
        message_hash = _as_bytes(message_hash, "message hash")
        pubkey = _as_bytes(pubkey, "public key")
        _require_length(signature, SIGNATURE_SIZE, "signature")
        _require_length(message_hash, MESSAGE_HASH_SIZE, "message hash")

        if len(pubkey) == COMPRESSED_PUBKEY_SIZE:
            # BIP-340 only reads the x-coordinate; the parity byte is ignored
            pubkey = pubkey[1:]
        elif len(pubkey) != XONLY_PUBKEY_SIZE:
            raise InvalidInputLengthError(
                f"public key must be {XONLY_PUBKEY_SIZE} or {COMPRESSED_PUBKEY_SIZE} bytes, "
                f"got {len(pubkey)}"
            )

        try:
            xonly = PublicKeyXOnly(pubkey)
        except ValueError:
            logger.debug("verify_rejected reason=pubkey_not_on_curve")
            return False
        return bool(xonly.verify(signature, message_hash))


__all__ = [
    "RandomSource",
    "SignatureEngine",
    "bytes_to_hex",
    "hex_to_bytes",
    "sha256",
    "validate_secret_key",
]
