"""Shared test constants and deterministic collaborators."""

import hashlib
from collections.abc import Callable


# Valid secp256k1 test keys (DO NOT USE IN PRODUCTION)
VALID_HEX_KEY = (
    "67dea2ed018072d675f5415ecfaed7d2597555e202d85b3d65ea4e58d2d92ffa"  # pragma: allowlist secret
)
VALID_NSEC_KEY = (
    "nsec1vl029mgpspedva04g90vltkh6fvh240zqtv9k0t9af8935ke9laqsnlfe5"  # pragma: allowlist secret
)

# BIP-340 test vector 0
BIP340_SECRET = bytes(31) + b"\x03"
BIP340_PUBKEY = "f9308a019258c31049344f85f89d5229b531c845836f99b08601f113bce036f9"
BIP340_SIGNATURE = (
    "e907831f80848d1069a5371b402410364bdf1c5f8307b0084c55f1ce2dca8215"
    "25f66a4a85ea8b71e482a74f382d2ce5ebeee8fdb2172f477df4900d310536c0"
)

FIXED_SECONDS = 1_700_000_000
FIXED_MILLIS = 123


class SeededRandom:
    """Deterministic byte stream: SHA-256 of ``seed || counter`` blocks."""

    def __init__(self, seed: bytes = b"groupbrotr-tests") -> None:
        self._seed = seed
        self._counter = 0
        self.calls: list[int] = []

    def __call__(self, n: int) -> bytes:
        self.calls.append(n)
        out = b""
        while len(out) < n:
            block = self._seed + self._counter.to_bytes(8, "big")
            out += hashlib.sha256(block).digest()
            self._counter += 1
        return out[:n]


def scripted_random(*chunks: bytes) -> Callable[[int], bytes]:
    """Random source that returns *chunks* in order, one per call."""
    pending = list(chunks)

    def source(n: int) -> bytes:
        return pending.pop(0)

    return source
