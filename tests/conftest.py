"""
Pytest configuration and shared fixtures for GroupBrotr tests.

Provides:
- A fixed clock and a deterministic random source
- Sample key pairs with known hex, nsec, and public key values
- A Nip29 builder wired to the deterministic collaborators
"""

import logging

import pytest
from fixtures.samples import (
    BIP340_SECRET,
    FIXED_MILLIS,
    FIXED_SECONDS,
    VALID_HEX_KEY,
    SeededRandom,
)

from groupbrotr.nips.nip29 import Nip29, Nip29Config
from groupbrotr.utils.clock import FixedClock
from groupbrotr.utils.crypto import SignatureEngine
from groupbrotr.utils.keys import KeyPair


# ============================================================================
# Logging Configuration
# ============================================================================


@pytest.fixture(scope="session", autouse=True)
def setup_logging() -> None:
    """Configure logging for tests."""
    logging.basicConfig(level=logging.DEBUG)


# ============================================================================
# Collaborators
# ============================================================================


@pytest.fixture
def fixed_clock() -> FixedClock:
    """Clock pinned at 2023-11-14T22:13:20Z plus 123 ms."""
    return FixedClock(FIXED_SECONDS, FIXED_MILLIS)


@pytest.fixture
def seeded_random() -> SeededRandom:
    """Reproducible random source."""
    return SeededRandom()


@pytest.fixture
def engine(seeded_random: SeededRandom) -> SignatureEngine:
    """Signature engine drawing from the seeded random source."""
    return SignatureEngine(random_source=seeded_random)


# ============================================================================
# Keys
# ============================================================================


@pytest.fixture
def keys() -> KeyPair:
    """Key pair built from the known test hex key."""
    return KeyPair.from_secret(VALID_HEX_KEY)


@pytest.fixture
def other_keys() -> KeyPair:
    """A second, unrelated key pair (BIP-340 vector 0 secret)."""
    return KeyPair.from_secret(BIP340_SECRET)


# ============================================================================
# Builders
# ============================================================================


@pytest.fixture
def nip29(engine: SignatureEngine, fixed_clock: FixedClock) -> Nip29:
    """Nip29 builder with a fixed clock and deterministic randomness."""
    return Nip29(config=Nip29Config(), engine=engine, clock=fixed_clock)
