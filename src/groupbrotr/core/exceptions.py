"""GroupBrotr exception hierarchy.

Provides typed exceptions for every error category the signing and message
layers can surface, so callers can tell "the input was malformed" apart from
"verification ran and the signature is wrong" (the latter is a ``False``
result, never an exception).

Exception hierarchy:

```text
GroupBrotrError (base -- never raised directly)
├── ConfigurationError          -- config validation, missing keys, bad YAML
├── CryptoError                 -- key, hash, and signature input failures
│   ├── InvalidInputLengthError -- wrong-sized key, hash, or signature buffer
│   ├── InvalidEncodingError    -- malformed hex
│   └── InvalidKeyError         -- secret scalar outside (0, n)
└── ProtocolError               -- malformed wire message or group action input
```

See Also:
    [SignatureEngine][groupbrotr.utils.crypto.SignatureEngine]: Raises the
        [CryptoError][groupbrotr.core.exceptions.CryptoError] family before
        any curve operation runs.
    [Nip29][groupbrotr.nips.nip29.builders.Nip29]: Raises
        [ProtocolError][groupbrotr.core.exceptions.ProtocolError] on invalid
        group action parameters.
"""

from __future__ import annotations


class GroupBrotrError(Exception):
    """Base exception for all GroupBrotr errors.

    Never raised directly -- always use a specific subclass.
    """


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


class ConfigurationError(GroupBrotrError):
    """Invalid or missing configuration (YAML, env vars, CLI flags).

    See Also:
        [load_yaml()][groupbrotr.core.yaml.load_yaml]: YAML loading function
            that may trigger configuration errors.
        [load_keys_from_env()][groupbrotr.utils.keys.load_keys_from_env]:
            Raises this when the private key variable is unset.
    """


# ---------------------------------------------------------------------------
# Crypto
# ---------------------------------------------------------------------------


class CryptoError(GroupBrotrError):
    """Base for key, hash, and signature input failures.

    Raised synchronously before any elliptic-curve computation, so a caller
    never observes partial cryptographic state.
    """


class InvalidInputLengthError(CryptoError):
    """A key, message hash, or signature buffer has the wrong size.

    Secret keys and message hashes must be 32 bytes, signatures 64 bytes,
    and public keys 32 (x-only) or 33 (compressed) bytes.
    """


class InvalidEncodingError(CryptoError):
    """Malformed hex string."""


class InvalidKeyError(CryptoError):
    """Secret scalar is zero or not below the secp256k1 group order.

    Surfaced only when generating or importing a key -- an out-of-range
    scalar is never silently reduced or replaced.
    """


# ---------------------------------------------------------------------------
# Protocol
# ---------------------------------------------------------------------------


class ProtocolError(GroupBrotrError):
    """Malformed wire message or invalid NIP-29 group action input.

    See Also:
        [parse_event_envelope()][groupbrotr.nips.nip01.parse_event_envelope]:
            Raises this for envelopes that are not ``EVENT`` frames.
        [groupbrotr.nips][groupbrotr.nips]: NIP implementation modules where
            protocol errors typically originate.
    """
