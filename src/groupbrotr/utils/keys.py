"""Nostr key management for GroupBrotr.

Provides [SecretKey][groupbrotr.utils.keys.SecretKey], an owned buffer that
zeroes itself when dropped, [KeyPair][groupbrotr.utils.keys.KeyPair], which
pairs a secret with its x-only public key, and helpers for loading a key from
an environment variable in hex or NIP-19 ``nsec1`` form.

Warning:
    Private keys must **never** be stored in configuration files, source code,
    or logged to any output. Always use environment variables or a secure
    secret management system.

Note:
    NIP-19 bech32 encoding and decoding (``nsec1``/``npub1``) is delegated to
    ``nostr_sdk``. Everything that touches the curve goes through
    [SignatureEngine][groupbrotr.utils.crypto.SignatureEngine].

Examples:
    ```python
    import os

    os.environ["PRIVATE_KEY"] = "nsec1..."  # pragma: allowlist secret
    keys = load_keys_from_env("PRIVATE_KEY")
    print(keys.public_key_hex, keys.to_npub())
    ```
"""

from __future__ import annotations

import hmac
import os
from dataclasses import dataclass, field
from typing import Any

from nostr_sdk import NostrSdkError
from nostr_sdk import PublicKey as NostrPublicKey
from nostr_sdk import SecretKey as NostrSecretKey
from pydantic import BaseModel, Field, model_validator

from groupbrotr.core.exceptions import ConfigurationError, InvalidEncodingError

from .crypto import SignatureEngine, bytes_to_hex, hex_to_bytes, validate_secret_key


ENV_PRIVATE_KEY = "PRIVATE_KEY"  # pragma: allowlist secret  # Default env var name

_NSEC_PREFIX = "nsec1"

_default_engine = SignatureEngine()


class SecretKey:
    """Owned 32-byte secret scalar that is zeroed when no longer needed.

    The key lives in a private ``bytearray``. [wipe()][groupbrotr.utils.keys.SecretKey.wipe]
    overwrites it with zeros; it runs on context-manager exit and when the
    object is garbage collected. ``repr`` never shows key material and
    equality uses a constant-time comparison.

    Args:
        raw: 32-byte scalar in ``(0, n)``. The bytes are copied.

    Raises:
        InvalidInputLengthError: If *raw* is not 32 bytes.
        InvalidKeyError: If the scalar is out of range.

    Note:
        ``bytes(secret)`` returns a temporary immutable copy for the crypto
        backend. Python cannot scrub those copies; keep them call-scoped.
    """

    __slots__ = ("_buf",)

    def __init__(self, raw: bytes | bytearray) -> None:
        self._buf = bytearray(validate_secret_key(raw))

    def __bytes__(self) -> bytes:
        if not any(self._buf):
            raise ValueError("secret key has been wiped")
        return bytes(self._buf)

    def hex(self) -> str:
        """Lowercase hex of the secret. Handle the result with the same care."""
        return bytes_to_hex(bytes(self))

    def wipe(self) -> None:
        """Overwrite the secret with zeros. Later use raises ``ValueError``."""
        self._buf[:] = bytes(len(self._buf))

    @property
    def is_wiped(self) -> bool:
        return not any(self._buf)

    def __enter__(self) -> SecretKey:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.wipe()

    def __del__(self) -> None:
        buf = getattr(self, "_buf", None)
        if buf is not None:
            self.wipe()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SecretKey):
            return NotImplemented
        return hmac.compare_digest(self._buf, other._buf)

    def __repr__(self) -> str:
        return "SecretKey(<redacted>)" if not self.is_wiped else "SecretKey(<wiped>)"


@dataclass(frozen=True, slots=True)
class KeyPair:
    """A secret key and its derived x-only public key.

    Construct with [generate()][groupbrotr.utils.keys.KeyPair.generate] or
    [from_secret()][groupbrotr.utils.keys.KeyPair.from_secret]; the public key
    is derived once at construction.

    Attributes:
        secret: Owned [SecretKey][groupbrotr.utils.keys.SecretKey].
        public_key: 32-byte x-only public key.

    Examples:
        ```python
        keys = KeyPair.generate()
        keys.public_key_hex      # 64 hex chars
        keys.to_npub()           # "npub1..."
        ```
    """

    # hashed by public key only; SecretKey is unhashable
    secret: SecretKey = field(hash=False)
    public_key: bytes = field(init=False)

    def __post_init__(self) -> None:
        if not isinstance(self.secret, SecretKey):
            raise TypeError(f"secret must be a SecretKey, got {type(self.secret).__name__}")
        object.__setattr__(self, "public_key", _default_engine.derive_public_key(self.secret))

    @property
    def public_key_hex(self) -> str:
        """The x-only public key as 64 lowercase hex chars."""
        return bytes_to_hex(self.public_key)

    def to_npub(self) -> str:
        """Encode the public key as a NIP-19 ``npub1`` string."""
        return NostrPublicKey.parse(self.public_key_hex).to_bech32()

    def to_nsec(self) -> str:
        """Encode the secret key as a NIP-19 ``nsec1`` string."""
        return NostrSecretKey.parse(self.secret.hex()).to_bech32()

    @classmethod
    def generate(cls, engine: SignatureEngine | None = None) -> KeyPair:
        """Create a key pair from a freshly drawn secret scalar."""
        engine = engine or _default_engine
        return cls(SecretKey(engine.generate_private_key()))

    @classmethod
    def from_secret(cls, value: bytes | bytearray | str) -> KeyPair:
        """Import a secret key from raw bytes, hex, or an ``nsec1`` string.

        Raises:
            InvalidInputLengthError: If the decoded key is not 32 bytes.
            InvalidEncodingError: If the hex or bech32 text is malformed.
            InvalidKeyError: If the scalar is out of range.
        """
        if isinstance(value, str):
            value = parse_secret_key(value)
        return cls(SecretKey(value))


def parse_secret_key(value: str) -> bytes:
    """Decode a 64-char hex or ``nsec1`` bech32 secret key to raw bytes.

    Raises:
        InvalidEncodingError: If *value* is neither valid hex nor a valid
            ``nsec1`` string.
    """
    value = value.strip()
    if value.startswith(_NSEC_PREFIX):
        try:
            value = NostrSecretKey.parse(value).to_hex()
        except NostrSdkError as e:
            raise InvalidEncodingError(f"invalid nsec key: {e}") from e
    return hex_to_bytes(value)


def load_keys_from_env(env_var: str) -> KeyPair:
    """Load a key pair from an environment variable.

    Args:
        env_var: Name of the environment variable holding the private key
            (``nsec1`` bech32 or 64-char hex).

    Raises:
        ConfigurationError: If the variable is not set or is empty.
        CryptoError: If the key value is malformed or out of range.

    Warning:
        The returned key pair holds the secret for its lifetime. Do not
        serialize or log it.
    """
    value = os.getenv(env_var)

    if not value:
        raise ConfigurationError(
            f"{env_var} environment variable is required. Generate one with: "
            "python -m groupbrotr keygen"
        )

    return KeyPair.from_secret(value)


class KeysConfig(BaseModel):
    """Pydantic model that auto-loads a key pair from an environment variable.

    The ``keys`` field is populated during validation from the variable
    named by ``keys_env``, so a missing or invalid key fails at startup.

    Attributes:
        keys_env: Environment variable name for the private key.
        keys: Loaded [KeyPair][groupbrotr.utils.keys.KeyPair].

    Warning:
        The ``keys`` field contains a live private key. Do not serialize this
        model to logs, JSON, or persistent storage.
    """

    model_config = {"arbitrary_types_allowed": True}

    keys_env: str = Field(
        default=ENV_PRIVATE_KEY,
        min_length=1,
        description="Environment variable name for private key",
    )
    keys: KeyPair = Field(description="Keys loaded from keys_env (required)", exclude=True)

    @model_validator(mode="before")
    @classmethod
    def _load_keys_from_env(cls, data: Any) -> Any:
        """Auto-populate the ``keys`` field from the environment variable."""
        if isinstance(data, dict) and "keys" not in data:
            env_var = data.get("keys_env", ENV_PRIVATE_KEY)
            data = {**data, "keys": load_keys_from_env(env_var)}
        return data
