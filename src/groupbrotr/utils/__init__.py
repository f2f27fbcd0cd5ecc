"""Cryptographic primitives, Nostr key handling, and time sources.

Attributes:
    crypto: [SignatureEngine][groupbrotr.utils.crypto.SignatureEngine] for
        BIP-340 Schnorr signing over secp256k1, plus SHA-256 and hex helpers.
    keys: Wipeable [SecretKey][groupbrotr.utils.keys.SecretKey],
        [KeyPair][groupbrotr.utils.keys.KeyPair] with NIP-19 encodings, and
        environment-variable key loading with Pydantic validation.
    clock: The [Clock][groupbrotr.utils.clock.Clock] protocol with a system
        implementation and a fixed one for reproducible output.

Note:
    Secret key material is accepted only from the environment or from
    explicit arguments; nothing in this layer reads it from config files
    or writes it to logs.

Examples:
    ```python
    from groupbrotr.utils.keys import KeyPair, KeysConfig
    from groupbrotr.utils.crypto import SignatureEngine
    ```
"""
