"""Core layer: exceptions, structured logging, and YAML loading.

Sits at the bottom of the dependency graph -- it imports nothing else from
``groupbrotr`` and every other layer may depend on it.

Attributes:
    exceptions: The [GroupBrotrError][groupbrotr.core.exceptions.GroupBrotrError]
        hierarchy, including the crypto input errors raised by
        [SignatureEngine][groupbrotr.utils.crypto.SignatureEngine].
    Logger: Structured logger supporting key=value and JSON output modes.
        See [Logger][groupbrotr.core.logger.Logger].
    YAML: Safe YAML loading with ``yaml.safe_load()``.
        See [load_yaml()][groupbrotr.core.yaml.load_yaml].
"""

from .exceptions import (
    ConfigurationError,
    CryptoError,
    GroupBrotrError,
    InvalidEncodingError,
    InvalidInputLengthError,
    InvalidKeyError,
    ProtocolError,
)
from .logger import Logger, StructuredFormatter, format_kv_pairs
from .yaml import load_yaml


__all__ = [
    "ConfigurationError",
    "CryptoError",
    "GroupBrotrError",
    "InvalidEncodingError",
    "InvalidInputLengthError",
    "InvalidKeyError",
    "Logger",
    "ProtocolError",
    "StructuredFormatter",
    "format_kv_pairs",
    "load_yaml",
]
