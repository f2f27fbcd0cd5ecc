r"""GroupBrotr -- signed NIP-29 group messaging primitives for Nostr.

Builds, signs, and verifies Nostr events for relay-based groups (NIP-29) and
the ``REQ`` subscriptions that read them back. No network I/O: every
operation returns values for a transport owned by the caller.

Imports flow strictly downward:

```text
                 nips          NIP-01 identity/envelopes, NIP-29 catalog
                  |
                utils          Schnorr engine, keys, clock
                  |
               models          Pure frozen dataclasses (zero I/O)
                  |
                core           Exceptions, logging, YAML
```

Attributes:
    core: Exception hierarchy, structured logging, YAML loading.
    models: Pure frozen dataclasses for events and filters.
    utils: BIP-340 signature engine, key handling, clock.
    nips: NIP-01 event identity and envelopes, NIP-29 group builders.

Note:
    Top-level imports (``from groupbrotr import Nip29``) use lazy loading
    and resolve on first access.
"""

import importlib
from importlib.metadata import version as _get_version


__version__ = _get_version("groupbrotr")

__all__ = [
    "Event",
    "Filter",
    "GroupAction",
    "GroupQuery",
    "KeyPair",
    "KeysConfig",
    "Logger",
    "Nip29",
    "Nip29Config",
    "SignatureEngine",
    "UnsignedEvent",
]

_LAZY_IMPORTS: dict[str, tuple[str, str]] = {
    "Logger": ("groupbrotr.core", "Logger"),
    "Event": ("groupbrotr.models", "Event"),
    "Filter": ("groupbrotr.models", "Filter"),
    "UnsignedEvent": ("groupbrotr.models", "UnsignedEvent"),
    "KeyPair": ("groupbrotr.utils.keys", "KeyPair"),
    "KeysConfig": ("groupbrotr.utils.keys", "KeysConfig"),
    "SignatureEngine": ("groupbrotr.utils.crypto", "SignatureEngine"),
    "GroupAction": ("groupbrotr.nips.nip29", "GroupAction"),
    "GroupQuery": ("groupbrotr.nips.nip29", "GroupQuery"),
    "Nip29": ("groupbrotr.nips.nip29", "Nip29"),
    "Nip29Config": ("groupbrotr.nips.nip29", "Nip29Config"),
}


def __getattr__(name: str) -> object:
    if name in _LAZY_IMPORTS:
        module_path, attr_name = _LAZY_IMPORTS[name]
        module = importlib.import_module(module_path)
        value = getattr(module, attr_name)
        globals()[name] = value  # Cache for subsequent access
        return value
    raise AttributeError(f"module 'groupbrotr' has no attribute {name!r}")


def __dir__() -> list[str]:
    return __all__
