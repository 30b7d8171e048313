"""Credential storage for the Jules API key and the GitHub token.

Secrets live in the OS keyring (macOS Keychain, GNOME Keyring / KWallet,
Windows Credential Locker). They are read right before each remote call
and never held in memory beyond it.

Example:
    >>> from jules_bridge.credentials import CredentialStore
    >>> store = CredentialStore()
    >>> store.set("github", "ghp_abc123")
    >>> token = store.require("github")
"""

from jules_bridge.credentials.backend import CredentialBackend
from jules_bridge.credentials.keyring_backend import KeyringBackend
from jules_bridge.credentials.store import (
    GITHUB,
    JULES,
    NAMESPACES,
    CredentialStore,
)
from jules_bridge.exceptions import CredentialError, CredentialMissingError

__all__ = [
    "CredentialBackend",
    "CredentialError",
    "CredentialMissingError",
    "CredentialStore",
    "GITHUB",
    "JULES",
    "KeyringBackend",
    "NAMESPACES",
]
