"""OS-level keyring backend using system credential stores.

Platform Support:
- Linux: Secret Service API (GNOME Keyring, KWallet)
- macOS: Keychain
- Windows: Windows Credential Locker
"""

from typing import cast

import keyring
import structlog
from keyring.errors import KeyringError, PasswordDeleteError

from jules_bridge.exceptions import CredentialError

log = structlog.get_logger(__name__)


class KeyringBackend:
    """OS-level credential storage using the system keyring.

    Example:
        >>> backend = KeyringBackend()
        >>> backend.set("jules-bridge", "github", "ghp_abc123")
        >>> token = backend.get("jules-bridge", "github")
        >>> backend.delete("jules-bridge", "github")
    """

    @property
    def name(self) -> str:
        return "keyring"

    def get(self, service: str, key: str) -> str | None:
        """Retrieve credential from OS keyring.

        Raises:
            CredentialError: If the keyring operation fails
        """
        try:
            credential = cast(str | None, keyring.get_password(service, key))
        except KeyringError as e:
            raise CredentialError(f"Keyring operation failed: {e}", namespace=key) from e

        if credential is not None:
            log.debug("keyring_credential_read", service=service, key=key)
        return credential

    def set(self, service: str, key: str, value: str) -> None:
        """Store credential in OS keyring.

        Raises:
            ValueError: If value is empty
            CredentialError: If the keyring operation fails
        """
        if not value:
            raise ValueError("Credential value cannot be empty")

        try:
            keyring.set_password(service, key, value)
        except KeyringError as e:
            raise CredentialError(f"Failed to store credential: {e}", namespace=key) from e

        log.info("keyring_credential_stored", service=service, key=key)

    def delete(self, service: str, key: str) -> bool:
        """Delete credential from OS keyring.

        Returns:
            True if deleted, False if not found

        Raises:
            CredentialError: If the keyring operation fails
        """
        try:
            keyring.delete_password(service, key)
        except PasswordDeleteError:
            # Credential doesn't exist - not an error
            return False
        except KeyringError as e:
            raise CredentialError(f"Failed to delete credential: {e}", namespace=key) from e

        log.info("keyring_credential_deleted", service=service, key=key)
        return True
