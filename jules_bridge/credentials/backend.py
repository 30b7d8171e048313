"""Abstract backend protocol for credential storage."""

from typing import Protocol


class CredentialBackend(Protocol):
    """Protocol defining the interface for credential storage backends."""

    @property
    def name(self) -> str:
        """Backend identifier (e.g., 'keyring')."""
        ...

    def get(self, service: str, key: str) -> str | None:
        """Retrieve a credential.

        Args:
            service: Service identifier (e.g., 'jules-bridge')
            key: Key within the service (e.g., 'github')

        Returns:
            Credential value or None if not found
        """
        ...

    def set(self, service: str, key: str, value: str) -> None:
        """Store a credential."""
        ...

    def delete(self, service: str, key: str) -> bool:
        """Delete a credential.

        Returns:
            True if credential was deleted, False if not found
        """
        ...
