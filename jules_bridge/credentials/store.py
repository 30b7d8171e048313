"""Namespaced credential access for the two secrets jules-bridge uses.

``CredentialStore`` is a pass-through over a backend: it maps the
``"jules"`` and ``"github"`` namespaces onto keys under one keyring
service and turns a missing secret into an actionable error.
"""

from dataclasses import dataclass

from jules_bridge.credentials.backend import CredentialBackend
from jules_bridge.credentials.keyring_backend import KeyringBackend
from jules_bridge.exceptions import CredentialMissingError

JULES = "jules"
GITHUB = "github"


@dataclass(frozen=True)
class _Namespace:
    label: str
    command: str


NAMESPACES: dict[str, _Namespace] = {
    JULES: _Namespace(label="Jules API key", command="set-jules-key"),
    GITHUB: _Namespace(label="GitHub token", command="set-github-token"),
}

DEFAULT_SERVICE = "jules-bridge"


class CredentialStore:
    """Get/set the Jules API key and GitHub token by namespace.

    Attributes:
        service: Keyring service name all secrets are stored under
        backend: Storage backend (OS keyring by default)
    """

    def __init__(
        self,
        service: str = DEFAULT_SERVICE,
        backend: CredentialBackend | None = None,
    ) -> None:
        self.service = service
        self.backend = backend if backend is not None else KeyringBackend()

    def get(self, namespace: str) -> str | None:
        """Return the stored secret, or None if it has not been set."""
        _check_namespace(namespace)
        return self.backend.get(self.service, namespace) or None

    def set(self, namespace: str, secret: str) -> None:
        """Store a secret, replacing any previous value."""
        _check_namespace(namespace)
        self.backend.set(self.service, namespace, secret.strip())

    def delete(self, namespace: str) -> bool:
        """Remove a secret. Returns False if nothing was stored."""
        _check_namespace(namespace)
        return self.backend.delete(self.service, namespace)

    def is_set(self, namespace: str) -> bool:
        return self.get(namespace) is not None

    def require(self, namespace: str) -> str:
        """Return the secret or fail before any network I/O happens.

        Raises:
            CredentialMissingError: If the secret is not stored. The message
                names the command that stores it.
        """
        secret = self.get(namespace)
        if secret is None:
            info = NAMESPACES[namespace]
            raise CredentialMissingError(
                f'{info.label} not set. Please run "jules-bridge {info.command}".',
                namespace=namespace,
                suggestion=f"jules-bridge {info.command}",
            )
        return secret


def _check_namespace(namespace: str) -> None:
    if namespace not in NAMESPACES:
        raise ValueError(f"Unknown credential namespace: {namespace!r}")
