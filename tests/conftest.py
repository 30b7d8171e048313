"""Pytest configuration and shared fixtures."""

import pytest
import structlog

from jules_bridge.credentials import GITHUB, JULES, CredentialStore


class InMemoryBackend:
    """Credential backend holding secrets in a dict, keyed by (service, key)."""

    def __init__(self) -> None:
        self.secrets: dict[tuple[str, str], str] = {}
        self.reads: list[tuple[str, str]] = []

    @property
    def name(self) -> str:
        return "memory"

    def get(self, service: str, key: str) -> str | None:
        self.reads.append((service, key))
        return self.secrets.get((service, key))

    def set(self, service: str, key: str, value: str) -> None:
        if not value:
            raise ValueError("Credential value cannot be empty")
        self.secrets[(service, key)] = value

    def delete(self, service: str, key: str) -> bool:
        return self.secrets.pop((service, key), None) is not None


@pytest.fixture
def memory_backend() -> InMemoryBackend:
    """Empty in-memory credential backend."""
    return InMemoryBackend()


@pytest.fixture
def empty_store(memory_backend: InMemoryBackend) -> CredentialStore:
    """Credential store with no secrets set."""
    return CredentialStore(service="jules-bridge-test", backend=memory_backend)


@pytest.fixture
def credential_store(empty_store: CredentialStore) -> CredentialStore:
    """Credential store with both the Jules key and the GitHub token set."""
    empty_store.set(JULES, "jules-test-key")
    empty_store.set(GITHUB, "ghp_test_token_123")
    return empty_store


@pytest.fixture(autouse=True)
def reset_structlog():
    """Undo any logging configuration a CLI test applied."""
    yield
    structlog.reset_defaults()
