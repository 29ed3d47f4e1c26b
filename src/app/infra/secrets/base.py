# src/app/infra/secrets/base.py
"""
Abstract base class for secret storage.
This interface allows swapping the OS keyring for other backends.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional


class SecretStore(ABC):
    """
    Abstract interface for a small key-value store of secrets.

    Implementations:
    - KeyringSecretStore: the operating system keyring
    - InMemorySecretStore: process-local, for tests and local runs
    """

    @abstractmethod
    def get(self, name: str) -> Optional[str]:
        """
        Read a secret.

        Args:
            name: Fixed identifier of the secret (e.g. "ai.gemini.apiKey")

        Returns:
            The stored value, or None if absent or unreadable
        """
        pass

    @abstractmethod
    def set(self, name: str, value: str) -> None:
        """
        Store a secret, replacing any previous value.

        Args:
            name: Fixed identifier of the secret
            value: Secret value

        Raises:
            SecretStoreError: the backend could not store the secret
        """
        pass

    @abstractmethod
    def delete(self, name: str) -> None:
        """
        Remove a secret. Deleting a missing secret is not an error.

        Args:
            name: Fixed identifier of the secret

        Raises:
            SecretStoreError: the backend could not remove the secret
        """
        pass


class InMemorySecretStore(SecretStore):
    """Secret store kept in a dict; nothing survives the process."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._values: dict[str, str] = dict(initial or {})

    def get(self, name: str) -> Optional[str]:
        return self._values.get(name)

    def set(self, name: str, value: str) -> None:
        self._values[name] = value

    def delete(self, name: str) -> None:
        self._values.pop(name, None)
