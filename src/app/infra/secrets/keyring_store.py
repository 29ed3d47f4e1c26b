# src/app/infra/secrets/keyring_store.py
"""
OS keyring secret store (macOS Keychain, Windows Credential Locker,
Secret Service on Linux) via the keyring package.
"""
from __future__ import annotations

import logging
from typing import Optional

import keyring
from keyring.errors import KeyringError, PasswordDeleteError

from src.app.domain.errors import SecretStoreError
from src.app.infra.secrets.base import SecretStore

logger = logging.getLogger(__name__)


class KeyringSecretStore(SecretStore):
    """
    Secrets stored under a single keyring service name.

    Reads that fail in the backend are reported as missing, so callers can
    fall back to other key sources. Failed writes raise SecretStoreError.
    """

    def __init__(self, service_name: str = "yummr"):
        self.service_name = service_name

    def get(self, name: str) -> Optional[str]:
        try:
            return keyring.get_password(self.service_name, name)
        except KeyringError as e:
            logger.warning("Keyring read failed for %s/%s: %s", self.service_name, name, type(e).__name__)
            return None

    def set(self, name: str, value: str) -> None:
        try:
            keyring.set_password(self.service_name, name, value)
        except KeyringError as e:
            logger.error("Keyring write failed for %s/%s: %s", self.service_name, name, type(e).__name__)
            raise SecretStoreError(name, f"Keyring write failed ({type(e).__name__})") from e
        logger.info("Stored secret %s/%s", self.service_name, name)

    def delete(self, name: str) -> None:
        try:
            keyring.delete_password(self.service_name, name)
        except PasswordDeleteError:
            logger.debug("Secret %s/%s was not stored", self.service_name, name)
        except KeyringError as e:
            logger.error("Keyring delete failed for %s/%s: %s", self.service_name, name, type(e).__name__)
            raise SecretStoreError(name, f"Keyring delete failed ({type(e).__name__})") from e
