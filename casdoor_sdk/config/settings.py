"""Settings loader with environment variable, TOML and Docker secrets integration."""
from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from cryptography import x509
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.types import PublicKeyTypes

from casdoor_sdk.core.exceptions import ConfigError

logger = logging.getLogger(__name__)

SECRETS_DIR = "/run/secrets"
REQUIRED_KEYS = ("endpoint", "client_id", "client_secret", "certificate", "org_name")


def _load_secret_from_file(secret_name: str, env_var: str | None = None) -> str | None:
    """
    Load secret from /run/secrets (Docker secrets pattern).

    Priority:
    1. /run/secrets/{secret_name} (Docker secrets mount)
    2. Environment variable (fallback)

    Args:
        secret_name: Name of the secret file in /run/secrets
        env_var: Optional environment variable name to check as fallback

    Returns:
        Secret value or None if not found
    """
    secret_file = Path(SECRETS_DIR) / secret_name

    if secret_file.is_file():
        try:
            secret_value = secret_file.read_text().strip()
        except OSError as exc:
            logger.warning("Failed to read %s/%s: %s", SECRETS_DIR, secret_name, exc)
        else:
            if secret_value:
                logger.debug("Loaded %s from %s", secret_name, SECRETS_DIR)
                return secret_value

    if env_var:
        secret_value = os.getenv(env_var)
        if secret_value:
            logger.debug("Loaded %s from environment", env_var)
            return secret_value

    return None


@dataclass(frozen=True)
class Config:
    """Casdoor connection settings.

    Immutable once built, so one instance can be shared by every service and
    every concurrent request.
    """

    # Casdoor server URL, such as http://localhost:8000
    endpoint: str
    client_id: str
    client_secret: str = field(repr=False)
    # x509 certificate (or bare public key) of Application.cert, PEM encoded
    certificate: str = field(repr=False)
    org_name: str
    app_name: Optional[str] = None
    # Seconds; None keeps the HTTP client's default
    timeout: Optional[float] = None

    def __post_init__(self):
        object.__setattr__(self, "endpoint", self.endpoint.rstrip("/"))

    def id(self, name: str) -> str:
        """Return the ``{organization}/{name}`` identifier Casdoor expects."""
        return f"{self.org_name}/{name}"

    def public_key(self) -> PublicKeyTypes:
        """Load the JWT verification key from ``certificate``.

        Accepts an X.509 certificate (the usual content of Application.cert)
        or a bare ``PUBLIC KEY`` block.

        Raises:
            ConfigError: If the PEM cannot be parsed
        """
        pem = self.certificate.strip().encode()
        try:
            if b"BEGIN CERTIFICATE" in pem:
                return x509.load_pem_x509_certificate(pem).public_key()
            return serialization.load_pem_public_key(pem)
        except ValueError as exc:
            raise ConfigError(f"Invalid certificate for JWT verification: {exc}") from exc

    @classmethod
    def from_mapping(cls, values: dict[str, Any]) -> "Config":
        missing = [key for key in REQUIRED_KEYS if not values.get(key)]
        if missing:
            raise ConfigError(f"Missing Casdoor configuration: {', '.join(missing)}")
        timeout = values.get("timeout")
        try:
            timeout = float(timeout) if timeout not in (None, "") else None
        except (TypeError, ValueError) as exc:
            raise ConfigError(f"Invalid timeout {timeout!r}: {exc}") from exc
        return cls(
            endpoint=str(values["endpoint"]),
            client_id=str(values["client_id"]),
            client_secret=str(values["client_secret"]),
            certificate=str(values["certificate"]),
            org_name=str(values["org_name"]),
            app_name=values.get("app_name") or None,
            timeout=timeout,
        )

    @classmethod
    def from_toml(cls, path: str | Path) -> "Config":
        """Create a Config from a TOML file.

        Raises:
            ConfigError: If the file is unreadable, malformed or incomplete
        """
        try:
            with open(path, "rb") as fh:
                values = tomllib.load(fh)
        except (OSError, tomllib.TOMLDecodeError) as exc:
            raise ConfigError(f"Cannot load Casdoor config from {path}: {exc}") from exc
        return cls.from_mapping(values)


def _read_certificate() -> str | None:
    cert_file = os.environ.get("CASDOOR_CERTIFICATE_FILE")
    if cert_file:
        try:
            return Path(cert_file).read_text()
        except OSError as exc:
            raise ConfigError(f"Cannot read CASDOOR_CERTIFICATE_FILE={cert_file}: {exc}") from exc
    return _load_secret_from_file("casdoor_certificate", "CASDOOR_CERTIFICATE")


def load_config() -> Config:
    """Load Casdoor settings from the environment and /run/secrets.

    Raises:
        ConfigError: If a required value is missing
    """
    values = {
        "endpoint": os.environ.get("CASDOOR_ENDPOINT", ""),
        "client_id": os.environ.get("CASDOOR_CLIENT_ID", ""),
        "client_secret": _load_secret_from_file("casdoor_client_secret", "CASDOOR_CLIENT_SECRET"),
        "certificate": _read_certificate(),
        "org_name": os.environ.get("CASDOOR_ORG_NAME", ""),
        "app_name": os.environ.get("CASDOOR_APP_NAME"),
        "timeout": os.environ.get("CASDOOR_TIMEOUT"),
    }
    return Config.from_mapping(values)
