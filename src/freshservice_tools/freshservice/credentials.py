"""Connection profile management for the Freshservice API.

Values are resolved in the following order:
1. Explicit parameters passed to the client
2. Environment variables (FRESHSERVICE_BASE_URL, FRESHSERVICE_API_KEY, FRESHSERVICE_THROTTLE)
3. System keyring (via keyring library)
4. .env file in current directory or parent directories

A missing base URL is a configuration error. A missing API key is not: the
engine raises NotAuthenticatedError when a call is attempted without a token.

Example:
    from freshservice_tools.freshservice.credentials import get_credentials

    creds = get_credentials()
    print(creds.base_url, creds.token)
"""

import base64
import logging
import os
from pathlib import Path
from typing import NamedTuple

import keyring

logger = logging.getLogger(__name__)

# Default keyring service name
DEFAULT_SERVICE = "freshservice-tools"

# Environment variable names
ENV_BASE_URL = "FRESHSERVICE_BASE_URL"
ENV_API_KEY = "FRESHSERVICE_API_KEY"
ENV_THROTTLE = "FRESHSERVICE_THROTTLE"

# Keyring account names
KEYRING_BASE_URL = "base_url"
KEYRING_API_KEY = "api_key"
KEYRING_THROTTLE = "throttle"

_TRUTHY = {"1", "true", "yes", "on"}


class FreshserviceCredentials(NamedTuple):
    """Freshservice connection profile."""

    base_url: str
    api_key: str | None
    throttle: bool = False

    @property
    def token(self) -> str | None:
        """Pre-encoded Basic auth token, or None without an API key."""
        if not self.api_key:
            return None
        return encode_token(self.api_key)


def encode_token(api_key: str) -> str:
    """Encode an API key the way Freshservice expects it in Basic auth.

    Freshservice takes the API key as the user name and ignores the password,
    so the credential pair is ``<api_key>:X``.
    """
    return base64.b64encode(f"{api_key}:X".encode("utf-8")).decode("ascii")


def get_credentials(
    base_url: str | None = None,
    api_key: str | None = None,
    throttle: bool | None = None,
    service: str = DEFAULT_SERVICE,
) -> FreshserviceCredentials:
    """Get the Freshservice connection profile from various sources.

    Args:
        base_url: Explicit instance URL (e.g., https://acme.freshservice.com)
        api_key: Explicit API key
        throttle: Explicit throttling switch
        service: Keyring service name

    Returns:
        FreshserviceCredentials with base_url, api_key and throttle

    Raises:
        ValueError: If no base URL can be found or it is not https
    """
    resolved_url = base_url or os.environ.get(ENV_BASE_URL)
    resolved_key = api_key or os.environ.get(ENV_API_KEY)
    resolved_throttle = os.environ.get(ENV_THROTTLE)

    if not resolved_url:
        resolved_url = _get_from_keyring(service, KEYRING_BASE_URL)
    if not resolved_key:
        resolved_key = _get_from_keyring(service, KEYRING_API_KEY)
    if resolved_throttle is None:
        resolved_throttle = _get_from_keyring(service, KEYRING_THROTTLE)

    if not all([resolved_url, resolved_key, resolved_throttle is not None]):
        env_vars = _load_dotenv()
        if not resolved_url:
            resolved_url = env_vars.get(ENV_BASE_URL)
        if not resolved_key:
            resolved_key = env_vars.get(ENV_API_KEY)
        if resolved_throttle is None:
            resolved_throttle = env_vars.get(ENV_THROTTLE)

    if not resolved_url:
        raise ValueError(
            f"Missing Freshservice base URL. Set {ENV_BASE_URL}, "
            f"use the keyring, or provide it explicitly."
        )
    if not resolved_url.startswith("https://"):
        raise ValueError(f"Freshservice base URL must use https: {resolved_url}")

    if throttle is None:
        throttle = (resolved_throttle or "").strip().lower() in _TRUTHY

    return FreshserviceCredentials(
        base_url=resolved_url.rstrip("/"),
        api_key=resolved_key or None,
        throttle=throttle,
    )


def save_credentials(
    base_url: str,
    api_key: str,
    throttle: bool = False,
    service: str = DEFAULT_SERVICE,
) -> None:
    """Save the connection profile to the system keyring.

    Args:
        base_url: Freshservice instance URL
        api_key: API key
        throttle: Whether to self-throttle near the rate limit
        service: Keyring service name
    """
    keyring.set_password(service, KEYRING_BASE_URL, base_url)
    keyring.set_password(service, KEYRING_API_KEY, api_key)
    keyring.set_password(service, KEYRING_THROTTLE, "true" if throttle else "false")
    logger.info("Credentials saved to keyring (service: %s)", service)


def delete_credentials(service: str = DEFAULT_SERVICE) -> None:
    """Delete the connection profile from the system keyring.

    Args:
        service: Keyring service name
    """
    for account in [KEYRING_BASE_URL, KEYRING_API_KEY, KEYRING_THROTTLE]:
        try:
            keyring.delete_password(service, account)
        except keyring.errors.PasswordDeleteError:
            pass  # Already deleted or doesn't exist
    logger.info("Credentials deleted from keyring (service: %s)", service)


def _get_from_keyring(service: str, account: str) -> str | None:
    """Get a value from the system keyring, None if unavailable."""
    try:
        return keyring.get_password(service, account)
    except keyring.errors.KeyringError as e:
        logger.debug("Keyring error for %s/%s: %s", service, account, e)
        return None


def _load_dotenv() -> dict[str, str]:
    """Load variables from the nearest .env file.

    Returns:
        Dictionary of variables from .env file
    """
    env_vars: dict[str, str] = {}

    current = Path.cwd()
    for directory in [current, *current.parents]:
        env_file = directory / ".env"
        if env_file.exists():
            logger.debug("Loading .env from %s", env_file)
            try:
                with open(env_file, encoding="utf-8") as f:
                    for line in f:
                        line = line.strip()
                        if not line or line.startswith("#"):
                            continue
                        if "=" in line:
                            key, _, value = line.partition("=")
                            key = key.strip()
                            value = value.strip()
                            if value and value[0] in ('"', "'") and value[-1] == value[0]:
                                value = value[1:-1]
                            env_vars[key] = value
            except OSError as e:
                logger.debug("Error reading .env file: %s", e)
            break  # Only load from first .env found

    return env_vars
