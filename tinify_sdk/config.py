"""
Configuration for the Tinify SDK.

Module constants are read from the environment once, at import time.
Per-caller settings (API key, shared proxy, endpoint) live in an explicit
:class:`Configuration` value that is passed to every :class:`Client`.
"""

import os
from dataclasses import dataclass, field
from typing import Optional

from dotenv import load_dotenv

from .errors import ConfigurationError

API_ENDPOINT = os.getenv("TINIFY_API_ENDPOINT", "https://api.tinify.com")
SHRINK_PATH = "/shrink"
AUTH_USERNAME = "api"
MIN_API_KEY_LENGTH = 5

# dial and TLS handshake share the connect timeout
CONNECT_TIMEOUT = float(os.getenv("TINIFY_CONNECT_TIMEOUT", "10.0"))
READ_TIMEOUT = float(os.getenv("TINIFY_READ_TIMEOUT", "90.0"))
MAX_IDLE_CONNECTIONS = int(os.getenv("TINIFY_MAX_IDLE_CONNECTIONS", "100"))

LOG_LEVEL = os.getenv("TINIFY_API_DEBUG", "WARNING").upper()


@dataclass(frozen=True)
class Configuration:
    """
    Settings shared by every client built from them.

    Args:
        api_key: Tinify API key (see https://tinypng.com/developers)
        proxy: Proxy URL applied to all requests of clients using this
            configuration; takes precedence over per-client proxies
        endpoint: Base URL of the Tinify API

    Raises:
        ConfigurationError: If the API key is missing or too short
    """

    api_key: str = field(repr=False)
    proxy: Optional[str] = None
    endpoint: str = API_ENDPOINT

    def __post_init__(self):
        if not self.api_key:
            raise ConfigurationError(
                "An API key is required; set TINIFY_API_KEY or pass api_key"
            )
        if len(self.api_key) < MIN_API_KEY_LENGTH:
            raise ConfigurationError(
                f"API key is too short ({len(self.api_key)} characters); "
                "check the value of TINIFY_API_KEY"
            )

    @classmethod
    def from_environment(cls, dotenv_path: Optional[str] = None) -> "Configuration":
        """
        Build a configuration from environment variables.

        A ``.env`` file is merged into the environment first; variables that
        are already set are never overridden.

        Args:
            dotenv_path: Explicit ``.env`` file (default: search upwards from cwd)

        Returns:
            Configuration read from TINIFY_API_KEY, TINIFY_PROXY and
            TINIFY_API_ENDPOINT

        Example:
            >>> config = Configuration.from_environment()
            >>> client = Client(config)
        """
        load_dotenv(dotenv_path=dotenv_path, override=False)
        return cls(
            api_key=os.getenv("TINIFY_API_KEY", ""),
            proxy=os.getenv("TINIFY_PROXY") or None,
            endpoint=os.getenv("TINIFY_API_ENDPOINT", API_ENDPOINT),
        )

    def masked_key(self) -> str:
        """Return the API key with everything but the last four characters hidden."""
        return "[..." + self.api_key[-4:] + "]"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"api_key='{self.masked_key()}', "
            f"proxy={self.proxy!r}, "
            f"endpoint={self.endpoint!r})"
        )
