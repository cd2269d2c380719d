# SPDX-License-Identifier: Apache-2.0
"""Client configuration resolved from arguments and environment."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import ClassVar

from nativ.errors import AuthenticationError
from nativ.version import __version__

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClientConfig:
    """Immutable connection settings shared by all calls of a client.

    Attributes:
        api_key: Nativ API key sent as the X-API-Key header.
        base_url: API root without trailing slashes.
        timeout: Per-request timeout in seconds.
    """

    api_key: str
    base_url: str = "https://api.usenativ.com"
    timeout: float = 120.0

    DEFAULT_BASE_URL: ClassVar[str] = "https://api.usenativ.com"
    DEFAULT_TIMEOUT: ClassVar[float] = 120.0

    # Environment variable names
    API_KEY_ENV_VAR: ClassVar[str] = "NATIV_API_KEY"
    BASE_URL_ENV_VAR: ClassVar[str] = "NATIV_API_URL"

    @classmethod
    def resolve(
        cls,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
    ) -> ClientConfig:
        """Build a config. Priority: argument > environment > default.

        Args:
            api_key: Explicit API key.
            base_url: Explicit API root.
            timeout: Request timeout in seconds.

        Returns:
            Resolved configuration.

        Raises:
            AuthenticationError: If no API key is given or set in NATIV_API_KEY.
            ValueError: If timeout is not positive.
        """
        key = api_key or os.environ.get(cls.API_KEY_ENV_VAR)
        if not key:
            raise AuthenticationError(
                "No API key provided. Pass api_key= or set the "
                f"{cls.API_KEY_ENV_VAR} environment variable. Create one at "
                "https://dashboard.usenativ.com -> Settings -> API Keys"
            )

        url = base_url or os.environ.get(cls.BASE_URL_ENV_VAR) or cls.DEFAULT_BASE_URL
        url = url.rstrip("/")

        if timeout is None:
            timeout = cls.DEFAULT_TIMEOUT
        if timeout <= 0:
            raise ValueError(f"timeout must be positive, got {timeout}")

        logger.debug("Using Nativ API at %s (timeout %.1fs)", url, timeout)
        return cls(api_key=key, base_url=url, timeout=timeout)

    @property
    def user_agent(self) -> str:
        """User-Agent header value."""
        return f"nativ-python/{__version__}"

    def __repr__(self) -> str:
        # Mask the API key
        return (
            f"ClientConfig(api_key='***', base_url={self.base_url!r}, "
            f"timeout={self.timeout!r})"
        )
