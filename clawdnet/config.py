"""Client configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping

DEFAULT_BASE_URL = "https://clawdnet.xyz"
DEFAULT_TIMEOUT = 30.0

ENV_API_KEY = "CLAWDNET_API_KEY"
ENV_BASE_URL = "CLAWDNET_BASE_URL"
ENV_TIMEOUT = "CLAWDNET_TIMEOUT"


@dataclass(frozen=True)
class ClawdNetConfig:
    """Settings for a ClawdNet client.

    Attributes:
        api_key: Agent API key sent as a bearer token. Optional for
            public endpoints such as listing agents.
        base_url: ClawdNet API base URL.
        timeout: Per-request timeout in seconds.
    """

    api_key: str | None = None
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ClawdNetConfig":
        """Build a config from CLAWDNET_* environment variables.

        Args:
            environ: Mapping to read from. Defaults to os.environ.

        Returns:
            A ClawdNetConfig; unset variables fall back to defaults.

        Raises:
            ValueError: If CLAWDNET_TIMEOUT is set but not a positive number.
        """
        if environ is None:
            environ = os.environ

        timeout = DEFAULT_TIMEOUT
        raw_timeout = environ.get(ENV_TIMEOUT)
        if raw_timeout:
            try:
                timeout = float(raw_timeout)
            except ValueError as exc:
                raise ValueError(
                    f"Invalid {ENV_TIMEOUT}: {raw_timeout!r}"
                ) from exc
            if timeout <= 0:
                raise ValueError(f"Invalid {ENV_TIMEOUT}: {raw_timeout!r}")

        return cls(
            api_key=environ.get(ENV_API_KEY) or None,
            base_url=environ.get(ENV_BASE_URL) or DEFAULT_BASE_URL,
            timeout=timeout,
        )
