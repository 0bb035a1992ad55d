"""HTTP client that applies configured headers and an optional proxy."""

from __future__ import annotations

from dataclasses import dataclass, field

import requests


@dataclass
class ClientConfig:
    """Settings shared by every HTTP client of an evaluation run."""

    rate: int = 100
    headers: dict[str, str] = field(default_factory=dict)
    proxy: str = ""


class BloodhoundClient:
    """A thin wrapper over a requests session configured from a ClientConfig."""

    def __init__(self, config: ClientConfig) -> None:
        self.config = config
        self._session = requests.Session()
        # Only the configured proxy is used, never one from the environment.
        self._session.trust_env = False
        if config.proxy:
            self._session.proxies = {"http": config.proxy, "https": config.proxy}

    def get(self, url: str) -> requests.Response:
        """Send a GET request to ``url`` with the configured custom headers."""
        return self._session.get(url, headers=dict(self.config.headers))

    def close(self) -> None:
        """Release the underlying connections."""
        self._session.close()

    def __enter__(self) -> BloodhoundClient:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()