# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Configuration helpers for serverfn."""

import os
from dataclasses import dataclass

__version__ = "0.3.0"

DEFAULT_USER_AGENT = f"serverfn/{__version__} (+python-httpx)"


def _float_env(name: str, default: float) -> float:
    try:
        value = os.getenv(name)
        return float(value) if value is not None else default
    except ValueError:
        return default


def _bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class FetcherSettings:
    """Transport defaults for server function calls."""

    timeout: float = 10.0
    user_agent: str = DEFAULT_USER_AGENT
    allow_redirects: bool = True
    verify_ssl: bool = True
    base_url: str = ""

    @classmethod
    def from_env(cls) -> "FetcherSettings":
        """Create settings from environment variables (evaluated at call time)."""
        timeout = _float_env("SERVERFN_HTTP_TIMEOUT", cls.timeout)
        if timeout <= 0:
            timeout = cls.timeout
        return cls(
            timeout=timeout,
            user_agent=os.getenv("SERVERFN_USER_AGENT", cls.user_agent),
            allow_redirects=_bool_env("SERVERFN_HTTP_REDIRECTS", cls.allow_redirects),
            verify_ssl=_bool_env("SERVERFN_HTTP_VERIFY_SSL", cls.verify_ssl),
            base_url=os.getenv("SERVERFN_BASE_URL", cls.base_url).strip(),
        )


def load_fetcher_settings() -> FetcherSettings:
    """Load fetcher settings from environment with sensible defaults."""
    return FetcherSettings.from_env()
