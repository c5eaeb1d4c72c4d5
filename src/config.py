"""Configuration module for the PerfOps DNS resolve runner.

Loads and validates environment variables. Command-line flags override
individual values through Config.with_overrides().
"""

import os
from dataclasses import dataclass, replace
from urllib.parse import urlparse


DEFAULT_API_URL = "https://api.perfops.net"


@dataclass(frozen=True)
class Config:
    """Application configuration, built once per run and never mutated."""

    # API Configuration
    api_url: str
    http_timeout: int

    # Polling Configuration
    poll_interval_ms: int

    # Output Configuration
    output_json: bool
    debug: bool

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables.

        Raises:
            ValueError: If a variable is invalid.

        Returns:
            Config: Validated configuration instance.
        """
        api_url = os.getenv("PERFOPS_API_URL", DEFAULT_API_URL).strip()
        parsed = urlparse(api_url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError("PERFOPS_API_URL must be an HTTP(S) URL")

        http_timeout = cls._get_int_env("HTTP_TIMEOUT", 30)
        if not 1 <= http_timeout <= 300:
            raise ValueError("HTTP_TIMEOUT must be between 1 and 300 seconds")

        poll_interval_ms = cls._get_int_env("POLL_INTERVAL_MS", 500)
        if not 100 <= poll_interval_ms <= 60000:
            raise ValueError("POLL_INTERVAL_MS must be between 100 and 60000")

        return cls(
            api_url=api_url,
            http_timeout=http_timeout,
            poll_interval_ms=poll_interval_ms,
            output_json=cls._get_bool_env("OUTPUT_JSON"),
            debug=cls._get_bool_env("DEBUG"),
        )

    @staticmethod
    def _get_int_env(key: str, default: int) -> int:
        """Get integer environment variable or its default.

        Args:
            key: Environment variable name.
            default: Value used when the variable is unset or empty.

        Returns:
            int: Parsed value.

        Raises:
            ValueError: If the value is not an integer.
        """
        value = os.getenv(key, "").strip()
        if not value:
            return default
        try:
            return int(value)
        except ValueError:
            raise ValueError(f"{key} must be an integer, got {value!r}") from None

    @staticmethod
    def _get_bool_env(key: str) -> bool:
        return os.getenv(key, "false").strip().lower() in ("true", "1", "yes")

    @property
    def poll_interval_sec(self) -> float:
        return self.poll_interval_ms / 1000

    def with_overrides(self, **changes) -> "Config":
        """Return a copy with the given non-None fields replaced.

        Args:
            **changes: Field values; None means keep the current value.

        Returns:
            Config: New configuration instance.
        """
        return replace(self, **{k: v for k, v in changes.items() if v is not None})
