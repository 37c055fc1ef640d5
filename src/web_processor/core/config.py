"""Configuration management for web-processor."""

import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

load_dotenv()

# Timing defaults, in seconds
DEFAULT_TIMEOUT = 20.0
DEFAULT_POLL_INTERVAL = 0.333
DEFAULT_RETRY_DELAY = 0.333
DEFAULT_HTTP_ATTEMPTS = 3
DEFAULT_BODY_CHECK_ATTEMPTS = 3

# "Indefinite" waits are bounded by a very large finite timeout
INDEFINITE_TIMEOUT = 873 * 24 * 60 * 60.0


def _optional_int(name: str) -> int | None:
    value = os.environ.get(name, "").strip()
    return int(value) if value else None


@dataclass
class Config:
    """Global configuration for web-processor.

    All values can be overridden via environment variables with WEBP_ prefix.
    Example: WEBP_DEFAULT_TIMEOUT=30
    """

    # Polling Settings
    default_timeout: float = field(
        default_factory=lambda: float(os.environ.get("WEBP_DEFAULT_TIMEOUT", str(DEFAULT_TIMEOUT)))
    )
    poll_interval: float = field(
        default_factory=lambda: float(os.environ.get("WEBP_POLL_INTERVAL", str(DEFAULT_POLL_INTERVAL)))
    )
    indefinite_timeout: float = field(
        default_factory=lambda: float(
            os.environ.get("WEBP_INDEFINITE_TIMEOUT", str(INDEFINITE_TIMEOUT))
        )
    )

    # Navigation Settings
    http_attempts: int = field(
        default_factory=lambda: int(os.environ.get("WEBP_HTTP_ATTEMPTS", str(DEFAULT_HTTP_ATTEMPTS)))
    )
    retry_delay: float = field(
        default_factory=lambda: float(os.environ.get("WEBP_RETRY_DELAY", str(DEFAULT_RETRY_DELAY)))
    )
    body_check_attempts: int = field(
        default_factory=lambda: int(
            os.environ.get("WEBP_BODY_CHECK_ATTEMPTS", str(DEFAULT_BODY_CHECK_ATTEMPTS))
        )
    )

    # Randomness (select_random_option)
    random_seed: int | None = field(default_factory=lambda: _optional_int("WEBP_RANDOM_SEED"))

    # Remote endpoint used by the CLI
    remote_url: str = field(default_factory=lambda: os.environ.get("WEBP_REMOTE_URL", ""))

    # Logging
    log_level: str = field(default_factory=lambda: os.environ.get("WEBP_LOG_LEVEL", "INFO"))

    def validate(self) -> None:
        """Validate that timing and retry settings are usable.

        Raises:
            ValueError: If a timing value or attempt count is not positive.
        """
        for name in ("default_timeout", "poll_interval", "indefinite_timeout"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive, got {getattr(self, name)}")

        if self.retry_delay < 0:
            raise ValueError(f"retry_delay must not be negative, got {self.retry_delay}")

        for name in ("http_attempts", "body_check_attempts"):
            if getattr(self, name) < 1:
                raise ValueError(f"{name} must be at least 1, got {getattr(self, name)}")

    def resolve_timeout(self, timeout: float | None = None, indefinitely: bool = False) -> float:
        """Pick the effective timeout for a bounded operation.

        Args:
            timeout: Explicit timeout in seconds, or None for the default
            indefinitely: Substitute the indefinite timeout

        Returns:
            Timeout in seconds
        """
        if indefinitely:
            return self.indefinite_timeout
        if timeout is None:
            return self.default_timeout
        return timeout

    @classmethod
    def from_env(cls) -> "Config":
        """Create a Config instance from environment variables.

        Returns:
            Config instance with values from environment.
        """
        return cls()
