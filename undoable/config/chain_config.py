"""Chain execution configuration.

This module defines configuration for running action chains, with
environment variable overrides.

Environment Variables:
- UNDOABLE_STRICT_COMPENSATION: Raise ChainUnwindError when a compensation
  fails during unwind (default: false; accepts 1/true/yes/on)
- UNDOABLE_LOG_ENVIRONMENT: Log rendering mode, 'production' (JSON) or
  'development' (console) (default: production)
"""

from __future__ import annotations

import os
from dataclasses import dataclass

# Values accepted as true for boolean environment variables
_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})

VALID_LOG_ENVIRONMENTS = frozenset({"production", "development"})

DEFAULT_STRICT_COMPENSATION = False
DEFAULT_LOG_ENVIRONMENT = "production"


def _get_bool_env(key: str, default: bool) -> bool:
    """Get boolean environment variable with default.

    Args:
        key: Environment variable name.
        default: Default value if not set.

    Returns:
        True if the value is one of 1/true/yes/on (case-insensitive),
        False for any other set value, default if unset.
    """
    value = os.environ.get(key)
    if value is None:
        return default
    return value.strip().lower() in _TRUE_VALUES


@dataclass(frozen=True)
class ChainConfig:
    """Configuration for chain execution.

    Attributes:
        strict_compensation: Replace the forward error with ChainUnwindError
                             when a compensation raises during unwind.
                             Default: False (log and continue).
        log_environment: 'production' for JSON logs, 'development' for
                         console logs. Default: 'production'.
    """

    strict_compensation: bool = DEFAULT_STRICT_COMPENSATION
    log_environment: str = DEFAULT_LOG_ENVIRONMENT

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if self.log_environment not in VALID_LOG_ENVIRONMENTS:
            raise ValueError(
                f"log_environment must be one of {sorted(VALID_LOG_ENVIRONMENTS)}, "
                f"got {self.log_environment!r}"
            )

    @classmethod
    def from_environment(cls) -> ChainConfig:
        """Create config from environment variables with defaults.

        An unrecognised UNDOABLE_LOG_ENVIRONMENT falls back to the default
        rather than raising.

        Returns:
            ChainConfig with values from environment or defaults.
        """
        strict = _get_bool_env(
            "UNDOABLE_STRICT_COMPENSATION",
            DEFAULT_STRICT_COMPENSATION,
        )

        log_environment = (
            os.environ.get("UNDOABLE_LOG_ENVIRONMENT", DEFAULT_LOG_ENVIRONMENT)
            .strip()
            .lower()
        )
        if log_environment not in VALID_LOG_ENVIRONMENTS:
            log_environment = DEFAULT_LOG_ENVIRONMENT

        return cls(
            strict_compensation=strict,
            log_environment=log_environment,
        )


# Default configuration instance
DEFAULT_CHAIN_CONFIG = ChainConfig()

# Strict config, surfaces broken compensations as ChainUnwindError
STRICT_CHAIN_CONFIG = ChainConfig(strict_compensation=True)
