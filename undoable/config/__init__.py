"""Configuration module for undoable.

Available Configurations:
- ChainConfig: Compensation-failure policy and log rendering mode
"""

from undoable.config.chain_config import (
    DEFAULT_CHAIN_CONFIG,
    STRICT_CHAIN_CONFIG,
    ChainConfig,
)

__all__ = [
    "ChainConfig",
    "DEFAULT_CHAIN_CONFIG",
    "STRICT_CHAIN_CONFIG",
]
