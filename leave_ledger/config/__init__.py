"""Configuration loading (YAML validated against a packaged JSON schema)."""

from .loader import ConfigError, LedgerConfig, load_config

__all__ = [
    "ConfigError",
    "LedgerConfig",
    "load_config",
]
