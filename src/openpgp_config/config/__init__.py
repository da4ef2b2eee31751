"""
Configuration management.

YAML configuration file parsing and environment variable resolution.
"""

from openpgp_config.config.loader import decryption_config_from_mapping, load_config, load_decryption_config
from openpgp_config.config.resolver import resolve_config

__all__ = [
    "load_config",
    "load_decryption_config",
    "decryption_config_from_mapping",
    "resolve_config",
]
