"""
openpgp_config - keyring and passphrase configuration for OpenPGP decryption.

Bundles the public keyring, secret keyring, secret key passphrase and
signature policy a decryption engine needs, independent of where the keyrings
are stored.
"""

__version__ = "0.1.0"

# Configuration loading
from openpgp_config.config import decryption_config_from_mapping, load_config, load_decryption_config

# Core
from openpgp_config.decryption import (
    DecryptionConfig,
    with_keyring_sources,
    with_keyrings_from_files,
    with_keyrings_from_resources,
)

# Exceptions
from openpgp_config.exceptions import (
    ConfigurationError,
    KeyringError,
    KeyringIOError,
    OpenPGPConfigError,
    ResourceNotFoundError,
)

# Keyring sources
from openpgp_config.keyrings import (
    BaseKeyringSource,
    BytesKeyringSource,
    CallableKeyringSource,
    FileKeyringSource,
    KeyringSource,
    PackageResourceLoader,
    ResourceKeyringSource,
    ResourceLoader,
    open_keyring,
)

# Logging utilities
from openpgp_config.utils.logging import get_logger, setup_logging, setup_logging_from_config

__all__ = [
    # Core
    "DecryptionConfig",
    "with_keyring_sources",
    "with_keyrings_from_files",
    "with_keyrings_from_resources",
    # Keyring sources
    "KeyringSource",
    "BaseKeyringSource",
    "open_keyring",
    "FileKeyringSource",
    "ResourceLoader",
    "PackageResourceLoader",
    "ResourceKeyringSource",
    "BytesKeyringSource",
    "CallableKeyringSource",
    # Config
    "load_config",
    "load_decryption_config",
    "decryption_config_from_mapping",
    # Logging
    "setup_logging",
    "setup_logging_from_config",
    "get_logger",
    # Exceptions
    "OpenPGPConfigError",
    "ConfigurationError",
    "KeyringError",
    "ResourceNotFoundError",
    "KeyringIOError",
]
