"""
Keyring sources.

A keyring source opens a fresh binary stream over keyring bytes on demand.
Built-in variants: filesystem path, package resource, in-memory bytes and an
arbitrary opener callable. Any object satisfying KeyringSource works too.
"""

from openpgp_config.keyrings.base import BaseKeyringSource, KeyringSource, open_keyring
from openpgp_config.keyrings.custom import CallableKeyringSource
from openpgp_config.keyrings.filesystem import FileKeyringSource
from openpgp_config.keyrings.memory import BytesKeyringSource
from openpgp_config.keyrings.resources import PackageResourceLoader, ResourceKeyringSource, ResourceLoader

__all__ = [
    "KeyringSource",
    "BaseKeyringSource",
    "open_keyring",
    "FileKeyringSource",
    "ResourceLoader",
    "PackageResourceLoader",
    "ResourceKeyringSource",
    "BytesKeyringSource",
    "CallableKeyringSource",
]
