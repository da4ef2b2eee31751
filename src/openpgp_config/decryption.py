"""
Decryption configuration.

Bundles everything an OpenPGP decryption engine needs for one decryption
attempt: where the public and secret keyrings come from, the passphrase that
unlocks the secret key, and whether a valid signature is mandatory.

Usage:
    from openpgp_config import DecryptionConfig

    config = DecryptionConfig.with_keyrings_from_files(
        "keys/pubring.gpg",
        "keys/secring.gpg",
        signature_check_required=True,
        decryption_secret_key_passphrase="secret",
    )
    with config.get_secret_key_ring() as stream:
        ...
"""

from __future__ import annotations

import os
from collections.abc import Callable
from dataclasses import dataclass
from types import ModuleType
from typing import Any, BinaryIO

from openpgp_config.keyrings.base import KeyringSource, open_keyring
from openpgp_config.keyrings.custom import CallableKeyringSource
from openpgp_config.keyrings.filesystem import FileKeyringSource
from openpgp_config.keyrings.resources import PackageResourceLoader, ResourceKeyringSource, ResourceLoader


def _render_bool(value: bool) -> str:
    return "true" if value else "false"


def _as_keyring_source(source: Any) -> Any:
    """Wrap a bare opener callable; anything else is passed through for validation."""
    if isinstance(source, KeyringSource) or not callable(source):
        return source
    label = getattr(source, "__qualname__", None) or type(source).__name__
    return CallableKeyringSource(source, label=f"<{label}>")


@dataclass(frozen=True, repr=False)
class DecryptionConfig:
    """
    Immutable parameter set for a decryption attempt.

    Attributes:
        signature_check_required: True forces the presence of a valid signature
            made with a key from the public keyring.
        secret_key_passphrase: Passphrase unlocking the secret key. None means
            no passphrase was given, which is distinct from an empty string.
        public_keyring: Source of the public keyring (signature verification).
        secret_keyring: Source of the secret keyring (decryption).

    The configuration holds no open handles. Every ``get_*_key_ring()`` call
    opens a new stream that the caller must close. Instances are safe to share
    between threads.
    """

    signature_check_required: bool
    secret_key_passphrase: str | None
    public_keyring: KeyringSource
    secret_keyring: KeyringSource

    def __post_init__(self) -> None:
        if not isinstance(self.signature_check_required, bool):
            raise TypeError(
                f"signature_check_required must be bool, got {type(self.signature_check_required).__name__}"
            )
        if self.secret_key_passphrase is not None and not isinstance(self.secret_key_passphrase, str):
            raise TypeError(f"secret_key_passphrase must be str or None, got {type(self.secret_key_passphrase).__name__}")
        for field_name in ("public_keyring", "secret_keyring"):
            source = getattr(self, field_name)
            if not isinstance(source, KeyringSource):
                raise TypeError(f"{field_name} must provide open() and describe(), got {type(source).__name__}")

    # --- Factories -----------------------------------------------------------

    @classmethod
    def with_keyring_sources(
        cls,
        public_keyring: KeyringSource | Callable[[], BinaryIO | None],
        secret_keyring: KeyringSource | Callable[[], BinaryIO | None],
        signature_check_required: bool,
        decryption_secret_key_passphrase: str | None = None,
    ) -> DecryptionConfig:
        """
        Create a decryption config backed by arbitrary keyring sources.

        A bare zero-argument opener callable is accepted too and wrapped in a
        CallableKeyringSource labelled with the callable's name.

        Args:
            public_keyring: Any KeyringSource, or an opener callable, for the public keyring
            secret_keyring: Any KeyringSource, or an opener callable, for the secret keyring
            signature_check_required: True forces a signature from a key in the public keyring
            decryption_secret_key_passphrase: Passphrase for the secret key, or None

        Returns:
            DecryptionConfig
        """
        public_keyring = _as_keyring_source(public_keyring)
        secret_keyring = _as_keyring_source(secret_keyring)
        return cls(
            signature_check_required=signature_check_required,
            secret_key_passphrase=decryption_secret_key_passphrase,
            public_keyring=public_keyring,
            secret_keyring=secret_keyring,
        )

    @classmethod
    def with_keyrings_from_files(
        cls,
        public_keyring: str | os.PathLike,
        secret_keyring: str | os.PathLike,
        signature_check_required: bool,
        decryption_secret_key_passphrase: str | None = None,
    ) -> DecryptionConfig:
        """
        Create a decryption config reading keyrings from files.

        The files are not touched here; they are opened on each stream request.

        Args:
            public_keyring: E.g. "tests/keys/sender/pubring.gpg"
            secret_keyring: E.g. "tests/keys/sender/secring.gpg"
            signature_check_required: True forces a signature from a key in the public keyring
            decryption_secret_key_passphrase: Passphrase for the secret key, or None

        Returns:
            DecryptionConfig
        """
        return cls.with_keyring_sources(
            FileKeyringSource(public_keyring),
            FileKeyringSource(secret_keyring),
            signature_check_required,
            decryption_secret_key_passphrase,
        )

    @classmethod
    def with_keyrings_from_resources(
        cls,
        loader: ResourceLoader | str | ModuleType,
        public_keyring: str,
        secret_keyring: str,
        signature_check_required: bool,
        decryption_secret_key_passphrase: str | None = None,
    ) -> DecryptionConfig:
        """
        Create a decryption config reading keyrings through a resource loader.

        Args:
            loader: A ResourceLoader, or a package (name or module) holding the
                keyrings as package data
            public_keyring: E.g. "recipient/pubring.gpg"
            secret_keyring: E.g. "recipient/secring.gpg"
            signature_check_required: True forces a signature from a key in the public keyring
            decryption_secret_key_passphrase: Passphrase for the secret key, or None

        Returns:
            DecryptionConfig
        """
        if isinstance(loader, (str, ModuleType)):
            loader = PackageResourceLoader(loader)
        return cls.with_keyring_sources(
            ResourceKeyringSource(loader, public_keyring),
            ResourceKeyringSource(loader, secret_keyring),
            signature_check_required,
            decryption_secret_key_passphrase,
        )

    # --- Read operations -----------------------------------------------------

    def is_signature_check_required(self) -> bool:
        """Whether a valid signature from a key in the public keyring is mandatory."""
        return self.signature_check_required

    def get_decryption_secret_key_passphrase(self) -> str | None:
        """Passphrase for the secret key exactly as given (None when absent)."""
        return self.secret_key_passphrase

    def get_public_key_ring(self) -> BinaryIO:
        """
        Open a new stream over the public keyring.

        Raises:
            ResourceNotFoundError: If the keyring cannot be located
            KeyringIOError: If the keyring exists but cannot be opened
        """
        return open_keyring(self.public_keyring)

    def get_secret_key_ring(self) -> BinaryIO:
        """
        Open a new stream over the secret keyring.

        Raises:
            ResourceNotFoundError: If the keyring cannot be located
            KeyringIOError: If the keyring exists but cannot be opened
        """
        return open_keyring(self.secret_keyring)

    # --- Diagnostics ---------------------------------------------------------

    def describe(self) -> str:
        """
        Diagnostic rendering. The passphrase is only shown as present or not.
        """
        return (
            "DecryptionConfig{"
            f"signatureCheckRequired={_render_bool(self.signature_check_required)}, "
            f"decryptionSecretKeyPassphrase?={_render_bool(self.secret_key_passphrase is not None)}, "
            f"publicKeyring={self.public_keyring.describe()}, "
            f"secretKeyring={self.secret_keyring.describe()}"
            "}"
        )

    def __repr__(self) -> str:
        return self.describe()

    def __str__(self) -> str:
        return self.describe()


with_keyring_sources = DecryptionConfig.with_keyring_sources
with_keyrings_from_files = DecryptionConfig.with_keyrings_from_files
with_keyrings_from_resources = DecryptionConfig.with_keyrings_from_resources
