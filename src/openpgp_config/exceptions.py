"""
openpgp_config exception hierarchy.

All package exceptions inherit from OpenPGPConfigError, so a caller can catch
every failure with a single base class while still handling keyring problems
separately from configuration mistakes.

Hierarchy::

    OpenPGPConfigError
    ├── ConfigurationError        - config loading, parsing, validation
    └── KeyringError              - keyring stream cannot be produced
        ├── ResourceNotFoundError - missing file, unresolvable resource name
        └── KeyringIOError        - storage exists but opening it failed
"""

from __future__ import annotations


class OpenPGPConfigError(Exception):
    """Base exception for all openpgp_config errors."""

    def __init__(self, message: str, *, details: dict | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


# --- Configuration -----------------------------------------------------------


class ConfigurationError(OpenPGPConfigError):
    """Raised when configuration loading, parsing, or validation fails."""


# --- Keyrings ----------------------------------------------------------------


class KeyringError(OpenPGPConfigError):
    """Raised when a keyring source cannot produce a stream.

    Only ever raised when a stream is requested, never while a source or a
    configuration is being constructed.
    """

    def __init__(self, message: str, *, source_kind: str, locator: str) -> None:
        super().__init__(message, details={"source_kind": source_kind, "locator": locator})
        self.source_kind = source_kind
        self.locator = locator


class ResourceNotFoundError(KeyringError):
    """Raised when the keyring file or resource name does not resolve."""

    def __init__(self, source_kind: str, locator: str) -> None:
        super().__init__(f"Keyring not found ({source_kind}): {locator}", source_kind=source_kind, locator=locator)


class KeyringIOError(KeyringError):
    """Raised when the keyring exists but cannot be opened (permissions, device errors)."""

    def __init__(self, source_kind: str, locator: str, reason: str) -> None:
        super().__init__(
            f"Cannot open keyring ({source_kind}) {locator}: {reason}",
            source_kind=source_kind,
            locator=locator,
        )
        self.reason = reason
