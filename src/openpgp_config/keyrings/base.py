"""
Keyring source contract and shared open logic.

A keyring source is a capability: it knows where keyring bytes live and opens a
fresh binary stream over them each time it is asked. Sources hold no open
handles themselves.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import BinaryIO, ClassVar, Protocol, runtime_checkable

from openpgp_config.exceptions import KeyringError, KeyringIOError, ResourceNotFoundError
from openpgp_config.utils.logging import get_logger

logger = get_logger("openpgp_config.keyrings")


@runtime_checkable
class KeyringSource(Protocol):
    """
    Keyring source protocol.

    Anything with these two methods can back a DecryptionConfig. ``open()`` must
    return a new stream positioned at offset 0 on every call, or raise
    KeyringError. It never returns None.
    """

    def open(self) -> BinaryIO: ...

    def describe(self) -> str: ...


class BaseKeyringSource(ABC):
    """
    Base class for the built-in keyring sources.

    Subclasses implement ``_open()`` and ``describe()``. ``open()`` wraps the
    hook so that every variant fails the same way:

    - FileNotFoundError, IsADirectoryError, NotADirectoryError,
      ModuleNotFoundError or a None result become ResourceNotFoundError
    - any other OSError becomes KeyringIOError
    """

    kind: ClassVar[str] = "keyring"

    @abstractmethod
    def _open(self) -> BinaryIO | None:
        """Open the underlying storage and return a readable binary stream."""

    @abstractmethod
    def describe(self) -> str:
        """Human-readable locator for logs and diagnostics."""

    def open(self) -> BinaryIO:
        """
        Open a new stream over the keyring bytes.

        Returns:
            Readable binary stream positioned at offset 0, owned by the caller

        Raises:
            ResourceNotFoundError: If the keyring cannot be located
            KeyringIOError: If the keyring exists but cannot be opened
        """
        return _guarded_open(self._open, self.kind, self.describe())

    def __str__(self) -> str:
        return self.describe()


def _guarded_open(opener: Callable[[], BinaryIO | None], kind: str, locator: str) -> BinaryIO:
    """Call ``opener`` and map its failures onto the keyring error taxonomy."""
    logger.debug(f"Opening {kind} keyring: {locator}")
    try:
        stream = opener()
    except KeyringError:
        raise
    except (FileNotFoundError, IsADirectoryError, NotADirectoryError, ModuleNotFoundError) as e:
        logger.debug(f"Keyring not found ({kind}): {locator}: {e}")
        raise ResourceNotFoundError(kind, locator) from e
    except OSError as e:
        logger.debug(f"Keyring open failed ({kind}): {locator}: {e}")
        raise KeyringIOError(kind, locator, e.strerror or str(e)) from e

    if stream is None:
        logger.debug(f"Keyring not found ({kind}): {locator}: source returned no stream")
        raise ResourceNotFoundError(kind, locator)
    return stream


def open_keyring(source: KeyringSource) -> BinaryIO:
    """
    Open a stream from any KeyringSource.

    Built-in sources already guard their own ``open()``. Other sources get the
    same treatment here: a None result or a FileNotFoundError becomes
    ResourceNotFoundError and other OSErrors become KeyringIOError.

    Raises:
        ResourceNotFoundError: If the keyring cannot be located
        KeyringIOError: If the keyring exists but cannot be opened
    """
    if isinstance(source, BaseKeyringSource):
        return source.open()
    kind = getattr(source, "kind", None) or "custom"
    return _guarded_open(source.open, kind, source.describe())
