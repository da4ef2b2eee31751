"""
Keyring source backed by an arbitrary opener callable.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import BinaryIO, ClassVar

from openpgp_config.keyrings.base import BaseKeyringSource


@dataclass(frozen=True)
class CallableKeyringSource(BaseKeyringSource):
    """
    Keyring opened by calling ``opener()``.

    The opener must return a new readable binary stream on each call. It may
    raise FileNotFoundError / OSError (translated like the built-in sources)
    or a KeyringError directly.
    """

    opener: Callable[[], BinaryIO | None]
    label: str = "<callable>"
    kind: ClassVar[str] = "callable"

    def __post_init__(self) -> None:
        if not callable(self.opener):
            raise TypeError(f"Keyring opener must be callable, got {type(self.opener).__name__}")

    def _open(self) -> BinaryIO | None:
        return self.opener()

    def describe(self) -> str:
        return self.label
