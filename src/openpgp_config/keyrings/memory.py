"""
In-memory keyring source.

Useful for tests and for keyrings fetched by the application from elsewhere
(a secret store, an environment variable) before decryption starts.
"""

from __future__ import annotations

import io
from dataclasses import dataclass, field
from typing import BinaryIO, ClassVar

from openpgp_config.keyrings.base import BaseKeyringSource


@dataclass(frozen=True)
class BytesKeyringSource(BaseKeyringSource):
    """Keyring held as bytes; every ``open()`` returns a new BytesIO over them."""

    data: bytes = field(repr=False)
    label: str = "<memory>"
    kind: ClassVar[str] = "memory"

    def __post_init__(self) -> None:
        if not isinstance(self.data, (bytes, bytearray, memoryview)):
            raise TypeError(f"Keyring data must be bytes-like, got {type(self.data).__name__}")
        # Copy mutable buffers so later changes by the caller are not seen
        object.__setattr__(self, "data", bytes(self.data))

    def _open(self) -> BinaryIO:
        return io.BytesIO(self.data)

    def describe(self) -> str:
        return f"{self.label} ({len(self.data)} bytes)"
