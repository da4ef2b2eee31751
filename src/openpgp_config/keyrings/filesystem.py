"""
Local filesystem keyring source.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, ClassVar

from openpgp_config.keyrings.base import BaseKeyringSource


@dataclass(frozen=True)
class FileKeyringSource(BaseKeyringSource):
    """
    Keyring read from a file path.

    The path is only stored at construction. The file is opened read-only on
    every ``open()`` call, so a file created or replaced later is picked up and
    a missing file is reported at the point of use.
    """

    path: Path
    kind: ClassVar[str] = "file"

    def __post_init__(self) -> None:
        if not isinstance(self.path, (str, os.PathLike)):
            raise TypeError(f"Keyring path must be str or os.PathLike, got {type(self.path).__name__}")
        object.__setattr__(self, "path", Path(self.path))

    def _open(self) -> BinaryIO:
        return open(self.path, "rb")

    def describe(self) -> str:
        return str(self.path)
