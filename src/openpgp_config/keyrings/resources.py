"""
Keyring sources resolved through a resource loader.

The built-in loader looks names up inside an importable package (keyrings
shipped as package data), using importlib.resources.
"""

from __future__ import annotations

from dataclasses import dataclass
from importlib import resources
from types import ModuleType
from typing import BinaryIO, ClassVar, Protocol, runtime_checkable

from openpgp_config.keyrings.base import BaseKeyringSource


@runtime_checkable
class ResourceLoader(Protocol):
    """
    Resolves a logical resource name to a readable binary stream.

    Implementations raise FileNotFoundError (or return None) when the name
    does not resolve.
    """

    def open_resource(self, name: str) -> BinaryIO | None: ...


def _split_resource_name(name: str) -> list[str]:
    """Split a '/'-separated resource name, refusing names that escape the package."""
    if not name or name.startswith("/"):
        raise FileNotFoundError(f"Invalid resource name: {name!r}")
    parts = name.split("/")
    if any(part in ("", ".", "..") for part in parts):
        raise FileNotFoundError(f"Invalid resource name: {name!r}")
    return parts


@dataclass(frozen=True)
class PackageResourceLoader:
    """
    Loads resources bundled inside a Python package.

    The package is imported lazily, on the first ``open_resource()`` call, so
    building a loader for a package that is not installed does not fail.
    """

    package: str | ModuleType

    @property
    def package_name(self) -> str:
        if isinstance(self.package, ModuleType):
            return self.package.__name__
        return self.package

    def open_resource(self, name: str) -> BinaryIO:
        try:
            traversable = resources.files(self.package)
        except TypeError as e:
            # Raised for plain modules on Python < 3.12
            raise FileNotFoundError(f"{self.package_name} is not a package") from e
        for part in _split_resource_name(name):
            traversable = traversable.joinpath(part)
        return traversable.open("rb")  # type: ignore[return-value]

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(package='{self.package_name}')"


@dataclass(frozen=True)
class ResourceKeyringSource(BaseKeyringSource):
    """
    Keyring resolved by name through a ResourceLoader at open time.
    """

    loader: ResourceLoader
    name: str
    kind: ClassVar[str] = "resource"

    def __post_init__(self) -> None:
        if not isinstance(self.loader, ResourceLoader):
            raise TypeError(f"Resource loader must provide open_resource(), got {type(self.loader).__name__}")
        if not isinstance(self.name, str):
            raise TypeError(f"Resource name must be str, got {type(self.name).__name__}")

    def _open(self) -> BinaryIO | None:
        return self.loader.open_resource(self.name)

    def describe(self) -> str:
        loader_name = getattr(self.loader, "package_name", None) or type(self.loader).__name__
        return f"{self.name} (in {loader_name})"
