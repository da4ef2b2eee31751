"""
Tests for keyring sources (filesystem, package resources, memory, callable).
"""

import dataclasses
import io
import logging
from pathlib import Path

import pytest

from conftest import PUBRING, SECRING
from openpgp_config.exceptions import KeyringError, KeyringIOError, ResourceNotFoundError
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


class TestKeyringSourceProtocol:
    """Tests for the KeyringSource contract."""

    def test_builtin_sources_satisfy_protocol(self, tmp_path):
        sources = [
            FileKeyringSource(tmp_path / "pub.gpg"),
            ResourceKeyringSource(PackageResourceLoader("some_pkg"), "pubring.gpg"),
            BytesKeyringSource(b"data"),
            CallableKeyringSource(lambda: io.BytesIO(b"data")),
        ]
        for source in sources:
            assert isinstance(source, KeyringSource)

    def test_duck_typed_object_satisfies_protocol(self):
        class VaultSource:
            def open(self):
                return io.BytesIO(b"vault")

            def describe(self):
                return "vault://keys/pub"

        assert isinstance(VaultSource(), KeyringSource)

    def test_object_without_open_does_not_satisfy_protocol(self):
        assert not isinstance("pub.gpg", KeyringSource)

    def test_base_source_is_abstract(self):
        with pytest.raises(TypeError):
            BaseKeyringSource()


class TestFileKeyringSource:
    """Tests for FileKeyringSource."""

    def test_open_reads_file_bytes(self, keyring_files):
        pub, _ = keyring_files
        source = FileKeyringSource(pub)
        with source.open() as stream:
            assert stream.read() == PUBRING

    def test_str_path_is_converted(self, keyring_files):
        pub, _ = keyring_files
        source = FileKeyringSource(str(pub))
        assert source.path == pub
        assert isinstance(source.path, Path)

    def test_repeated_opens_are_independent(self, keyring_files):
        pub, _ = keyring_files
        source = FileKeyringSource(pub)
        first = source.open()
        second = source.open()
        try:
            assert first is not second
            assert first.read(4) == PUBRING[:4]
            # Consuming the first stream does not move the second
            assert second.tell() == 0
            assert second.read() == PUBRING
            assert first.read() == PUBRING[4:]
        finally:
            first.close()
            second.close()

    def test_construction_does_not_touch_filesystem(self, tmp_path):
        source = FileKeyringSource(tmp_path / "missing.gpg")
        assert source.path == tmp_path / "missing.gpg"

    def test_missing_file_raises_not_found(self, tmp_path):
        source = FileKeyringSource(tmp_path / "missing.gpg")
        with pytest.raises(ResourceNotFoundError) as exc_info:
            source.open()
        assert exc_info.value.source_kind == "file"
        assert exc_info.value.locator == str(tmp_path / "missing.gpg")
        assert isinstance(exc_info.value.__cause__, FileNotFoundError)

    def test_directory_raises_not_found(self, tmp_path):
        source = FileKeyringSource(tmp_path)
        with pytest.raises(ResourceNotFoundError):
            source.open()

    def test_file_created_after_construction_is_picked_up(self, tmp_path):
        path = tmp_path / "late.gpg"
        source = FileKeyringSource(path)
        with pytest.raises(ResourceNotFoundError):
            source.open()

        path.write_bytes(b"created later")
        with source.open() as stream:
            assert stream.read() == b"created later"

    def test_replaced_file_is_picked_up(self, keyring_files):
        pub, _ = keyring_files
        source = FileKeyringSource(pub)
        pub.write_bytes(b"rotated keyring")
        with source.open() as stream:
            assert stream.read() == b"rotated keyring"

    def test_file_deleted_between_calls_fails_next_call(self, keyring_files):
        pub, _ = keyring_files
        source = FileKeyringSource(pub)
        with source.open() as stream:
            assert stream.read() == PUBRING

        pub.unlink()
        with pytest.raises(ResourceNotFoundError):
            source.open()

    def test_permission_error_raises_io_error(self, keyring_files, monkeypatch):
        from openpgp_config.keyrings import filesystem

        def denied(path, mode="r"):
            raise PermissionError(13, "Permission denied", str(path))

        monkeypatch.setattr(filesystem, "open", denied, raising=False)
        source = FileKeyringSource(keyring_files[0])
        with pytest.raises(KeyringIOError) as exc_info:
            source.open()
        assert exc_info.value.reason == "Permission denied"
        assert isinstance(exc_info.value.__cause__, PermissionError)

    def test_invalid_path_type_rejected(self):
        with pytest.raises(TypeError, match="str or os.PathLike"):
            FileKeyringSource(42)

    def test_frozen(self, keyring_files):
        source = FileKeyringSource(keyring_files[0])
        with pytest.raises(dataclasses.FrozenInstanceError):
            source.path = keyring_files[1]

    def test_describe(self, keyring_files):
        pub, _ = keyring_files
        source = FileKeyringSource(pub)
        assert source.describe() == str(pub)
        assert str(source) == str(pub)


class TestPackageResourceLoader:
    """Tests for PackageResourceLoader."""

    def test_open_nested_resource(self, keyring_package):
        loader = PackageResourceLoader(keyring_package)
        with loader.open_resource("recipient/pubring.gpg") as stream:
            assert stream.read() == PUBRING

    def test_accepts_module_object(self, keyring_package):
        import importlib

        module = importlib.import_module(keyring_package)
        loader = PackageResourceLoader(module)
        assert loader.package_name == keyring_package
        with loader.open_resource("recipient/secring.gpg") as stream:
            assert stream.read() == SECRING

    def test_missing_resource_raises_file_not_found(self, keyring_package):
        loader = PackageResourceLoader(keyring_package)
        with pytest.raises(FileNotFoundError):
            loader.open_resource("recipient/missing.gpg")

    @pytest.mark.parametrize("name", ["", "/etc/passwd", "../outside.gpg", "recipient/../pubring.gpg", "a//b"])
    def test_rejects_names_escaping_package(self, keyring_package, name):
        loader = PackageResourceLoader(keyring_package)
        with pytest.raises(FileNotFoundError, match="Invalid resource name"):
            loader.open_resource(name)

    def test_is_resource_loader(self):
        assert isinstance(PackageResourceLoader("anything"), ResourceLoader)

    def test_construction_does_not_import_package(self):
        loader = PackageResourceLoader("package_that_does_not_exist_xyz")
        assert loader.package_name == "package_that_does_not_exist_xyz"

    def test_repr(self):
        assert repr(PackageResourceLoader("keys")) == "PackageResourceLoader(package='keys')"


class TestResourceKeyringSource:
    """Tests for ResourceKeyringSource."""

    def test_open_reads_resource(self, keyring_package):
        source = ResourceKeyringSource(PackageResourceLoader(keyring_package), "recipient/pubring.gpg")
        with source.open() as stream:
            assert stream.read() == PUBRING

    def test_repeated_opens_are_independent(self, keyring_package):
        source = ResourceKeyringSource(PackageResourceLoader(keyring_package), "recipient/secring.gpg")
        with source.open() as first, source.open() as second:
            assert first.read() == SECRING
            assert second.read() == SECRING

    def test_unresolvable_name_raises_not_found(self, keyring_package):
        source = ResourceKeyringSource(PackageResourceLoader(keyring_package), "recipient/nope.gpg")
        with pytest.raises(ResourceNotFoundError) as exc_info:
            source.open()
        assert exc_info.value.source_kind == "resource"
        assert "recipient/nope.gpg" in exc_info.value.locator

    def test_missing_package_raises_not_found_on_open(self):
        source = ResourceKeyringSource(PackageResourceLoader("package_that_does_not_exist_xyz"), "pubring.gpg")
        with pytest.raises(ResourceNotFoundError):
            source.open()

    def test_plain_module_raises_not_found_on_open(self):
        source = ResourceKeyringSource(PackageResourceLoader("json.decoder"), "pubring.gpg")
        with pytest.raises(ResourceNotFoundError) as exc_info:
            source.open()
        assert exc_info.value.source_kind == "resource"

    def test_loader_returning_none_raises_not_found(self):
        class NullLoader:
            def open_resource(self, name):
                return None

        source = ResourceKeyringSource(NullLoader(), "pubring.gpg")
        with pytest.raises(ResourceNotFoundError):
            source.open()

    def test_custom_loader(self):
        class DictLoader:
            def __init__(self, entries):
                self.entries = entries

            def open_resource(self, name):
                if name not in self.entries:
                    raise FileNotFoundError(name)
                return io.BytesIO(self.entries[name])

        loader = DictLoader({"pub": b"pub-bytes"})
        with ResourceKeyringSource(loader, "pub").open() as stream:
            assert stream.read() == b"pub-bytes"
        with pytest.raises(ResourceNotFoundError):
            ResourceKeyringSource(loader, "sec").open()

    def test_loader_os_error_raises_io_error(self):
        class BrokenLoader:
            def open_resource(self, name):
                raise OSError(5, "Input/output error")

        with pytest.raises(KeyringIOError, match="Input/output error"):
            ResourceKeyringSource(BrokenLoader(), "pub").open()

    def test_invalid_loader_rejected(self):
        with pytest.raises(TypeError, match="open_resource"):
            ResourceKeyringSource(object(), "pub")

    def test_describe_names_package(self):
        source = ResourceKeyringSource(PackageResourceLoader("keys"), "recipient/pubring.gpg")
        assert source.describe() == "recipient/pubring.gpg (in keys)"


class TestBytesKeyringSource:
    """Tests for BytesKeyringSource."""

    def test_each_open_returns_new_stream(self):
        source = BytesKeyringSource(PUBRING)
        first = source.open()
        second = source.open()
        assert first is not second
        assert first.read() == PUBRING
        assert second.read() == PUBRING

    def test_bytearray_is_copied(self):
        buffer = bytearray(b"original")
        source = BytesKeyringSource(buffer)
        buffer[:] = b"mutated!"
        assert source.open().read() == b"original"

    def test_rejects_str(self):
        with pytest.raises(TypeError, match="bytes-like"):
            BytesKeyringSource("not bytes")

    def test_repr_hides_data(self):
        source = BytesKeyringSource(b"secret-key-material", label="vault")
        assert "secret-key-material" not in repr(source)
        assert source.describe() == "vault (19 bytes)"

    def test_empty_keyring_is_not_an_error(self):
        assert BytesKeyringSource(b"").open().read() == b""


class TestCallableKeyringSource:
    """Tests for CallableKeyringSource."""

    def test_open_calls_opener_each_time(self):
        calls = []

        def opener():
            calls.append(1)
            return io.BytesIO(b"keys")

        source = CallableKeyringSource(opener, label="counter")
        source.open()
        source.open()
        assert len(calls) == 2
        assert source.describe() == "counter"

    def test_opener_file_not_found_translated(self):
        def opener():
            raise FileNotFoundError("gone")

        with pytest.raises(ResourceNotFoundError) as exc_info:
            CallableKeyringSource(opener).open()
        assert exc_info.value.source_kind == "callable"

    def test_opener_keyring_error_passes_through(self):
        error = ResourceNotFoundError("vault", "secret/pgp")

        def opener():
            raise error

        with pytest.raises(KeyringError) as exc_info:
            CallableKeyringSource(opener).open()
        assert exc_info.value is error

    def test_opener_returning_none_raises_not_found(self):
        with pytest.raises(ResourceNotFoundError):
            CallableKeyringSource(lambda: None).open()

    def test_non_keyring_errors_propagate(self):
        def opener():
            raise ValueError("bug in opener")

        with pytest.raises(ValueError, match="bug in opener"):
            CallableKeyringSource(opener).open()

    def test_rejects_non_callable(self):
        with pytest.raises(TypeError, match="callable"):
            CallableKeyringSource("not callable")


class TestKeyringLogging:
    """Keyring opens are logged at DEBUG."""

    def test_open_logged(self, keyring_files, caplog):
        caplog.set_level(logging.DEBUG, logger="openpgp_config")
        FileKeyringSource(keyring_files[0]).open().close()
        assert any("Opening file keyring" in r.getMessage() for r in caplog.records)

    def test_not_found_logged(self, tmp_path, caplog):
        caplog.set_level(logging.DEBUG, logger="openpgp_config")
        with pytest.raises(ResourceNotFoundError):
            FileKeyringSource(tmp_path / "missing.gpg").open()
        assert any("Keyring not found" in r.getMessage() for r in caplog.records)


class TestOpenKeyring:
    """open_keyring applies the same failure mapping to any KeyringSource."""

    def test_builtin_source_delegates(self, keyring_files):
        with open_keyring(FileKeyringSource(keyring_files[0])) as stream:
            assert stream.read() == PUBRING

    def test_duck_typed_stream_returned(self):
        class PlainSource:
            def open(self):
                return io.BytesIO(b"plain")

            def describe(self):
                return "plain"

        assert open_keyring(PlainSource()).read() == b"plain"

    def test_duck_typed_none_raises_not_found(self):
        class EmptyHandedSource:
            def open(self):
                return None

            def describe(self):
                return "nowhere"

        with pytest.raises(ResourceNotFoundError) as exc_info:
            open_keyring(EmptyHandedSource())
        assert exc_info.value.source_kind == "custom"
        assert exc_info.value.locator == "nowhere"

    def test_duck_typed_file_not_found_raises_not_found(self, tmp_path):
        missing = tmp_path / "missing.gpg"

        class PathSource:
            def open(self):
                return open(missing, "rb")

            def describe(self):
                return str(missing)

        with pytest.raises(ResourceNotFoundError) as exc_info:
            open_keyring(PathSource())
        assert isinstance(exc_info.value.__cause__, FileNotFoundError)

    def test_duck_typed_os_error_raises_io_error(self):
        class BrokenSource:
            def open(self):
                raise OSError(5, "Input/output error")

            def describe(self):
                return "broken"

        with pytest.raises(KeyringIOError, match="Input/output error"):
            open_keyring(BrokenSource())
