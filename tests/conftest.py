"""
Shared fixtures: keyring files on disk and an importable package holding keyrings.
"""

import uuid

import pytest

PUBRING = b"\x99\x01\x0d\x04public-keyring-bytes\x00\xff"
SECRING = b"\x95\x03\xc6\x04secret-keyring-bytes\x00\xfe"


@pytest.fixture
def keyring_files(tmp_path):
    """Write pub.gpg / sec.gpg into a temp directory and return their paths."""
    pub = tmp_path / "pub.gpg"
    sec = tmp_path / "sec.gpg"
    pub.write_bytes(PUBRING)
    sec.write_bytes(SECRING)
    return pub, sec


@pytest.fixture
def keyring_package(tmp_path, monkeypatch):
    """Create an importable package with keyrings under recipient/ and return its name."""
    name = f"keyring_pkg_{uuid.uuid4().hex[:8]}"
    pkg = tmp_path / "site" / name
    (pkg / "recipient").mkdir(parents=True)
    (pkg / "__init__.py").write_text("")
    (pkg / "recipient" / "pubring.gpg").write_bytes(PUBRING)
    (pkg / "recipient" / "secring.gpg").write_bytes(SECRING)
    monkeypatch.syspath_prepend(str(tmp_path / "site"))
    return name
