"""
Configuration file loading.

Builds a DecryptionConfig from a YAML file such as::

    logging:
      level: INFO

    decryption:
      signature_check_required: true
      passphrase: ${PGP_PASSPHRASE}
      keyrings:
        type: file
        public: keys/pubring.gpg
        secret: keys/secring.gpg

Relative keyring paths are resolved against the config file's directory.
Keyring files are not opened while loading.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

import yaml

from openpgp_config.config.resolver import resolve_config, unresolved_variables
from openpgp_config.decryption import DecryptionConfig
from openpgp_config.exceptions import ConfigurationError
from openpgp_config.keyrings.resources import PackageResourceLoader
from openpgp_config.utils.logging import get_logger

logger = get_logger("openpgp_config.config")

DEFAULT_SECTION = "decryption"


def load_config(path: str | Path) -> dict[str, Any]:
    """
    Load and resolve a YAML configuration file.

    Args:
        path: Path to the YAML file

    Returns:
        Configuration dictionary with ${VAR} placeholders substituted

    Raises:
        ConfigurationError: If the file is missing, unreadable or not a YAML mapping
    """
    config_path = Path(path)
    if not config_path.exists():
        raise ConfigurationError(
            f"Configuration file not found: {config_path}\n"
            f"  Suggestion: Check the path or create the file",
            details={"path": str(config_path)},
        )
    if not config_path.is_file():
        raise ConfigurationError(f"Configuration path is not a file: {config_path}", details={"path": str(config_path)})

    try:
        with open(config_path) as f:
            try:
                config_data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                mark = getattr(e, "problem_mark", None)
                if mark is not None:
                    raise ConfigurationError(
                        f"Error parsing {config_path.name} at line {mark.line + 1}, column {mark.column + 1}:\n"
                        f"  {e}\n"
                        f"  File: {config_path}\n"
                        f"  Suggestion: Check YAML syntax, ensure proper indentation and quotes",
                        details={"path": str(config_path)},
                    ) from e
                raise ConfigurationError(
                    f"Error parsing {config_path.name}: {e}\n  File: {config_path}",
                    details={"path": str(config_path)},
                ) from e
    except PermissionError as e:
        raise ConfigurationError(
            f"Permission denied reading configuration: {config_path}\n"
            f"  Error: {e}\n"
            f"  Suggestion: Check file permissions",
            details={"path": str(config_path)},
        ) from e

    if not isinstance(config_data, dict):
        raise ConfigurationError(
            f"Configuration must be a mapping, got {type(config_data).__name__}\n  File: {config_path}",
            details={"path": str(config_path)},
        )

    return resolve_config(config_data)


def load_decryption_config(path: str | Path, *, section: str = DEFAULT_SECTION) -> DecryptionConfig:
    """
    Load a DecryptionConfig from a section of a YAML configuration file.

    Args:
        path: Path to the YAML file
        section: Top-level key holding the decryption settings (default: "decryption")

    Returns:
        DecryptionConfig bound to the configured keyring sources

    Raises:
        ConfigurationError: If the file or the section is invalid
    """
    config_path = Path(path)
    config_data = load_config(config_path)

    section_data = config_data.get(section)
    if section_data is None:
        raise ConfigurationError(
            f"Section '{section}' not found in {config_path}\n"
            f"  Available: {list(config_data.keys())}",
            details={"path": str(config_path), "section": section},
        )

    decryption_config = decryption_config_from_mapping(section_data, base_dir=config_path.parent)
    logger.debug(f"Loaded {decryption_config.describe()} from {config_path}")
    return decryption_config


def decryption_config_from_mapping(data: Any, *, base_dir: Path | None = None) -> DecryptionConfig:
    """
    Build a DecryptionConfig from an already parsed mapping.

    Args:
        data: Mapping with signature_check_required, passphrase and keyrings keys
        base_dir: Directory for resolving relative keyring file paths

    Returns:
        DecryptionConfig

    Raises:
        ConfigurationError: If a key is missing or has the wrong type
    """
    if not isinstance(data, dict):
        raise ConfigurationError(f"Decryption configuration must be a mapping, got {type(data).__name__}")

    signature_check_required = data.get("signature_check_required")
    if not isinstance(signature_check_required, bool):
        raise ConfigurationError(
            "'signature_check_required' must be true or false, "
            f"got {type(signature_check_required).__name__}",
            details={"key": "signature_check_required"},
        )

    # A missing or null passphrase means "no passphrase"; "" is kept as empty
    passphrase = data.get("passphrase")
    if passphrase is not None:
        if not isinstance(passphrase, str):
            raise ConfigurationError(
                f"'passphrase' must be a string, got {type(passphrase).__name__}\n"
                f"  Suggestion: Quote the value in YAML",
                details={"key": "passphrase"},
            )
        for var_name in unresolved_variables(passphrase):
            logger.warning(f"Passphrase references unset environment variable {var_name}")

    keyrings = data.get("keyrings")
    if not isinstance(keyrings, dict):
        raise ConfigurationError("'keyrings' must be a mapping with type, public and secret keys", details={"key": "keyrings"})

    source_type = keyrings.get("type", "file")
    builder = SOURCE_BUILDERS.get(source_type)
    if builder is None:
        raise ConfigurationError(
            f"Unknown keyring type '{source_type}'. Available: {list(SOURCE_BUILDERS.keys())}",
            details={"key": "keyrings.type"},
        )

    return builder(keyrings, signature_check_required, passphrase, base_dir)


def _require_name(keyrings: dict[str, Any], key: str) -> str:
    value = keyrings.get(key)
    if not isinstance(value, str) or not value:
        raise ConfigurationError(f"'keyrings.{key}' must be a non-empty string", details={"key": f"keyrings.{key}"})
    return value


def _build_file_config(
    keyrings: dict[str, Any], signature_check_required: bool, passphrase: str | None, base_dir: Path | None
) -> DecryptionConfig:
    paths = []
    for key in ("public", "secret"):
        path = Path(_require_name(keyrings, key)).expanduser()
        if base_dir is not None and not path.is_absolute():
            path = base_dir / path
        paths.append(path)
    return DecryptionConfig.with_keyrings_from_files(paths[0], paths[1], signature_check_required, passphrase)


def _build_resource_config(
    keyrings: dict[str, Any], signature_check_required: bool, passphrase: str | None, base_dir: Path | None
) -> DecryptionConfig:
    package = _require_name(keyrings, "package")
    return DecryptionConfig.with_keyrings_from_resources(
        PackageResourceLoader(package),
        _require_name(keyrings, "public"),
        _require_name(keyrings, "secret"),
        signature_check_required,
        passphrase,
    )


SOURCE_BUILDERS: dict[str, Callable[[dict[str, Any], bool, str | None, Path | None], DecryptionConfig]] = {
    "file": _build_file_config,
    "resource": _build_resource_config,
}
