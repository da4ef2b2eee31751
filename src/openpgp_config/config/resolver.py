"""
Environment placeholders in decryption configuration files.

Passphrases and keyring locations are usually kept out of the YAML file and
supplied as ${VAR_NAME} references. A reference to an unset variable is kept
verbatim so the loader can warn about it.
"""

import os
import re
from typing import Any

ENV_VAR_PATTERN = re.compile(r"\${([^}]+)}")


def resolve_config(config_data: dict[str, Any]) -> dict[str, Any]:
    """
    Return a copy of the configuration with ${VAR_NAME} references expanded.

    Args:
        config_data: Parsed configuration mapping

    Returns:
        New mapping; the input is left untouched
    """
    return _expand(config_data)


def _expand(value: Any) -> Any:
    if isinstance(value, dict):
        return {key: _expand(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_expand(item) for item in value]
    if isinstance(value, str):
        return ENV_VAR_PATTERN.sub(lambda match: os.environ.get(match.group(1), match.group(0)), value)
    return value


def unresolved_variables(value: str) -> list[str]:
    """Names of ${VAR} references left in an expanded string."""
    return ENV_VAR_PATTERN.findall(value)
