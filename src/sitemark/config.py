#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/sitemark/config.py
"""Site configuration file loading.

Hosts usually hand ``MarkdownRenderer`` a configuration mapping they already
hold. For scripts and tests this module loads one from a file instead:

- ``.yaml`` / ``.yml``: loaded with PyYAML
- ``.toml``: loaded with tomllib
- ``.json``: loaded with json

The render options live under the ``marked`` key; site keys (``url``,
``root``, ``relative_link``, ``source_dir``, ``post_asset_folder``) sit at the
top level, as in a Hexo ``_config.yml``.
"""

from __future__ import annotations

import json
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]

import yaml

from sitemark.constants import CONFIG_ENV_VAR
from sitemark.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


def _load_yaml_config(config_path: Path) -> Any:
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(
            f"Invalid YAML in config file {config_path}: {e}", config_path=str(config_path), original_error=e
        ) from e


def _load_toml_config(config_path: Path) -> Any:
    try:
        with open(config_path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(
            f"Invalid TOML in config file {config_path}: {e}", config_path=str(config_path), original_error=e
        ) from e


def _load_json_config(config_path: Path) -> Any:
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(
            f"Invalid JSON in config file {config_path}: {e}", config_path=str(config_path), original_error=e
        ) from e


_LOADERS = {
    ".yaml": _load_yaml_config,
    ".yml": _load_yaml_config,
    ".toml": _load_toml_config,
    ".json": _load_json_config,
}


def load_site_config(config_path: Optional[Path | str] = None) -> Dict[str, Any]:
    """Load a site configuration file.

    Parameters
    ----------
    config_path : Path or str, optional
        Path to the configuration file. When omitted, the path is taken from
        the ``SITEMARK_CONFIG`` environment variable; if that is unset an
        empty configuration is returned.

    Returns
    -------
    dict
        The configuration mapping. An empty YAML file yields ``{}``.

    Raises
    ------
    ConfigurationError
        If the file is missing, has an unsupported extension, cannot be
        parsed, or does not contain a mapping at the top level

    Examples
    --------
    >>> config = load_site_config("_config.yml")
    >>> config["marked"]["headerIds"]
    True

    """
    if config_path is None:
        env_path = os.environ.get(CONFIG_ENV_VAR)
        if not env_path:
            return {}
        logger.debug("Using site config from %s: %s", CONFIG_ENV_VAR, env_path)
        config_path = env_path

    config_path = Path(config_path)

    if not config_path.is_file():
        raise ConfigurationError(f"Configuration file does not exist: {config_path}", config_path=str(config_path))

    ext = config_path.suffix.lower()
    loader = _LOADERS.get(ext)
    if loader is None:
        raise ConfigurationError(
            f"Unsupported config file format: {ext or config_path.name}. Use .yaml, .yml, .toml or .json",
            config_path=str(config_path),
        )

    try:
        config = loader(config_path)
    except ConfigurationError:
        raise
    except OSError as e:
        raise ConfigurationError(
            f"Error reading config file {config_path}: {e}", config_path=str(config_path), original_error=e
        ) from e

    if config is None:
        return {}

    if not isinstance(config, dict):
        raise ConfigurationError(
            f"Config file must contain a mapping at the top level, got {type(config).__name__}",
            config_path=str(config_path),
        )

    marked = config.get("marked")
    if marked is not None and not isinstance(marked, dict):
        raise ConfigurationError(
            f"'marked' section in {config_path} must be a mapping, got {type(marked).__name__}",
            config_path=str(config_path),
        )

    logger.debug("Loaded site config from %s", config_path)
    return config


__all__ = ["load_site_config"]
