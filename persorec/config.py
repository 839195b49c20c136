"""
Configuration loading.

Settings come from a YAML file merged over ``DEFAULTS``; command-line
overrides are applied last. Relative paths in the file are resolved against
the file's own directory so a config can travel with its data.
"""
import os
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = Path("persorec.yaml")

DEFAULTS: Dict[str, Any] = {
    "liwc_cat_file": None,
    "norms_backend": "table",
    "norms_path": None,
    "norms_delimiter": "\t",
    "models_dir": None,
    "model_family": "SVM",
    "model_type": "obs",
    "workers": max(2, (os.cpu_count() or 2) // 2),
    "document_timeout": None,
    "relative_only": True,
}

_PATH_KEYS = ("liwc_cat_file", "norms_path", "models_dir")


def load_config(
    path: Optional[Union[str, Path]] = None,
    overrides: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """Load YAML config, fill in defaults, and apply overrides."""
    cfg = dict(DEFAULTS)
    config_path = Path(path) if path else DEFAULT_CONFIG_FILE
    if config_path.exists():
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                file_cfg = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid configuration file {config_path}: {e}") from e
        if not isinstance(file_cfg, dict):
            raise ConfigurationError(f"Configuration file {config_path} must be a mapping")
        base = config_path.resolve().parent
        for key in _PATH_KEYS:
            value = file_cfg.get(key)
            if value and not Path(value).is_absolute():
                file_cfg[key] = str(base / value)
        cfg.update(file_cfg)
        logger.debug(f"Loaded configuration from {config_path}")
    elif path:
        raise ConfigurationError(f"Configuration file {config_path} doesn't exist")
    if overrides:
        cfg.update({k: v for k, v in overrides.items() if v is not None})
    return cfg


def require_path(cfg: Dict[str, Any], key: str, must_exist: bool = True) -> Path:
    """Return ``cfg[key]`` as a Path, raising ConfigurationError if unusable."""
    value = cfg.get(key)
    if not value:
        raise ConfigurationError(
            f"Missing '{key}' in configuration; edit {DEFAULT_CONFIG_FILE} "
            f"or pass --config"
        )
    path = Path(value)
    if must_exist and not path.exists():
        raise ConfigurationError(f"Path for '{key}' doesn't exist: {path}")
    return path
