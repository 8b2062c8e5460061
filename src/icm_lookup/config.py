"""
Configuration loader for the ICM lookup catalog.

Handles loading catalog configuration from YAML files. The packaged
configs/default.yaml supplies every key; a user file only needs the keys it
overrides.
"""

import copy
import yaml
from importlib.resources import files
from pathlib import Path
from typing import Dict, Any, Optional, Union
import logging

from .codes import CodeType

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_NAME = "default.yaml"


def _read_packaged(name: str) -> str:
    return (files("icm_lookup.configs") / name).read_text(encoding="utf-8")


def default_config() -> Dict[str, Any]:
    """Return a fresh copy of the packaged default configuration."""
    return yaml.safe_load(_read_packaged(DEFAULT_CONFIG_NAME))


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(config_path: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to YAML config file, or None for the packaged defaults

    Returns:
        Configuration dictionary
    """
    config = default_config()
    if config_path is None:
        return config

    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        user_config = yaml.safe_load(f) or {}

    if not isinstance(user_config, dict):
        raise ValueError(f"Config file must contain a mapping: {config_path}")

    # Subset keys may be given as aliases ("ICM10Diag"); store canonical values
    sources = user_config.get("sources")
    if isinstance(sources, dict):
        user_config["sources"] = {
            CodeType.parse(key).value: value for key, value in sources.items()
        }

    logger.info(f"Loaded configuration from {config_path}")
    return _merge(config, user_config)


def get_source_name(config: Dict[str, Any], code_type: CodeType) -> str:
    """
    Get the source file name for a code set.

    Args:
        config: Full configuration dictionary
        code_type: Code set to look up

    Returns:
        File name configured for the code set
    """
    code_type = CodeType.parse(code_type)
    sources = config.get("sources", {})
    if code_type.value not in sources:
        raise KeyError(f"No source configured for {code_type.value}")
    return sources[code_type.value]


def create_default_config(output_path: Union[str, Path]):
    """
    Create a default configuration file.

    Args:
        output_path: Path where to save the config file
    """
    output_path = Path(output_path)

    if output_path.exists():
        logger.warning(f"Config file already exists: {output_path}")
        return

    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, 'w', encoding='utf-8') as f:
        f.write(_read_packaged(DEFAULT_CONFIG_NAME))

    logger.info(f"Created default config at {output_path}")
