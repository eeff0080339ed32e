"""Configuration management utilities."""

from collections.abc import Mapping
import json
import logging
from pathlib import Path
from typing import Any

from dacite import Config, DaciteError, from_dict
import yaml

from ..errors import InvalidConfig, IoFailure
from .schemas import ConversionConfig

logger = logging.getLogger(__name__)


def load_config(config_path: str | Path) -> dict[str, Any]:
    """Load a configuration document from a YAML or JSON file."""
    config_path = Path(config_path)

    if not config_path.exists():
        raise IoFailure(f"Configuration file not found: {config_path}")

    try:
        with open(config_path, encoding="utf-8") as f:
            if config_path.suffix.lower() in [".yaml", ".yml"]:
                config_data = yaml.safe_load(f)
            elif config_path.suffix.lower() == ".json":
                config_data = json.load(f)
            else:
                raise InvalidConfig(
                    f"Unsupported configuration format: {config_path.suffix}"
                )
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise InvalidConfig(f"Failed to parse configuration: {e}") from e
    except OSError as e:
        raise IoFailure(f"Failed to read configuration {config_path}: {e}") from e

    if config_data is None:
        logger.info(f"Configuration file {config_path} is empty, using defaults")
        return {}

    if not isinstance(config_data, dict):
        raise InvalidConfig(
            f"Configuration must be a mapping, got {type(config_data).__name__}"
        )

    return config_data


def parse_config(config_data: Mapping[str, Any] | None) -> ConversionConfig:
    """Convert a deserialized configuration document into its schema."""
    if config_data is None:
        return ConversionConfig()

    if not isinstance(config_data, Mapping):
        raise InvalidConfig(
            f"Configuration must be a mapping, got {type(config_data).__name__}"
        )

    data = dict(config_data)

    # YAML reads bare chromosome numbers as integers.
    reference = data.get("reference")
    if isinstance(reference, Mapping):
        data["reference"] = {str(k): v for k, v in reference.items()}
    if data.get("reference") is None:
        data.pop("reference", None)
    if data.get("namespaces") is None:
        data.pop("namespaces", None)
    if data.get("logging") is None:
        data.pop("logging", None)

    try:
        return from_dict(
            data_class=ConversionConfig, data=data, config=Config(strict=True)
        )
    except DaciteError as e:
        raise InvalidConfig(f"Failed to parse configuration: {e}") from e
