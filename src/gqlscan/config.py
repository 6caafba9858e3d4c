from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from gqlscan import log


class ScanConfig(BaseModel):
    """Settings for descriptor derivation, code emission and placeholder values.

    Example YAML::

        scalars:
          DateTime: str
          JSON: dict[str, Any]
        zero_values:
          DateTime: "1970-01-01T00:00:00Z"
        resolver_suffix: Resolver
    """

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    scalars: dict[str, str] = Field(default_factory=dict)
    zero_values: dict[str, Any] = Field(default_factory=dict, alias="zeroValues")
    resolver_suffix: str = Field("Resolver", alias="resolverSuffix")

    @field_validator("resolver_suffix")
    @classmethod
    def validate_resolver_suffix(cls, value: str) -> str:
        if not value.isidentifier():
            raise ValueError(f"resolver_suffix must be a valid identifier, got '{value}'")
        return value


def load_scan_config(config_path: Path | None) -> ScanConfig:
    """
    Load and validate a scan configuration from a YAML file.

    Args:
        config_path: Path to the YAML configuration file, or None for defaults.

    Returns:
        A validated ScanConfig.

    Raises:
        OSError: If the file cannot be read.
        yaml.YAMLError: If the file is not valid YAML.
        TypeError: If the YAML root is not a mapping.
        ValidationError: If validation against ScanConfig fails.
    """
    if config_path is None:
        log.debug("No scan config provided")
        return ScanConfig()

    raw: Any
    with config_path.open("r", encoding="utf-8") as f:
        raw = yaml.safe_load(f)

    log.debug("Loaded scan config from %s", config_path)

    # Treat empty file or explicit YAML null as "defaults"
    if raw is None:
        return ScanConfig()

    if not isinstance(raw, dict):
        raise TypeError(f"Scan config root must be a mapping, got {type(raw).__name__}")

    return ScanConfig.model_validate(raw)
