"""Configuration loader with defaults < YAML file < call overrides precedence."""

from dataclasses import dataclass, fields, is_dataclass
from pathlib import Path
from typing import Any, Optional

import yaml

from .defaults import (
    CatalogParams,
    NotificationParams,
    PaymentParams,
    PersistenceParams,
    SectionConfig,
    StorefrontConfig,
    get_default_config,
)

CONFIG_FILENAME = "storefront.yaml"


@dataclass(frozen=True)
class ConfigLoader:
    """Manages configuration loading and merging."""

    config_dir: Path
    defaults: StorefrontConfig

    @classmethod
    def create(cls, config_dir: Optional[Path] = None) -> "ConfigLoader":
        """Create a ConfigLoader instance."""
        if config_dir is None:
            config_dir = Path(__file__).parent.parent.parent / "config"

        return cls(
            config_dir=Path(config_dir),
            defaults=get_default_config(),
        )

    def load_file_config(self) -> dict[str, Any]:
        """Load overrides from storefront.yaml, or nothing if it is absent."""
        config_file = self.config_dir / CONFIG_FILENAME

        if not config_file.exists():
            return {}

        with open(config_file) as f:
            file_config = yaml.safe_load(f)

        return file_config or {}

    def merge_config(self, overrides: Optional[dict[str, Any]] = None) -> dict[str, Any]:
        """
        Merge configuration with precedence.

        Priority order:
        1. Call overrides (highest priority)
        2. storefront.yaml in the config directory
        3. Built-in defaults (lowest priority)
        """
        config = self._dataclass_to_dict(self.defaults)
        config = self._deep_merge(config, self.load_file_config())

        if overrides:
            config = self._deep_merge(config, overrides)

        return config

    def load(self, overrides: Optional[dict[str, Any]] = None) -> StorefrontConfig:
        """Merge all tiers and build the typed configuration."""
        return build_config(self.merge_config(overrides))

    def _dataclass_to_dict(self, obj: Any) -> Any:
        """Convert nested dataclasses (and lists of them) to plain data."""
        if is_dataclass(obj):
            return {f.name: self._dataclass_to_dict(getattr(obj, f.name)) for f in fields(obj)}
        if isinstance(obj, list):
            return [self._dataclass_to_dict(value) for value in obj]
        return obj

    def _deep_merge(self, base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """Deep merge two dictionaries. Lists are replaced, not merged."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result


def _known_fields(cls: type, data: dict[str, Any]) -> dict[str, Any]:
    names = {f.name for f in fields(cls)}
    return {key: value for key, value in (data or {}).items() if key in names}


def build_config(data: dict[str, Any]) -> StorefrontConfig:
    """Build a StorefrontConfig from merged plain data, ignoring unknown keys."""
    sections = [
        SectionConfig(**_known_fields(SectionConfig, entry))
        for entry in data.get("sections") or []
        if isinstance(entry, dict) and entry.get("name")
    ]
    return StorefrontConfig(
        catalog=CatalogParams(**_known_fields(CatalogParams, data.get("catalog", {}))),
        payment=PaymentParams(**_known_fields(PaymentParams, data.get("payment", {}))),
        notification=NotificationParams(
            **_known_fields(NotificationParams, data.get("notification", {}))
        ),
        persistence=PersistenceParams(
            **_known_fields(PersistenceParams, data.get("persistence", {}))
        ),
        sections=sections,
    )
