"""Application settings and configuration management."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

OUTPUT_FORMATS = ("table", "json", "markdown")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _default_config_dir() -> Path:
    """Return the default configuration directory."""
    return Path.home() / ".wellplan"


def default_config_path() -> Path:
    return _default_config_dir() / "config.yaml"


def _default_db_path() -> Path:
    """Return the default database path."""
    return _default_config_dir() / "wellplan.db"


@dataclass
class DatabaseConfig:
    """Profile store database configuration."""

    path: Path = field(default_factory=_default_db_path)


@dataclass
class CatalogConfig:
    """Supplement catalog configuration."""

    path: Optional[Path] = None  # None uses the built-in catalog
    max_recommendations: int = 5


@dataclass
class DefaultsConfig:
    """Default values for various operations."""

    output_format: str = "table"  # "table", "json", "markdown"


@dataclass
class LoggingConfig:
    """Log output configuration."""

    level: str = "WARNING"


@dataclass
class Settings:
    """Main application settings."""

    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    catalog: CatalogConfig = field(default_factory=CatalogConfig)
    defaults: DefaultsConfig = field(default_factory=DefaultsConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "Settings":
        """Load settings from YAML file or return defaults.

        Args:
            config_path: Path to config.yaml. If None, uses ~/.wellplan/config.yaml

        Returns:
            Settings instance

        Raises:
            ValueError: If a value is out of range
        """
        if config_path is None:
            config_path = default_config_path()

        if not config_path.exists():
            return cls()

        with open(config_path) as f:
            data = yaml.safe_load(f) or {}

        settings = cls()

        # Parse database config
        if "database" in data:
            db_data = data["database"] or {}
            if db_data.get("path"):
                settings.database.path = Path(db_data["path"]).expanduser()

        # Parse catalog config
        if "catalog" in data:
            cat_data = data["catalog"] or {}
            if cat_data.get("path"):
                settings.catalog.path = Path(cat_data["path"]).expanduser()
            if "max_recommendations" in cat_data:
                limit = int(cat_data["max_recommendations"])
                if limit < 1:
                    raise ValueError(
                        f"catalog.max_recommendations must be at least 1, got {limit}"
                    )
                settings.catalog.max_recommendations = limit

        # Parse defaults
        if "defaults" in data:
            def_data = data["defaults"] or {}
            if "output_format" in def_data:
                output_format = def_data["output_format"]
                if output_format not in OUTPUT_FORMATS:
                    raise ValueError(
                        f"defaults.output_format must be one of {OUTPUT_FORMATS}, "
                        f"got {output_format!r}"
                    )
                settings.defaults.output_format = output_format

        # Parse logging
        if "logging" in data:
            log_data = data["logging"] or {}
            if "level" in log_data:
                level = str(log_data["level"]).upper()
                if level not in LOG_LEVELS:
                    raise ValueError(
                        f"logging.level must be one of {LOG_LEVELS}, got {level!r}"
                    )
                settings.logging.level = level

        return settings

    def save(self, config_path: Optional[Path] = None) -> None:
        """Save current settings to YAML file.

        Args:
            config_path: Path to save config.yaml. If None, uses ~/.wellplan/config.yaml
        """
        if config_path is None:
            config_path = default_config_path()

        config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(config_path, "w") as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)

    def to_dict(self) -> dict:
        """Convert settings to the YAML file layout."""
        return {
            "database": {
                "path": str(self.database.path),
            },
            "catalog": {
                "path": str(self.catalog.path) if self.catalog.path else None,
                "max_recommendations": self.catalog.max_recommendations,
            },
            "defaults": {
                "output_format": self.defaults.output_format,
            },
            "logging": {
                "level": self.logging.level,
            },
        }


# Global settings instance (lazy loaded)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance, loading from disk if needed."""
    global _settings
    if _settings is None:
        _settings = Settings.load()
    return _settings


def reload_settings(config_path: Optional[Path] = None) -> Settings:
    """Force reload settings from disk."""
    global _settings
    _settings = Settings.load(config_path)
    return _settings
