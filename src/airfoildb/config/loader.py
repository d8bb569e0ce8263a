"""Configuration loading with pydantic-settings.

Supports loading configuration from multiple sources with precedence:
1. Direct kwargs (highest priority)
2. Environment variables (AIRFOILDB__SECTION__KEY)
3. Database config (<database>/airfoildb.yaml)
4. Global config (~/.config/airfoildb/config.yaml)
5. Built-in defaults (lowest priority)
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from airfoildb.config.constants import LOCAL_CONFIG_NAME
from airfoildb.config.models import AirfoilDBConfig, CatalogConfig, LoggingConfig
from airfoildb.core.errors import ConfigError

GLOBAL_CONFIG_PATH = Path("~/.config/airfoildb/config.yaml").expanduser()


def _load_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    try:
        with path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError.parse_error(str(path), str(e)) from e
    if not isinstance(data, dict):
        raise ConfigError.parse_error(str(path), "top level must be a mapping")
    return data


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


class _YamlSource(PydanticBaseSettingsSource):
    """Settings source that reads from pre-loaded YAML config."""

    def __init__(self, settings_cls: type[BaseSettings], yaml_config: dict[str, Any]) -> None:
        super().__init__(settings_cls)
        self._yaml_config = yaml_config

    def get_field_value(
        self,
        field: Any,  # noqa: ARG002
        field_name: str,
    ) -> tuple[Any, str, bool]:
        val = self._yaml_config.get(field_name)
        return val, field_name, val is not None

    def __call__(self) -> dict[str, Any]:
        return self._yaml_config


def _make_settings_class(yaml_config: dict[str, Any]) -> type[BaseSettings]:
    """Create a Settings class bound to one YAML snapshot."""

    class AirfoilDBSettings(BaseSettings):
        """Root config. Env vars: AIRFOILDB__LOGGING__LEVEL, AIRFOILDB__CATALOG__INDEX_FILE, etc."""

        model_config = SettingsConfigDict(
            env_prefix="AIRFOILDB__",
            env_nested_delimiter="__",
            case_sensitive=False,
        )

        logging: LoggingConfig = LoggingConfig()
        catalog: CatalogConfig = CatalogConfig()

        @classmethod
        def settings_customise_sources(
            cls,
            settings_cls: type[BaseSettings],
            init_settings: PydanticBaseSettingsSource,
            env_settings: PydanticBaseSettingsSource,
            dotenv_settings: PydanticBaseSettingsSource,  # noqa: ARG003
            file_secret_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        ) -> tuple[PydanticBaseSettingsSource, ...]:
            # Precedence (first wins): init kwargs > env vars > yaml files
            return (init_settings, env_settings, _YamlSource(settings_cls, yaml_config))

    return AirfoilDBSettings


def load_config(database_path: Path | None = None, **kwargs: Any) -> AirfoilDBConfig:
    """Load config: defaults < global yaml < database yaml < env vars < kwargs.

    Args:
        database_path: Database root whose airfoildb.yaml should be applied.
                       When given, it also becomes catalog.database_path unless
                       that is set explicitly elsewhere.
        **kwargs: Override values (highest precedence), by section.

    Returns:
        Fully resolved configuration object.

    Raises:
        ConfigError: On invalid YAML syntax or validation errors.
    """
    yaml_config = _load_yaml(GLOBAL_CONFIG_PATH)

    if database_path is not None:
        local = {"catalog": {"database_path": str(database_path)}}
        local = _deep_merge(local, _load_yaml(database_path / LOCAL_CONFIG_NAME))
        yaml_config = _deep_merge(yaml_config, local)

    settings_cls = _make_settings_class(yaml_config)
    try:
        settings = settings_cls(**kwargs)
    except ValidationError as e:
        err = e.errors()[0]
        field = ".".join(str(loc) for loc in err["loc"])
        raise ConfigError.invalid_value(field, err.get("input"), err["msg"]) from e

    return AirfoilDBConfig(
        logging=settings.logging,  # type: ignore[attr-defined]
        catalog=settings.catalog,  # type: ignore[attr-defined]
    )
