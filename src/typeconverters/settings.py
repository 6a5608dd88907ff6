"""
settings.py

Configuration management for typeconverters using Pydantic's settings management.
Settings are hierarchical and can be loaded from environment variables or a .env
file, with nested values separated by ``__``.

Core Interfaces:
- LoggingSettings: Log levels and file paths for the library's logger.
- RegistrySettings: Defaults applied when a ConverterRegistry is bootstrapped.
- Settings: Aggregates all configuration and can render it as a .env file.
- reload_settings: Reload settings from the environment in place.
- print_config: Print the current configuration in .env format.

Example Usage:
```python
from typeconverters.settings import settings

settings.logging.console_log_level = "DEBUG"
settings.registry.plugin_modules = ["myapp.converters"]
```

or utilizing environment variables:
```bash
export TYPECONVERTERS__LOGGING__DISABLED=true
export TYPECONVERTERS__LOGGING__CONSOLE_LOG_LEVEL=DEBUG
export TYPECONVERTERS__REGISTRY__PLUGIN_MODULES='["myapp.converters"]'
export TYPECONVERTERS__REGISTRY__ALIAS_PRIMITIVE_TYPES=false
```
"""

import json
from collections.abc import Sequence
from typing import Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

__all__ = [
    "LoggingSettings",
    "RegistrySettings",
    "Settings",
    "print_config",
    "reload_settings",
    "settings",
]


class LoggingSettings(BaseModel):
    """
    Logging settings for the library
    """

    disabled: bool = Field(
        default=False,
        description="True to disable all logging, False (default) to enable logging.",
    )
    clear_loggers: bool = Field(
        default=True,
        description=(
            "True (default) to remove all logging handlers that may have been added "
            "to the logger through other packages before adding our own. False to "
            "keep the existing handlers."
        ),
    )
    console_log_level: str = Field(
        default="WARNING",
        description=(
            "The log level for the console logger. This should be a valid log level "
            "string (e.g. DEBUG, INFO, WARNING, ERROR, CRITICAL). Registry lookups "
            "that fall back to a compatible converter and converter replacements "
            "are logged at DEBUG, discarded conflicting converters at WARNING and "
            "bootstrap defects at ERROR."
        ),
    )
    log_file: Optional[str] = Field(
        default=None,
        description=(
            "The path to the log file. If this is set, the logger will log to this file"
            " as well as to the console. If not set, the logger will only log to the "
            "console."
        ),
    )
    log_file_level: Optional[str] = Field(
        default=None,
        description=(
            "The log level for the file logger. If not set while log_file is set, "
            "the file logger uses INFO."
        ),
    )


class RegistrySettings(BaseModel):
    """
    Defaults used when bootstrapping a ConverterRegistry
    """

    plugin_modules: list[str] = Field(
        default_factory=list,
        description=(
            "Additional modules imported by the plugin catalog before collecting "
            "converters, so that converters they register with "
            "@TypeConverter.register() become available to new registries."
        ),
    )
    alias_primitive_types: bool = Field(
        default=True,
        description=(
            "True (default) to also register the converters for bool, int, float, "
            "complex, str and bytes under the matching numpy scalar types."
        ),
    )


class Settings(BaseSettings):
    """
    All the settings are powered by pydantic_settings and can be set through
    environment variables or .env file. The environment variables are prefixed with
    `TYPECONVERTERS__` and nested properties are separated by `__`. For example, to
    set the `disabled` property of the `LoggingSettings` class, you can set the
    environment variable `TYPECONVERTERS__LOGGING__DISABLED=true`.
    """

    model_config = SettingsConfigDict(
        env_prefix="TYPECONVERTERS__",
        env_nested_delimiter="__",
        extra="ignore",
        validate_default=True,
        env_file=".env",
    )

    logging: LoggingSettings = LoggingSettings()
    registry: RegistrySettings = RegistrySettings()

    def generate_env_file(self) -> str:
        """
        Generate the .env file from the current settings
        """
        return Settings._recursive_generate_env(
            self,
            self.model_config["env_prefix"],  # type: ignore  # noqa: PGH003
            self.model_config["env_nested_delimiter"],  # type: ignore  # noqa: PGH003
        )

    @staticmethod
    def _recursive_generate_env(model: BaseModel, prefix: str, delimiter: str) -> str:
        env_file = ""
        add_models = []
        for key, value in model:
            if isinstance(value, BaseModel):
                # nested sections are written after the current level
                add_models.append((key, value))
                continue

            tag = f"{prefix}{key.upper()}"

            if isinstance(value, Sequence) and not isinstance(value, str):
                value_str = ",".join(f'"{item}"' for item in value)
                env_file += f"{tag}=[{value_str}]\n"
            elif isinstance(value, dict):
                env_file += f"{tag}={json.dumps(value)}\n"
            elif value is None or value == "":
                env_file += f"{tag}=\n"
            else:
                env_file += f'{tag}="{value}"\n'

        for key, value in add_models:
            env_file += Settings._recursive_generate_env(
                value, f"{prefix}{key.upper()}{delimiter}", delimiter
            )
        return env_file


settings = Settings()


def reload_settings():
    """
    Reload the settings from the environment variables
    """
    new_settings = Settings()
    settings.__dict__.update(new_settings.__dict__)


def print_config():
    """
    Print the current configuration settings
    """
    print(f"Settings: \n{settings.generate_env_file()}")  # noqa: T201
