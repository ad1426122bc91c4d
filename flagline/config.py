# Flagline Command Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""config.py
Configuration loader for Flagline command registries.

A config file lists commands, each with a dotted import path to its action and its
parameters in positional order:

    commands:
      - name: greet
        description: Say hello
        action: my_app.actions.greet
        parameters:
          - "--name"
          - aliases: ["--times", "--count"]
            data_type: number
            range: "[1, 10]"
            default: "1"
"""
from __future__ import annotations

import importlib
import os
from pathlib import Path
from typing import Any

import toml
import yaml
from pydantic import BaseModel, Field, field_validator

from flagline.command import CommandSchema
from flagline.exceptions import ConfigError
from flagline.logger import logger
from flagline.registry import CommandRegistry

CONFIG_NAMES = ("flagline.yaml", "flagline.yml", "flagline.toml")


def import_action(dotted_path: str) -> Any:
    """
    Import a callable from a dotted path like 'my.module.func'.

    Raises:
        ConfigError: If the path is malformed, the module cannot be imported, or the
            attribute is missing or not callable.
    """
    module_path, _, attr = dotted_path.rpartition(".")
    if not module_path:
        raise ConfigError(f"Invalid action path: '{dotted_path}'")
    try:
        module = importlib.import_module(module_path)
    except ModuleNotFoundError as error:
        logger.error("Failed to import module '%s': %s", module_path, error)
        raise ConfigError(
            f"Could not import '{dotted_path}': {error}. Ensure the module is "
            "installed and discoverable via PYTHONPATH."
        ) from error
    try:
        action = getattr(module, attr)
    except AttributeError as error:
        logger.error(
            "Module '%s' does not have attribute '%s': %s", module_path, attr, error
        )
        raise ConfigError(
            f"Module '{module_path}' has no attribute '{attr}'."
        ) from error
    if not callable(action):
        raise ConfigError(f"'{dotted_path}' is not callable.")
    return action


class RawParameter(BaseModel):
    """Parameter entry of a config file, in its long form."""

    aliases: list[str]
    data_type: str = "text"
    range: str | None = None
    pattern: str | None = None
    default: str | None = None
    description: str = ""

    @field_validator("default", mode="before")
    @classmethod
    def stringify_default(cls, value: Any) -> Any:
        # YAML and TOML hand back typed scalars, defaults are raw text.
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, (int, float)):
            return str(value)
        return value


class RawCommand(BaseModel):
    """Command entry of a config file."""

    name: str
    action: str | None = None
    description: str = ""
    help_text: str = ""
    parameters: list[str | RawParameter] = Field(default_factory=list)

    def to_command(self) -> CommandSchema:
        action = import_action(self.action) if self.action else None
        return CommandSchema(
            name=self.name,
            action=action,
            description=self.description,
            help_text=self.help_text,
            parameters=[
                spec if isinstance(spec, str) else spec.model_dump()
                for spec in self.parameters
            ],
        )


class RegistryConfig(BaseModel):
    """Top level of a config file."""

    commands: list[RawCommand] = Field(default_factory=list)

    def to_registry(self) -> CommandRegistry:
        registry = CommandRegistry()
        for raw_command in self.commands:
            registry.add_command(raw_command.to_command())
        return registry


def read_config(path: Path) -> dict[str, Any]:
    suffix = path.suffix
    with path.open("r", encoding="UTF-8") as config_file:
        if suffix in (".yaml", ".yml"):
            raw_config = yaml.safe_load(config_file)
        elif suffix == ".toml":
            raw_config = toml.load(config_file)
        else:
            raise ValueError(f"Unsupported config format: {suffix}")

    if not isinstance(raw_config, dict) or not isinstance(
        raw_config.get("commands"), list
    ):
        raise ValueError(
            "Configuration file must contain a dictionary with a list of commands.\n"
            "Example:\n"
            "commands:\n"
            "  - name: 'greet'\n"
            "    action: 'my_module.greet'\n"
            "    parameters: ['--name', '-v']"
        )
    return raw_config


def load_registry(file_path: Path | str) -> CommandRegistry:
    """
    Load a CommandRegistry from a YAML or TOML file.

    Args:
        file_path (Path | str): Path to the config file.

    Returns:
        CommandRegistry: A registry holding every command of the file.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the format is unsupported or the structure is wrong.
        ConfigError: If an action cannot be imported.
        RegistrationError: If a command or parameter declaration is invalid.
    """
    if isinstance(file_path, (str, Path)):
        path = Path(file_path)
    else:
        raise TypeError("file_path must be a string or Path object.")

    if not path.is_file():
        raise FileNotFoundError(f"No such config file: {file_path}")

    raw_config = read_config(path)
    registry = RegistryConfig.model_validate(raw_config).to_registry()
    logger.debug("Loaded %d commands from %s", len(registry), path)
    return registry


def find_config() -> Path | None:
    """
    Locate a config file.

    Looks in the current directory, then at `$FLAGLINE_CONFIG`, then in
    `~/.config/flagline/`.
    """
    for name in CONFIG_NAMES:
        candidate = Path.cwd() / name
        if candidate.is_file():
            return candidate

    env_path = os.getenv("FLAGLINE_CONFIG")
    if env_path and Path(env_path).is_file():
        return Path(env_path)

    config_dir = Path.home() / ".config" / "flagline"
    for name in CONFIG_NAMES:
        candidate = config_dir / name
        if candidate.is_file():
            return candidate
    return None
