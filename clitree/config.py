# Clitree CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""config.py
Grammar loader for clitree: builds a `Parser` from a YAML or TOML file.

Example (YAML):
    options:
      - aliases: "-v|--verbose"
    commands:
      - aliases: "deploy"
        arguments: one_or_more
        options:
          - aliases: "--env"
            arguments: {arity: one, allowed: [dev, prod], default: dev}
"""
from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import toml
import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from clitree.exceptions import ConfigError, GrammarError
from clitree.logger import logger
from clitree.parser.accept import Arity
from clitree.parser.arguments_rule import ArgumentsRule
from clitree.parser.parser import Parser
from clitree.parser.symbol import Symbol, command, option

CONFIG_ENV = "CLITREE_CONFIG"


def find_grammar_config() -> Path | None:
    candidates = [
        Path(os.environ[CONFIG_ENV]) if os.environ.get(CONFIG_ENV) else None,
        Path.cwd() / "clitree.yaml",
        Path.cwd() / "clitree.yml",
        Path.cwd() / "clitree.toml",
        Path.cwd() / ".clitree.yaml",
        Path.cwd() / ".clitree.toml",
        Path.home() / ".config" / "clitree" / "clitree.yaml",
        Path.home() / ".config" / "clitree" / "clitree.toml",
    ]
    return next((path for path in candidates if path is not None and path.is_file()), None)


class RawArguments(BaseModel):
    """Arguments policy as written in a grammar file."""

    arity: Arity = Arity.NONE
    allowed: list[str] | None = None
    default: str | None = None
    name: str = ""
    description: str = ""

    @field_validator("arity", mode="before")
    @classmethod
    def validate_arity(cls, value: Any) -> Arity:
        if isinstance(value, Arity):
            return value
        return Arity(value)

    def to_rule(self) -> ArgumentsRule:
        return self.arity.rule(self.allowed).with_(
            description=self.description,
            name=self.name,
            default_value=self.default,
        )


def _coerce_arguments(value: Any) -> Any:
    if value is None:
        return {}
    if isinstance(value, (str, int)) and not isinstance(value, bool):
        return {"arity": value}
    return value


class RawOption(BaseModel):
    """Option entry of a grammar file."""

    aliases: str | list[str]
    description: str = ""
    arguments: RawArguments = Field(default_factory=RawArguments)

    @field_validator("arguments", mode="before")
    @classmethod
    def validate_arguments(cls, value: Any) -> Any:
        return _coerce_arguments(value)

    def to_symbol(self) -> Symbol:
        return option(self.aliases, self.description, self.arguments.to_rule())


class RawCommand(BaseModel):
    """Command entry of a grammar file, with nested options and commands."""

    aliases: str | list[str]
    description: str = ""
    arguments: RawArguments = Field(default_factory=RawArguments)
    exclusive_subcommands: bool = True
    options: list[RawOption] = Field(default_factory=list)
    commands: list[RawCommand] = Field(default_factory=list)

    @field_validator("arguments", mode="before")
    @classmethod
    def validate_arguments(cls, value: Any) -> Any:
        return _coerce_arguments(value)

    def to_symbol(self) -> Symbol:
        children = [raw.to_symbol() for raw in self.options]
        children.extend(raw.to_symbol() for raw in self.commands)
        return command(
            self.aliases,
            self.description,
            *children,
            arguments=self.arguments.to_rule(),
            exclusive_subcommands=self.exclusive_subcommands,
        )


class GrammarConfig(BaseModel):
    """Top-level grammar file model."""

    options: list[RawOption] = Field(default_factory=list)
    commands: list[RawCommand] = Field(default_factory=list)

    def to_parser(self) -> Parser:
        symbols = [raw.to_symbol() for raw in self.options]
        symbols.extend(raw.to_symbol() for raw in self.commands)
        return Parser(*symbols)


def loader(file_path: Path | str) -> Parser:
    """
    Load a grammar from a YAML or TOML file.

    The file holds a mapping with optional `options` and `commands` lists.
    Each entry needs at least `aliases` (`"-o|--one"` or a list); commands may
    nest their own `options` and `commands`.

    Args:
        file_path (Path | str): Path to the grammar file (.yaml, .yml or .toml).

    Returns:
        Parser: A parser for the loaded grammar.

    Raises:
        FileNotFoundError: If the file does not exist.
        ConfigError: If the file cannot be read as a valid grammar.
    """
    if isinstance(file_path, (str, Path)):
        path = Path(file_path)
    else:
        raise TypeError("file_path must be a string or Path object.")

    if not path.is_file():
        raise FileNotFoundError(f"No such config file: {file_path}")

    suffix = path.suffix
    try:
        with path.open("r", encoding="UTF-8") as config_file:
            if suffix in (".yaml", ".yml"):
                raw_config = yaml.safe_load(config_file)
            elif suffix == ".toml":
                raw_config = toml.load(config_file)
            else:
                raise ConfigError(f"Unsupported config format: {suffix}")
    except (yaml.YAMLError, toml.TomlDecodeError) as error:
        raise ConfigError(f"Could not parse {path}: {error}") from error

    if not isinstance(raw_config, dict):
        raise ConfigError(
            "Grammar file must contain a mapping with 'options' and/or 'commands'.\n"
            "Example:\n"
            "commands:\n"
            "  - aliases: 'deploy'\n"
            "    options:\n"
            "      - aliases: '-v|--verbose'"
        )

    try:
        parser = GrammarConfig.model_validate(raw_config).to_parser()
    except ValidationError as error:
        logger.warning("Invalid grammar in %s: %s", path, error)
        raise ConfigError(f"Invalid grammar in {path}: {error}") from error
    except GrammarError as error:
        logger.warning("Invalid grammar in %s: %s", path, error)
        raise ConfigError(f"Invalid grammar in {path}: {error}") from error
    logger.debug("Loaded grammar from %s: %r", path, parser)
    return parser
