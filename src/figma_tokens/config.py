"""
Configuration for figma-tokens.

Settings live in `.figma-config.json` in the working directory, using
camelCase keys. Missing values are prompted for and written back, so
the next run starts without questions. The API token may instead come
from the FIGMA_TOKEN or FIGMA_ACCESS_TOKEN environment variable.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Callable, Mapping
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .core.errors import ConfigError
from .core.ir import CategoryPrefixes

logger = logging.getLogger(__name__)

CONFIG_FILE = ".figma-config.json"

TOKEN_ENV_VARS = ("FIGMA_TOKEN", "FIGMA_ACCESS_TOKEN")

# (field, question) in prompt order
PROMPTS: list[tuple[str, str]] = [
    ("token", "Figma API token"),
    ("file", "Figma file ID"),
    ("page", "Figma page name"),
    ("color_prefix", "Color prefix"),
    ("size_prefix", "Size prefix"),
    ("spacing_prefix", "Spacing prefix"),
    ("border_prefix", "Border prefix"),
    ("border_radius_prefix", "Border radius prefix"),
    ("shadow_prefix", "Shadow prefix"),
    ("font_prefix", "Font prefix"),
    ("tokens_file_path", "Tokens file path"),
]

# Receives (field, question, default) and returns the answer
AskValue = Callable[[str, str, str], str]


class TokensConfig(BaseModel):
    """Complete run configuration."""

    model_config = ConfigDict(populate_by_name=True)

    token: str = ""
    file: str = ""
    page: str = "Page 1"
    color_prefix: str = Field(default="Color", alias="colorPrefix")
    size_prefix: str = Field(default="Size", alias="sizePrefix")
    spacing_prefix: str = Field(default="Spacing", alias="spacingPrefix")
    border_prefix: str = Field(default="Stroke", alias="borderPrefix")
    border_radius_prefix: str = Field(default="Border radius", alias="borderRadiusPrefix")
    shadow_prefix: str = Field(default="Shadow", alias="shadowPrefix")
    font_prefix: str = Field(default="Font", alias="fontPrefix")
    tokens_file_path: str = Field(default="styles/_tokens.scss", alias="tokensFilePath")
    emit_defaults: bool = Field(default=False, alias="emitDefaults")
    font_variables: bool = Field(default=False, alias="fontVariables")
    separator: str = "/"

    def prefixes(self) -> CategoryPrefixes:
        return CategoryPrefixes(
            color=self.color_prefix,
            size=self.size_prefix,
            spacing=self.spacing_prefix,
            border=self.border_prefix,
            radius=self.border_radius_prefix,
            shadow=self.shadow_prefix,
            font=self.font_prefix,
        )

    def get_tokens_path(self, root: Path) -> Path:
        """Absolute stylesheet path; relative paths resolve against root."""
        path = Path(self.tokens_file_path)
        if path.is_absolute():
            return path
        return root / path


def missing_fields(config: TokensConfig) -> list[str]:
    """Prompted fields that are still empty."""
    return [name for name, _ in PROMPTS if not getattr(config, name).strip()]


def _env_token(env: Mapping[str, str]) -> str | None:
    for var in TOKEN_ENV_VARS:
        if env.get(var):
            return env[var]
    return None


def read_config_file(path: Path) -> dict:
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"Cannot read config file {path}", str(e)) from e
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a JSON object")
    return data


def _build(data: dict, path: Path) -> TokensConfig:
    try:
        return TokensConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config file {path}", str(e)) from e


def load_config(path: Path, env: Mapping[str, str] | None = None) -> TokensConfig:
    """
    Load configuration from a JSON file, with environment overrides.

    Args:
        path: Path to `.figma-config.json` (defaults are used if absent)
        env: Environment mapping (os.environ if omitted)

    Returns:
        TokensConfig
    """
    env = os.environ if env is None else env
    config = _build(read_config_file(path), path)
    token = _env_token(env)
    if token:
        config = config.model_copy(update={"token": token})
    return config


def save_config(config: TokensConfig, path: Path) -> None:
    path.write_text(
        json.dumps(config.model_dump(by_alias=True), indent=2) + "\n",
        encoding="utf-8",
    )
    logger.debug("Saved config to %s", path)


def ensure_config(
    path: Path,
    ask: AskValue,
    env: Mapping[str, str] | None = None,
) -> TokensConfig:
    """
    Load configuration, prompting for whatever is missing.

    Without a config file every setting is asked for, with defaults
    offered. With one, only empty settings are asked for. Answers are
    saved back to the file.
    """
    env = os.environ if env is None else env
    exists = path.exists()
    config = _build(read_config_file(path), path)
    env_token = _env_token(env)

    pending = [name for name, _ in PROMPTS] if not exists else missing_fields(config)
    if env_token:
        pending = [name for name in pending if name != "token"]

    if pending or not exists:
        questions = dict(PROMPTS)
        answers = {name: ask(name, questions[name], getattr(config, name)) for name in pending}
        config = config.model_copy(update=answers)
        save_config(config, path)

    if env_token:
        config = config.model_copy(update={"token": env_token})
    return config
