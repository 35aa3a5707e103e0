"""Configuration for Folio.

Settings come from three places, highest priority first:

1. Environment variables (``FOLIO_SECTION__KEY``, e.g. ``FOLIO_LINT__STRICT=true``)
2. ``.folio.toml`` in the site root
3. Defaults
"""

from __future__ import annotations

import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from folio.core.exceptions import ConfigError

CONFIG_FILENAME = ".folio.toml"

PermalinkStyle = Literal["date", "pretty", "ordinal", "none"]


def _deep_merge(destination: dict[str, Any], source: Mapping[str, Any]) -> dict[str, Any]:
    """Merge source into destination, with source values overwriting."""
    for key, value in source.items():
        if isinstance(value, Mapping) and key in destination and isinstance(destination[key], Mapping):
            destination[key] = _deep_merge(dict(destination[key]), value)
        else:
            destination[key] = value
    return destination


class PathsSettings(BaseModel):
    """Path configuration.

    Relative paths are resolved against ``site_root``.
    """

    site_root: Path = Field(default_factory=Path.cwd, description="Root directory of the blog")
    posts_dir: Path = Field(default=Path("_posts"), description="Directory holding dated posts")
    exclude: list[str] = Field(
        default_factory=lambda: ["README.md", "CHANGELOG.md", "LICENSE.md", "vendor/**", "node_modules/**"],
        description="Glob patterns (relative to site_root) that are never treated as content",
    )

    @property
    def abs_posts_dir(self) -> Path:
        return self._resolve(self.posts_dir)

    def _resolve(self, path: Path) -> Path:
        if path.is_absolute():
            return path
        return self.site_root / path


class LintSettings(BaseModel):
    """Lint rule configuration."""

    layouts: list[str] = Field(
        default_factory=lambda: ["default", "page", "post"],
        description="Layouts that exist in the theme",
    )
    disable: list[str] = Field(default_factory=list, description="Rule names to skip")
    strict: bool = Field(default=False, description="Treat warnings as failures")
    permalink_style: PermalinkStyle = Field(default="date", description="Jekyll permalink style")


class FolioConfig(BaseSettings):
    """Root configuration for Folio."""

    paths: PathsSettings = Field(default_factory=PathsSettings)
    lint: LintSettings = Field(default_factory=LintSettings)

    model_config = SettingsConfigDict(
        extra="ignore",
        env_prefix="FOLIO_",
        env_nested_delimiter="__",
    )

    @property
    def site_root(self) -> Path:
        return self.paths.site_root

    @classmethod
    def load(cls, site_root: Path | None = None) -> FolioConfig:
        """Load configuration from ``.folio.toml`` and environment variables.

        Raises:
            ConfigError: If the file is not valid TOML or the merged settings do not validate.

        """
        root_path = site_root if site_root is not None else Path.cwd()
        config_file = root_path / CONFIG_FILENAME

        file_settings: dict[str, Any] = {}
        if config_file.is_file():
            try:
                with config_file.open("rb") as f:
                    file_settings = tomllib.load(f)
            except tomllib.TOMLDecodeError as exc:
                msg = f"Invalid TOML in {config_file}: {exc}"
                raise ConfigError(msg) from exc

        try:
            # pydantic-settings gives __init__ arguments precedence over the
            # environment, so env values are read separately and merged last.
            env_settings = cls().model_dump(exclude_unset=True)
            merged = _deep_merge(file_settings, env_settings)
            merged.setdefault("paths", {})["site_root"] = root_path
            return cls.model_validate(merged)
        except ValidationError as exc:
            msg = f"Invalid configuration for {root_path}: {exc}"
            raise ConfigError(msg) from exc
