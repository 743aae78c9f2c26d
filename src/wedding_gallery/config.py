"""
Configuration schema and loader for the gallery layout engine.

Defines Pydantic models representing structured configuration sections
and a TOML-based config loader with validation support.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

import tomlkit
from pydantic import BaseModel, Field, field_validator, model_validator

from wedding_gallery.config_defaults import (
    DEFAULT_AUTOPLAY_INTERVAL,
    DEFAULT_CAROUSEL_AUTOPLAY,
    DEFAULT_CAROUSEL_INTERVAL,
    DEFAULT_COLLAGE_TEMPLATE,
    DEFAULT_CONTAINER_HEIGHT,
    DEFAULT_CONTAINER_WIDTH,
    DEFAULT_DOWNLOAD_PROTECTION,
    DEFAULT_GAP,
    DEFAULT_LAYOUT,
    DEFAULT_LOG_LEVEL,
    DEFAULT_MOBILE_MAX_WIDTH,
    DEFAULT_RESIZE_DEBOUNCE_SECONDS,
    DEFAULT_SEED,
    DEFAULT_SWIPE_THRESHOLD,
    DEFAULT_TABLET_MAX_WIDTH,
)
from wedding_gallery.type_defs import CollageTemplateId, LayoutKind


class LayoutConfig(BaseModel):
    """Control default layout selection and canvas geometry."""

    default_layout: str = Field(DEFAULT_LAYOUT)
    container_width: int = Field(DEFAULT_CONTAINER_WIDTH, ge=1)
    container_height: int = Field(DEFAULT_CONTAINER_HEIGHT, ge=1)
    gap: int = Field(DEFAULT_GAP, ge=0)
    collage_template: CollageTemplateId = Field(DEFAULT_COLLAGE_TEMPLATE)

    @field_validator("default_layout")
    @classmethod
    def _known_layout(cls, value: str) -> str:
        return LayoutKind.parse(value).value


class ResponsiveConfig(BaseModel):
    """Breakpoint thresholds and resize debouncing."""

    mobile_max_width: int = Field(DEFAULT_MOBILE_MAX_WIDTH, ge=1)
    tablet_max_width: int = Field(DEFAULT_TABLET_MAX_WIDTH, ge=1)
    resize_debounce_seconds: float = Field(
        DEFAULT_RESIZE_DEBOUNCE_SECONDS,
        ge=0.0,
    )

    @model_validator(mode="after")
    def _check_order(self) -> ResponsiveConfig:
        if self.tablet_max_width <= self.mobile_max_width:
            msg = "tablet_max_width must be greater than mobile_max_width"
            raise ValueError(msg)
        return self


class ViewerConfig(BaseModel):
    """Full-screen viewer behaviour."""

    autoplay_interval: float = Field(DEFAULT_AUTOPLAY_INTERVAL, gt=0)
    carousel_interval: float = Field(DEFAULT_CAROUSEL_INTERVAL, gt=0)
    carousel_autoplay: bool = DEFAULT_CAROUSEL_AUTOPLAY
    swipe_threshold: int = Field(DEFAULT_SWIPE_THRESHOLD, ge=0)
    download_protection: bool = DEFAULT_DOWNLOAD_PROTECTION


class RandomConfig(BaseModel):
    """Seed for the artistic templates."""

    seed: int = Field(DEFAULT_SEED, ge=0)


class LoggingConfig(BaseModel):
    """Log verbosity."""

    level: str = Field(DEFAULT_LOG_LEVEL)


class GalleryConfig(BaseModel):
    """
    Root configuration object combining all supported sections.

    Mirrors the structure of gallery.toml, grouping related parameters
    under logical categories.
    """

    layout: LayoutConfig = Field(
        default_factory=lambda: LayoutConfig.model_validate({}),
    )
    responsive: ResponsiveConfig = Field(
        default_factory=lambda: ResponsiveConfig.model_validate({}),
    )
    viewer: ViewerConfig = Field(
        default_factory=lambda: ViewerConfig.model_validate({}),
    )
    random: RandomConfig = Field(
        default_factory=lambda: RandomConfig.model_validate({}),
    )
    logging: LoggingConfig = Field(
        default_factory=lambda: LoggingConfig.model_validate({}),
    )


class ConfigLoader:
    """
    Loads and parses a TOML configuration file into a typed config object.

    Falls back to defaults for any missing subsections or fields.
    """

    @staticmethod
    def load(path: str) -> GalleryConfig:
        """
        Load a gallery configuration from a TOML file.

        Returns a validated GalleryConfig instance based on the file
        contents.
        """
        config_path = Path(path)
        if not config_path.is_file():
            msg = f"Config file not found: {path}"
            raise FileNotFoundError(msg)

        with config_path.open("r", encoding="utf-8") as f:
            doc = tomlkit.load(f)

        return GalleryConfig.model_validate(doc.unwrap())


# CLI argument name -> (section, field)
_CLI_OVERRIDES: dict[str, tuple[str, str]] = {
    "width": ("layout", "container_width"),
    "height": ("layout", "container_height"),
    "gap": ("layout", "gap"),
    "template": ("layout", "collage_template"),
    "seed": ("random", "seed"),
    "log_level": ("logging", "level"),
}


def build_config_from_cli(
    args: Mapping[str, Any],
    *,
    base_config: GalleryConfig | None = None,
    loader: Callable[[str], GalleryConfig] = ConfigLoader.load,
) -> GalleryConfig:
    """
    Merge CLI arguments over a base config.

    ``args`` is typically ``vars(namespace)``. A ``config`` entry is
    loaded through ``loader`` unless ``base_config`` is supplied. Only
    arguments that are present and not None override the base values.
    """
    if base_config is None:
        config_path = args.get("config")
        base_config = (
            loader(config_path) if config_path
            else GalleryConfig.model_validate({})
        )

    data = base_config.model_dump()
    for arg_name, (section, field_name) in _CLI_OVERRIDES.items():
        value = args.get(arg_name)
        if value is not None:
            data[section][field_name] = value
    return GalleryConfig.model_validate(data)
