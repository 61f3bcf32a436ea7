"""
Layout configuration: breakpoint tables, grid settings and render defaults.

Values can be supplied directly, through ``LayoutConfig.from_options`` (which
rejects unknown option names), or from ``RESPONSIVE_IMAGES_*`` environment
variables via ``LayoutConfig.from_env``.
"""

import os
from typing import Any, Dict, Optional
from urllib.parse import urlencode

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from responsive_images.errors import ConfigurationError
from responsive_images.models import HIRES_SOURCE, XS, BreakpointTable


# Make sure these are ordered LARGEST to SMALLEST
CONTAINERS: Dict[str, Dict[str, int]] = {
    "v4": {
        "xl": 1140,
        "lg": 960,
        "md": 720,
        "sm": 540,
    },
    "v5": {
        "xxl": 1320,
        "xl": 1140,
        "lg": 960,
        "md": 720,
        "sm": 540,
    },
}

BREAKPOINTS: Dict[str, Dict[str, int]] = {
    "v4": {
        "xl": 1200,
        "lg": 992,
        "md": 768,
        "sm": 576,
    },
    "v5": {
        "xxl": 1400,
        "xl": 1200,
        "lg": 992,
        "md": 768,
        "sm": 576,
    },
}

ENV_PREFIX = "RESPONSIVE_IMAGES_"


class LayoutConfig(BaseModel):
    """Grid layout and default render policy."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    layout_version: str = "5"
    containers: Dict[str, Dict[str, int]] = Field(default_factory=lambda: CONTAINERS)
    breakpoints: Dict[str, Dict[str, int]] = Field(default_factory=lambda: BREAKPOINTS)
    grid_columns: int = Field(default=12, ge=1)
    gutter_width: int = Field(default=0, ge=0)
    base_url: str = "/"
    image_root: Optional[str] = None

    default_hires: Any = HIRES_SOURCE
    default_hires_height: Any = None
    default_lqip: Any = XS
    default_ratio: Any = None
    default_ratio_crop: bool = False
    default_max_resolution: float = 2.0
    default_resolution_step: float = 0.5
    default_container_max_height: Optional[int] = Field(default=None, gt=0)

    @classmethod
    def from_options(cls, **options) -> "LayoutConfig":
        """
        Create a config from keyword options.

        Raises:
            ConfigurationError: On unknown option names or invalid values.
        """
        try:
            return cls(**options)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid layout configuration: {e}") from e

    @classmethod
    def from_env(cls, **overrides) -> "LayoutConfig":
        """
        Create a config from environment variables (and a .env file, if present).

        Args:
            **overrides: Options that take precedence over the environment.

        Returns:
            LayoutConfig instance.
        """
        load_dotenv()

        env_options = {
            "layout_version": os.getenv(f"{ENV_PREFIX}LAYOUT_VERSION"),
            "grid_columns": os.getenv(f"{ENV_PREFIX}GRID_COLUMNS"),
            "gutter_width": os.getenv(f"{ENV_PREFIX}GUTTER_WIDTH"),
            "base_url": os.getenv(f"{ENV_PREFIX}BASE_URL"),
            "image_root": os.getenv(f"{ENV_PREFIX}IMAGE_ROOT"),
            "default_hires": os.getenv(f"{ENV_PREFIX}HIRES"),
            "default_lqip": os.getenv(f"{ENV_PREFIX}LQIP"),
            "default_max_resolution": os.getenv(f"{ENV_PREFIX}MAX_RESOLUTION"),
            "default_resolution_step": os.getenv(f"{ENV_PREFIX}RESOLUTION_STEP"),
        }
        options = {key: value for key, value in env_options.items() if value is not None}
        options.update(overrides)
        return cls.from_options(**options)

    def breakpoint_table(self, version: Optional[str] = None) -> BreakpointTable:
        """
        Get the breakpoint table for a layout version.

        Args:
            version: Version label ("4", "5"); defaults to the configured one.

        Returns:
            BreakpointTable ordered largest to smallest.
        """
        v = str(version or self.layout_version)
        key = f"v{v}"
        if key not in self.containers or key not in self.breakpoints:
            raise ConfigurationError(f"Layout v{v} is not supported, add its containers and breakpoints")
        return BreakpointTable.from_widths(v, self.containers[key], self.breakpoints[key])

    def with_version(self, version: str) -> "LayoutConfig":
        """Copy of this config using another layout version."""
        self.breakpoint_table(version)
        return self.model_copy(update={"layout_version": str(version)})

    def dynamic_image_filename(self, src: str, ext: str, width: int) -> str:
        """Default public filename resolver for the resize endpoint."""
        params = {"f": f"{src}.{ext}", "w": width}
        return f"{self.base_url}resize?{urlencode(params)}"
