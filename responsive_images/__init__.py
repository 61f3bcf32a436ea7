"""
Responsive Image Descriptors for Grid Layouts

Computes the image widths and resolution variants a responsive <picture>/<img>
element needs to fill a grid-column layout at every breakpoint, without over-
or under-serving pixels.
"""

__version__ = "0.1.0"

from responsive_images.config import LayoutConfig
from responsive_images.engine import DescriptorEngine, ImageSpecBuilder, resolve
from responsive_images.errors import (
    ConfigurationError,
    ImageNotFound,
    ResponsiveImageError,
    SourceUnavailable,
    UnreadableImage,
)
from responsive_images.models import ImageSpec, ResolvedImage

__all__ = [
    "ConfigurationError",
    "DescriptorEngine",
    "ImageNotFound",
    "ImageSpec",
    "ImageSpecBuilder",
    "LayoutConfig",
    "ResolvedImage",
    "ResponsiveImageError",
    "SourceUnavailable",
    "UnreadableImage",
    "resolve",
]
