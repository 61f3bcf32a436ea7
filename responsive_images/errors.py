"""
Exception hierarchy for the responsive image descriptor engine.
"""

from pathlib import Path
from typing import Optional, Union


class ResponsiveImageError(Exception):
    """Base class for all engine errors."""


class ConfigurationError(ResponsiveImageError, ValueError):
    """Invalid option, ratio, resolution factor or layout configuration."""


class SourceUnavailable(ResponsiveImageError):
    """The source image is missing or cannot be read."""

    def __init__(self, message: str, path: Optional[Union[str, Path]] = None):
        super().__init__(message)
        self.path = Path(path) if path is not None else None


class ImageNotFound(SourceUnavailable, FileNotFoundError):
    """The source image file does not exist."""


class UnreadableImage(SourceUnavailable):
    """The source image exists but its dimensions cannot be read."""
