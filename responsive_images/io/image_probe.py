"""
Utilities for reading source image dimensions.
"""

from pathlib import Path
from typing import Optional, Tuple, Union

from PIL import Image, UnidentifiedImageError

from responsive_images.errors import ImageNotFound, SourceUnavailable, UnreadableImage
from responsive_images.models import SourceImage


class ImageProbe:
    """Reads image dimensions from disk without decoding pixel data."""

    def __init__(self, image_root: Optional[Union[str, Path]] = None):
        """
        Initialize image probe.

        Args:
            image_root: Optional directory relative paths are resolved against.
        """
        self.image_root = Path(image_root) if image_root else None

    def resolve_path(self, image_path: Union[str, Path]) -> Path:
        image_path = Path(image_path)
        if self.image_root and not image_path.is_absolute():
            return self.image_root / image_path
        return image_path

    def read_size(self, image_path: Union[str, Path]) -> Tuple[int, int]:
        """
        Read (width, height) of an image file.

        Args:
            image_path: Path to the image file.

        Returns:
            (width, height) tuple.

        Raises:
            ImageNotFound: If the file does not exist.
            UnreadableImage: If the file is not an image Pillow can identify,
                or is too big for Pillow to open safely.
        """
        path = self.resolve_path(image_path)
        if not path.exists():
            raise ImageNotFound(f"Image not found: {path}", path)

        try:
            with Image.open(path) as image:
                return image.size
        except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as e:
            raise UnreadableImage(f"Cannot read image size for {path}: {e}", path) from e

    def probe(self, image_path: Union[str, Path]) -> SourceImage:
        """
        Probe an image file for its dimensions.

        Args:
            image_path: Path to the image file.

        Returns:
            SourceImage with the native width and height.
        """
        width, height = self.read_size(image_path)
        if width <= 0 or height <= 0:
            raise UnreadableImage(f"Image has no pixels: {image_path}", self.resolve_path(image_path))
        return SourceImage(width=width, height=height)

    def validate(self, image_path: Union[str, Path]) -> Tuple[bool, Optional[str]]:
        """
        Check that an image exists and is readable.

        Args:
            image_path: Path to the image file.

        Returns:
            Tuple of (is_valid, error_message).
        """
        try:
            self.probe(image_path)
            return True, None
        except SourceUnavailable as e:
            return False, str(e)
