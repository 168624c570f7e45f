"""
GalleryConfig - Settings for one gallery build.
"""

import os
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .rendition import RenditionSpec


DEFAULT_TITLE = 'Untitled'
DEFAULT_SMALL_SIZE = (2048, 2048)
DEFAULT_THUMB_SIZE = (256, 256)
DEFAULT_QUALITY = 85


def parse_size(value: str) -> Tuple[int, int]:
    """
    Parse a 'WIDTHxHEIGHT' string.

    Raises:
        ValueError: If the value is not two integers separated by 'x'
    """
    width, sep, height = value.lower().partition('x')
    if not sep:
        raise ValueError(f"expected WIDTHxHEIGHT, got {value!r}")
    return int(width), int(height)


@dataclass
class GalleryConfig:
    """
    Gallery build settings.

    Attributes:
        output_dir: Directory the gallery is written to (required)
        title: Gallery title
        small_width: Bounding box width of small renditions
        small_height: Bounding box height of small renditions
        thumb_width: Thumbnail width
        thumb_height: Thumbnail height
        quality: JPEG quality for written renditions
    """
    output_dir: Optional[str] = None
    title: str = DEFAULT_TITLE
    small_width: int = DEFAULT_SMALL_SIZE[0]
    small_height: int = DEFAULT_SMALL_SIZE[1]
    thumb_width: int = DEFAULT_THUMB_SIZE[0]
    thumb_height: int = DEFAULT_THUMB_SIZE[1]
    quality: int = DEFAULT_QUALITY

    @classmethod
    def from_env(cls) -> 'GalleryConfig':
        """
        Load defaults from the environment.

        Reads PIXGEN_OUTPUT, PIXGEN_TITLE, PIXGEN_SMALL_SIZE, PIXGEN_THUMB_SIZE
        and PIXGEN_QUALITY. Sizes are written as WIDTHxHEIGHT.
        """
        config = cls(
            output_dir=os.environ.get('PIXGEN_OUTPUT') or None,
            title=os.environ.get('PIXGEN_TITLE', DEFAULT_TITLE),
        )
        if os.environ.get('PIXGEN_SMALL_SIZE'):
            config.small_width, config.small_height = parse_size(os.environ['PIXGEN_SMALL_SIZE'])
        if os.environ.get('PIXGEN_THUMB_SIZE'):
            config.thumb_width, config.thumb_height = parse_size(os.environ['PIXGEN_THUMB_SIZE'])
        if os.environ.get('PIXGEN_QUALITY'):
            config.quality = int(os.environ['PIXGEN_QUALITY'])
        return config

    def validate(self) -> List[str]:
        """Return a list of configuration errors (empty if valid)."""
        errors = []
        if not self.output_dir:
            errors.append("must specify an output directory using -o")
        for name in ('small_width', 'small_height', 'thumb_width', 'thumb_height'):
            if getattr(self, name) <= 0:
                errors.append(f"{name} must be positive, got {getattr(self, name)}")
        if not 1 <= self.quality <= 95:
            errors.append(f"quality must be between 1 and 95, got {self.quality}")
        return errors

    @property
    def small_spec(self) -> RenditionSpec:
        return RenditionSpec.small(self.small_width, self.small_height)

    @property
    def thumbnail_spec(self) -> RenditionSpec:
        return RenditionSpec.thumbnail(self.thumb_width, self.thumb_height)
