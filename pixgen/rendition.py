"""
Rendition types - What to build for each source image and what was built.
"""

import os
from dataclasses import dataclass


SMALL_SUFFIX = '_small'
THUMBNAIL_SUFFIX = '_thm'


@dataclass(frozen=True)
class RenditionSpec:
    """
    A target output kind.

    Attributes:
        name: 'small' or 'thumbnail'
        width: Target (or maximum) width
        height: Target (or maximum) height
        crop: True if the rendition is smart-cropped to exactly width x height
        suffix: Inserted between the filename stem and its extension
    """
    name: str
    width: int
    height: int
    crop: bool
    suffix: str

    @classmethod
    def small(cls, width: int, height: int) -> 'RenditionSpec':
        """Proportional resize bounded by width x height."""
        return cls(name='small', width=width, height=height, crop=False, suffix=SMALL_SUFFIX)

    @classmethod
    def thumbnail(cls, width: int, height: int) -> 'RenditionSpec':
        """Smart-cropped rendition of exactly width x height."""
        return cls(name='thumbnail', width=width, height=height, crop=True, suffix=THUMBNAIL_SUFFIX)

    def output_name(self, filename: str) -> str:
        """Get the rendition filename for a source filename."""
        stem, ext = os.path.splitext(filename)
        return f"{stem}{self.suffix}{ext}"


@dataclass(frozen=True)
class RenditionRecord:
    """
    Outcome of building one rendition.

    Attributes:
        filename: Output filename (no directory)
        width: Realized width
        height: Realized height
        regenerated: True if the file was written this run, False if reused
        available: False when the rendition could not be produced at all
    """
    filename: str
    width: int
    height: int
    regenerated: bool
    available: bool = True

    @property
    def status(self) -> str:
        """Short status word for reports."""
        if not self.available:
            return 'unavailable'
        return 'generated' if self.regenerated else 'reused'


@dataclass(frozen=True)
class PixEntry:
    """
    One row of the gallery manifest.

    Attributes:
        filename: Display filename of the published original
        width: Source width
        height: Source height
        small: Small rendition record
        thumbnail: Thumbnail rendition record
        copyright: Embedded copyright string, empty if absent
        position: Position of the source in the input list
    """
    filename: str
    width: int
    height: int
    small: RenditionRecord
    thumbnail: RenditionRecord
    copyright: str
    position: int

    # Flat accessors used by the index template
    @property
    def small_name(self) -> str:
        return self.small.filename

    @property
    def small_width(self) -> int:
        return self.small.width

    @property
    def small_height(self) -> int:
        return self.small.height

    @property
    def thumbnail_name(self) -> str:
        return self.thumbnail.filename

    @property
    def thumbnail_width(self) -> int:
        return self.thumbnail.width

    @property
    def thumbnail_height(self) -> int:
        return self.thumbnail.height

    def format_status(self) -> str:
        """
        Format a human-readable status string.

        Returns:
            Status string like "a.jpg - small 500x333 (generated), thumbnail 100x100 (reused)"
        """
        return (
            f"{self.filename} - "
            f"small {self.small.width}x{self.small.height} ({self.small.status}), "
            f"thumbnail {self.thumbnail.width}x{self.thumbnail.height} ({self.thumbnail.status})"
        )
