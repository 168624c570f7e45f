"""
Static Photo Gallery Builder

For each source photo, builds two renditions into an output directory:
    1. A small view bounded by a maximum width and height
    2. A smart-cropped thumbnail of exact size

Renditions are built concurrently, one worker per photo, and the gallery
keeps the order the photos were given in. Renditions newer than their
photo are reused.
"""

__version__ = "1.0.0"

from .errors import (
    GalleryError,
    SourceError,
    DecodeError,
    UnsupportedFormatError,
    EncodeError,
    EmptyGalleryError,
    BuildError,
)
from .config import GalleryConfig
from .source_item import SourceItem, load_sources
from .staleness import needs_rebuild
from .rendition import RenditionSpec, RenditionRecord, PixEntry
from .image_ops import ImageProcessor
from .cropper import SmartCropper
from .builder import RenditionBuilder
from .build_stats import BuildStats
from .build_progress import BuildProgress
from .manifest import GalleryManifest, TemplateInput, assemble
from .orchestrator import BuildResult, Orchestrator, reorder
from .renderer import GalleryRenderer

__all__ = [
    "GalleryError",
    "SourceError",
    "DecodeError",
    "UnsupportedFormatError",
    "EncodeError",
    "EmptyGalleryError",
    "BuildError",
    "GalleryConfig",
    "SourceItem",
    "load_sources",
    "needs_rebuild",
    "RenditionSpec",
    "RenditionRecord",
    "PixEntry",
    "ImageProcessor",
    "SmartCropper",
    "RenditionBuilder",
    "BuildStats",
    "BuildProgress",
    "GalleryManifest",
    "TemplateInput",
    "assemble",
    "BuildResult",
    "Orchestrator",
    "reorder",
    "GalleryRenderer",
]
