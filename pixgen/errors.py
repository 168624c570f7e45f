"""
Errors raised while building a gallery.

Anything deriving from GalleryError is fatal to the run.
"""


class GalleryError(Exception):
    """Base class for fatal gallery build errors."""


class SourceError(GalleryError):
    """A source file could not be stat'ed or read."""


class DecodeError(GalleryError):
    """A source file could not be decoded as an image."""


class UnsupportedFormatError(GalleryError):
    """A decoded image has a format we cannot encode renditions for."""

    def __init__(self, image_format: str):
        super().__init__(f"unexpected format: {image_format}")
        self.image_format = image_format


class EncodeError(GalleryError):
    """A rendition could not be written."""


class EmptyGalleryError(GalleryError):
    """No processable photos were found."""


class BuildError(GalleryError):
    """A worker failed to build one source item."""

    def __init__(self, path: str, cause: BaseException):
        super().__init__(f"could not thumbnail {path}: {cause}")
        self.path = path
        self.cause = cause
