"""
ImageProcessor - Decoding, resizing and encoding of renditions with Pillow.
"""

import logging
from typing import Optional, Tuple

from PIL import Image

from .errors import DecodeError, EncodeError, UnsupportedFormatError


# EXIF Copyright tag
COPYRIGHT_TAG = 0x8298

# Modes whose pixels can be cropped and resampled into a thumbnail
CROPPABLE_MODES = ('1', 'L', 'LA', 'P', 'PA', 'RGB', 'RGBA', 'CMYK', 'YCbCr')

Box = Tuple[int, int, int, int]


def fit_size(width: int, height: int, max_width: int, max_height: int) -> Tuple[int, int]:
    """
    Compute the size of an image fitted within a bounding box.

    Aspect ratio is preserved and images already inside the box are not
    upscaled.
    """
    if width <= max_width and height <= max_height:
        return width, height
    ratio = min(max_width / width, max_height / height)
    return max(1, round(width * ratio)), max(1, round(height * ratio))


def extract_copyright(img: Image.Image, logger: Optional[logging.Logger] = None) -> str:
    """
    Read the EXIF copyright string of an image.

    Missing or unreadable metadata is not an error; an empty string is
    returned instead.
    """
    logger = logger or logging.getLogger(__name__)
    try:
        value = img.getexif().get(COPYRIGHT_TAG)
    except (OSError, SyntaxError, ValueError) as e:
        logger.debug(f"Unreadable EXIF data: {e}")
        return ''
    if value is None:
        return ''
    if isinstance(value, bytes):
        value = value.decode('utf-8', errors='replace')
    return str(value).strip('\x00 ').strip('"')


class ImageProcessor:
    """
    Decodes sources and writes renditions using Pillow.
    """

    OUTPUT_FORMATS = {
        'JPEG': 'JPEG',
        'MPO': 'JPEG',
        'PNG': 'PNG',
    }

    def __init__(
        self,
        quality: int = 85,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize image processor.

        Args:
            quality: JPEG quality for output (default: 85)
            logger: Optional logger instance
        """
        self.quality = quality
        self.logger = logger or logging.getLogger(__name__)

    def decode(self, path: str) -> Tuple[Image.Image, str]:
        """
        Decode an image file fully into memory.

        Args:
            path: Source image path

        Returns:
            Tuple of (image, decoded format such as 'JPEG' or 'PNG')
        """
        try:
            with Image.open(path) as img:
                img.load()
                image_format = img.format
        except (OSError, SyntaxError, ValueError, Image.DecompressionBombError) as e:
            raise DecodeError(f"could not decode {path}: {e}") from e
        return img, image_format

    def fit_within(self, img: Image.Image, max_width: int, max_height: int) -> Image.Image:
        """Resize proportionally so the image fits inside max_width x max_height."""
        size = fit_size(img.width, img.height, max_width, max_height)
        if size == img.size:
            return img.copy()
        return img.resize(size, Image.Resampling.LANCZOS)

    def resize_exact(self, img: Image.Image, width: int, height: int) -> Image.Image:
        """Resize to exactly width x height."""
        return img.resize((width, height), Image.Resampling.LANCZOS)

    @staticmethod
    def supports_crop(img: Image.Image) -> bool:
        """Check whether sub-regions of this image can be extracted and resampled."""
        return img.mode in CROPPABLE_MODES

    def crop(self, img: Image.Image, box: Box) -> Image.Image:
        """Extract a sub-region (left, top, right, bottom)."""
        return img.crop(box)

    def encode(self, img: Image.Image, path: str, image_format: str) -> None:
        """
        Write an image in the same format as its source.

        Args:
            img: Image to write
            path: Output path
            image_format: Decoded format of the source image
        """
        output_format = self._get_output_format(image_format)
        try:
            if output_format == 'JPEG':
                img = self._convert_color_mode(img)
                img.save(path, format='JPEG', quality=self.quality, optimize=True)
            else:
                if img.mode == 'CMYK':
                    img = img.convert('RGB')
                img.save(path, format='PNG', optimize=True)
        except (OSError, ValueError) as e:
            raise EncodeError(f"could not write {path}: {e}") from e

    def _convert_color_mode(self, img: Image.Image) -> Image.Image:
        """Convert image to a color mode JPEG can store."""
        if img.mode in ('RGBA', 'LA'):
            background = Image.new('RGB', img.size, (255, 255, 255))
            if img.mode == 'LA':
                img = img.convert('RGBA')
            background.paste(img, mask=img.split()[-1])
            return background
        elif img.mode in ('P', 'PA'):
            img = img.convert('RGBA')
            background = Image.new('RGB', img.size, (255, 255, 255))
            background.paste(img, mask=img.split()[-1])
            return background
        elif img.mode not in ('RGB', 'L', 'CMYK'):
            return img.convert('RGB')
        return img

    def _get_output_format(self, image_format: Optional[str]) -> str:
        """Map a decoded format to the format renditions are written in."""
        try:
            return self.OUTPUT_FORMATS[image_format]
        except KeyError:
            raise UnsupportedFormatError(str(image_format)) from None
