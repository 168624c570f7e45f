"""
SmartCropper - Picks the most interesting region of an image for a thumbnail.
"""

import logging
from typing import Optional

import smartcrop
from PIL import Image

from .image_ops import Box


class SmartCropper:
    """
    Chooses thumbnail crops with the smartcrop content-aware algorithm.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)

    def best_crop(self, img: Image.Image, width: int, height: int) -> Box:
        """
        Find the best crop of width:height aspect within an image.

        Args:
            img: Full resolution image
            width: Target thumbnail width
            height: Target thumbnail height

        Returns:
            Crop box as (left, top, right, bottom) in image coordinates
        """
        if img.mode != 'RGB':
            img = img.convert('RGB')

        # One SmartCrop per call, workers share nothing
        result = smartcrop.SmartCrop().crop(img, width, height)
        top = result['top_crop']

        left = max(0, int(top['x']))
        upper = max(0, int(top['y']))
        right = min(img.width, left + int(top['width']))
        lower = min(img.height, upper + int(top['height']))
        box = (left, upper, right, lower)
        self.logger.debug(f"Best crop for {width}x{height}: {box}")
        return box
