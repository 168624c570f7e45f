"""
RenditionBuilder - Builds the small view and thumbnail for one source image.
"""

import logging
import os
import shutil
from typing import Optional

from PIL import Image

from .cropper import SmartCropper
from .errors import SourceError
from .image_ops import ImageProcessor, extract_copyright, fit_size
from .rendition import PixEntry, RenditionRecord, RenditionSpec
from .source_item import SourceItem
from .staleness import needs_rebuild


class RenditionBuilder:
    """
    Builds the renditions of a single source item.

    Publishes the original into the output directory, then writes whichever
    of the small and thumbnail renditions are stale.
    """

    def __init__(
        self,
        output_dir: str,
        small: RenditionSpec,
        thumbnail: RenditionSpec,
        processor: Optional[ImageProcessor] = None,
        cropper: Optional[SmartCropper] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize builder.

        Args:
            output_dir: Gallery output directory (must exist)
            small: Spec of the bounded small rendition
            thumbnail: Spec of the cropped thumbnail rendition
            processor: Image processor, defaults to a Pillow ImageProcessor
            cropper: Crop chooser, defaults to SmartCropper
            logger: Optional logger instance
        """
        self.output_dir = output_dir
        self.small_spec = small
        self.thumbnail_spec = thumbnail
        self.logger = logger or logging.getLogger(__name__)
        self.processor = processor or ImageProcessor(logger=self.logger)
        self.cropper = cropper or SmartCropper(logger=self.logger)

    def build(self, item: SourceItem) -> Optional[PixEntry]:
        """
        Build the renditions of one source item.

        Args:
            item: Source item to process

        Returns:
            The manifest entry, or None if the item is not a processable source

        Raises:
            GalleryError: On unreadable sources, decode or encode failures
        """
        if not item.is_processable():
            self.logger.debug(f"Skipping {item.path}: not a processable source")
            return None

        self._publish_original(item)

        img, image_format = self.processor.decode(item.path)
        copyright = extract_copyright(img, self.logger)

        small = self._build_small(item, img, image_format)
        thumbnail = self._build_thumbnail(item, img, image_format)

        return PixEntry(
            filename=item.filename,
            width=img.width,
            height=img.height,
            small=small,
            thumbnail=thumbnail,
            copyright=copyright,
            position=item.position,
        )

    def output_path(self, filename: str) -> str:
        """Get the path of a file inside the output directory."""
        return os.path.join(self.output_dir, filename)

    def _publish_original(self, item: SourceItem) -> None:
        """Hard-link the source into the output directory, copying if linking fails."""
        target = self.output_path(item.filename)
        try:
            if os.path.lexists(target):
                if os.path.exists(target) and os.path.samefile(item.path, target):
                    self.logger.debug(f"{item.path} is already in the output directory")
                    return
                os.remove(target)
            try:
                os.link(item.path, target)
            except OSError as e:
                self.logger.debug(f"Cannot link {item.path} ({e}), copying")
                shutil.copyfile(item.path, target)
        except OSError as e:
            raise SourceError(f"could not publish {item.path} to {target}: {e}") from e

    def _build_small(
        self,
        item: SourceItem,
        img: Image.Image,
        image_format: str
    ) -> RenditionRecord:
        """Write the small rendition if stale. Dimensions are always recomputed."""
        spec = self.small_spec
        name = spec.output_name(item.filename)
        path = self.output_path(name)
        width, height = fit_size(img.width, img.height, spec.width, spec.height)

        regenerated = needs_rebuild(path, item.modified)
        if regenerated:
            self.logger.info(f"Generating small {name} for {image_format} {item.path}")
            small_img = self.processor.fit_within(img, spec.width, spec.height)
            self.processor.encode(small_img, path, image_format)
        else:
            self.logger.debug(f"Small more recent than original: {item.path}")

        return RenditionRecord(filename=name, width=width, height=height, regenerated=regenerated)

    def _build_thumbnail(
        self,
        item: SourceItem,
        img: Image.Image,
        image_format: str
    ) -> RenditionRecord:
        """Write the thumbnail if stale, skipping the crop entirely when it is fresh."""
        spec = self.thumbnail_spec
        name = spec.output_name(item.filename)
        path = self.output_path(name)

        if not needs_rebuild(path, item.modified):
            self.logger.debug(f"Thumbnail more recent than original: {item.path}")
            return RenditionRecord(filename=name, width=spec.width, height=spec.height, regenerated=False)

        if not self.processor.supports_crop(img):
            # The entry still names the thumbnail; the file may be missing.
            self.logger.warning(f"Cannot crop {item.path} (mode {img.mode}), no thumbnail written")
            return RenditionRecord(
                filename=name,
                width=spec.width,
                height=spec.height,
                regenerated=False,
                available=False,
            )

        box = self.cropper.best_crop(img, spec.width, spec.height)
        self.logger.info(f"Generating thumbnail {name}, best crop is {box}")
        thumb_img = self.processor.resize_exact(self.processor.crop(img, box), spec.width, spec.height)
        self.processor.encode(thumb_img, path, image_format)

        return RenditionRecord(filename=name, width=spec.width, height=spec.height, regenerated=True)
