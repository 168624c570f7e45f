"""
Pytest fixtures for pixgen tests.
"""

import os
import time

import pytest


OLD = time.time() - 3600


def center_box(img, width, height):
    """Largest centered box of width:height aspect."""
    scale = min(img.width / width, img.height / height)
    crop_w = max(1, int(width * scale))
    crop_h = max(1, int(height * scale))
    left = (img.width - crop_w) // 2
    top = (img.height - crop_h) // 2
    return (left, top, left + crop_w, top + crop_h)


@pytest.fixture
def logger():
    """Fixture providing a logger."""
    import logging
    return logging.getLogger('test')


@pytest.fixture
def source_dir(tmp_path):
    """Directory holding source photos."""
    path = tmp_path / "photos"
    path.mkdir()
    return path


@pytest.fixture
def output_dir(tmp_path):
    """Empty gallery output directory."""
    path = tmp_path / "gallery"
    path.mkdir()
    return path


@pytest.fixture
def make_photo(source_dir):
    """
    Fixture providing a factory for source photos.

    The photo's mtime is set an hour in the past so renditions written
    during the test are strictly newer.
    """
    from PIL import Image

    def _make(name, size=(120, 80), color='red', mode='RGB', image_format=None, exif=None):
        path = source_dir / name
        img = Image.new(mode, size, color=color)
        if image_format is None:
            ext = os.path.splitext(name)[1].lower()
            image_format = 'PNG' if ext == '.png' else 'JPEG'
        kwargs = {}
        if exif is not None:
            kwargs['exif'] = exif
        img.save(path, format=image_format, **kwargs)
        os.utime(path, (OLD, OLD))
        return str(path)

    return _make


@pytest.fixture
def make_item():
    """Fixture providing a factory for stat'ed source items."""
    from pixgen.source_item import SourceItem

    def _make(path, position=0):
        return SourceItem.from_path(path, position)

    return _make


@pytest.fixture
def mock_cropper(mocker):
    """Fixture providing a cropper that returns the centered box."""
    from pixgen.cropper import SmartCropper

    cropper = mocker.MagicMock(spec=SmartCropper)
    cropper.best_crop.side_effect = center_box
    return cropper


@pytest.fixture
def builder(output_dir, mock_cropper, logger):
    """Fixture providing a RenditionBuilder with small 60x60 and thumbnail 20x20."""
    from pixgen.builder import RenditionBuilder
    from pixgen.rendition import RenditionSpec

    return RenditionBuilder(
        output_dir=str(output_dir),
        small=RenditionSpec.small(60, 60),
        thumbnail=RenditionSpec.thumbnail(20, 20),
        cropper=mock_cropper,
        logger=logger,
    )


@pytest.fixture
def make_entry():
    """Fixture providing a factory for PixEntry rows."""
    from pixgen.rendition import PixEntry, RenditionRecord

    def _make(position, filename=None, copyright='', regenerated=True):
        filename = filename or f"photo{position}.jpg"
        stem, ext = os.path.splitext(filename)
        return PixEntry(
            filename=filename,
            width=640,
            height=480,
            small=RenditionRecord(f"{stem}_small{ext}", 500, 375, regenerated),
            thumbnail=RenditionRecord(f"{stem}_thm{ext}", 100, 100, regenerated),
            copyright=copyright,
            position=position,
        )

    return _make


@pytest.fixture
def patch_smartcrop(mocker):
    """Fixture replacing smartcrop analysis with the centered box."""
    from pixgen.cropper import SmartCropper

    return mocker.patch.object(
        SmartCropper,
        'best_crop',
        autospec=True,
        side_effect=lambda self, img, width, height: center_box(img, width, height),
    )
