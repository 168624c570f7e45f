"""
SourceItem - One input image and its position in the argument list.
"""

import os
from dataclasses import dataclass
from typing import Iterable, List

from .errors import SourceError


IMAGE_EXTENSIONS = ('.jpg', '.jpeg', '.png')
RESERVED_SUFFIXES = ('_small', '_thm')


@dataclass(frozen=True)
class SourceItem:
    """
    One source image.

    Attributes:
        path: Path as given on the command line
        position: 0-based rank in the input list
        modified: Modification time in seconds since the epoch
    """
    path: str
    position: int
    modified: float

    @property
    def filename(self) -> str:
        """Base filename of the source."""
        return os.path.basename(self.path)

    @property
    def extension(self) -> str:
        """Extension including the dot, as written."""
        return os.path.splitext(self.filename)[1]

    def is_processable(self) -> bool:
        """
        Check whether this item should get renditions at all.

        Our own renditions (``*_small.*``, ``*_thm.*``) and files without a
        JPEG or PNG extension are not processable.
        """
        stem, ext = os.path.splitext(self.filename)
        if ext.lower() not in IMAGE_EXTENSIONS:
            return False
        return not stem.endswith(RESERVED_SUFFIXES)

    @classmethod
    def from_path(cls, path: str, position: int) -> 'SourceItem':
        """Stat a path and create its item."""
        try:
            stat = os.stat(path)
        except OSError as e:
            raise SourceError(f"could not stat {path}: {e}") from e
        return cls(path=path, position=position, modified=stat.st_mtime)


def load_sources(paths: Iterable[str]) -> List[SourceItem]:
    """Create items for paths, in order. Raises SourceError on the first unstatable path."""
    return [SourceItem.from_path(path, position) for position, path in enumerate(paths)]
