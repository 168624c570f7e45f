"""
GalleryManifest - Ordered gallery entries and the data handed to the renderer.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterator, List

from .rendition import PixEntry


TIME_FORMAT = '%Y-%m-%d %H:%M:%S'


@dataclass
class GalleryManifest:
    """
    Ordered entries of a finished build.

    Attributes:
        entries: One PixEntry per processable source, in input order
    """
    entries: List[PixEntry] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[PixEntry]:
        return iter(self.entries)

    def __getitem__(self, index: int) -> PixEntry:
        return self.entries[index]

    @property
    def filenames(self) -> List[str]:
        """Display filenames in gallery order."""
        return [entry.filename for entry in self.entries]

    @property
    def total_with_copyright(self) -> int:
        """Entries carrying a copyright string."""
        return sum(1 for entry in self.entries if entry.copyright)


@dataclass(frozen=True)
class TemplateInput:
    """
    Everything the index template needs.

    Attributes:
        title: Gallery title
        generated: Generation timestamp, formatted
        pix: Entries in gallery order
    """
    title: str
    generated: str
    pix: List[PixEntry]


def assemble(title: str, manifest: GalleryManifest, generated_at: datetime) -> TemplateInput:
    """Fold a manifest into the template input."""
    return TemplateInput(
        title=title,
        generated=generated_at.strftime(TIME_FORMAT),
        pix=list(manifest.entries),
    )
