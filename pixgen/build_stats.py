"""
BuildStats - Statistics for a gallery build run.
"""

import time
from dataclasses import dataclass, field
from typing import Iterable

from .rendition import PixEntry


@dataclass
class BuildStats:
    """
    Statistics for a build run.

    Attributes:
        total_items: Source items given to the run
        built: Items that produced a manifest entry
        skipped: Items that were not processable sources
        smalls_generated: Small renditions written this run
        smalls_reused: Small renditions that were already fresh
        thumbnails_generated: Thumbnails written this run
        thumbnails_reused: Thumbnails that were already fresh
        thumbnails_unavailable: Thumbnails that could not be cropped
        start_time: Start timestamp
    """
    total_items: int = 0
    built: int = 0
    skipped: int = 0
    smalls_generated: int = 0
    smalls_reused: int = 0
    thumbnails_generated: int = 0
    thumbnails_reused: int = 0
    thumbnails_unavailable: int = 0
    start_time: float = field(default_factory=time.time)

    def add_entries(self, entries: Iterable[PixEntry]) -> None:
        """Count the renditions of finished entries."""
        for entry in entries:
            self.built += 1
            if entry.small.regenerated:
                self.smalls_generated += 1
            else:
                self.smalls_reused += 1
            if not entry.thumbnail.available:
                self.thumbnails_unavailable += 1
            elif entry.thumbnail.regenerated:
                self.thumbnails_generated += 1
            else:
                self.thumbnails_reused += 1

    @property
    def elapsed_seconds(self) -> float:
        """Elapsed time in seconds."""
        return time.time() - self.start_time

    @property
    def rate_per_second(self) -> float:
        """Items built per second."""
        if self.elapsed_seconds > 0:
            return self.built / self.elapsed_seconds
        return 0.0

    @property
    def renditions_written(self) -> int:
        """Total rendition files written this run."""
        return self.smalls_generated + self.thumbnails_generated
