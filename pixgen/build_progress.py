"""
BuildProgress - Reports per-file results and the run summary.
"""

import logging
from typing import Optional

from .build_stats import BuildStats
from .rendition import PixEntry


class BuildProgress:
    """
    Reports build results with optional per-file output.
    """

    def __init__(
        self,
        show_files: bool = False,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize progress reporter.

        Args:
            show_files: If True, print each file as it's reported
            logger: Optional logger instance
        """
        self.show_files = show_files
        self.logger = logger or logging.getLogger(__name__)

    def on_item_built(self, entry: PixEntry) -> None:
        """Called for each manifest entry, in gallery order."""
        if self.show_files:
            print(f"  [OK] {entry.format_status()}")

    def on_item_skipped(self, path: str) -> None:
        """Called for each source that was not processable."""
        if self.show_files:
            print(f"  [SKIP] {path} -> not a JPEG or PNG source")

    def on_build_complete(self, stats: BuildStats) -> None:
        """Log the totals of a finished build."""
        self.logger.info(
            f"Build complete: {stats.built} photos, {stats.skipped} skipped, "
            f"{stats.renditions_written} renditions written "
            f"({stats.elapsed_seconds:.1f}s)"
        )
        if stats.thumbnails_unavailable:
            self.logger.warning(f"{stats.thumbnails_unavailable} thumbnails could not be cropped")
