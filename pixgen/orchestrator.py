"""
Orchestrator - Builds every source item concurrently and restores input order.
"""

import logging
import queue
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Iterable, List, Optional

from .build_progress import BuildProgress
from .build_stats import BuildStats
from .builder import RenditionBuilder
from .errors import BuildError, EmptyGalleryError
from .manifest import GalleryManifest
from .rendition import PixEntry
from .source_item import SourceItem


@dataclass(frozen=True)
class BuildResult:
    """
    Tagged outcome of one build task.

    Exactly one of entry and error is set for a built or failed item; both
    are None when the item was not a processable source.
    """
    position: int
    path: str
    entry: Optional[PixEntry] = None
    error: Optional[BaseException] = None

    @property
    def failed(self) -> bool:
        return self.error is not None

    @property
    def skipped(self) -> bool:
        return self.error is None and self.entry is None


def reorder(results: Iterable[BuildResult]) -> List[PixEntry]:
    """
    Put built entries back into input order.

    Skipped results leave no gap. Failed results must have been handled by
    the caller.

    Raises:
        ValueError: If two results claim the same position, or a failure is present
    """
    by_position = {}
    for result in results:
        if result.failed:
            raise ValueError(f"cannot reorder failed result for {result.path}")
        if result.position in by_position:
            raise ValueError(f"duplicate result for position {result.position}")
        by_position[result.position] = result
    return [
        by_position[position].entry
        for position in sorted(by_position)
        if by_position[position].entry is not None
    ]


class Orchestrator:
    """
    Runs one build task per source item, all at once.

    Tasks share nothing but the result queue, which holds one slot per item.
    The first failure is raised only after every task has finished.
    """

    def __init__(
        self,
        builder: RenditionBuilder,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize orchestrator.

        Args:
            builder: Builder run for each item (anything with build(item))
            logger: Optional logger instance
        """
        self.builder = builder
        self.logger = logger or logging.getLogger(__name__)
        self.stats = BuildStats()

    def run(
        self,
        items: List[SourceItem],
        progress: Optional[BuildProgress] = None
    ) -> GalleryManifest:
        """
        Build all items and return the gallery manifest in input order.

        Args:
            items: Source items, in input order
            progress: Optional progress reporter

        Returns:
            Complete GalleryManifest

        Raises:
            BuildError: If any item failed (first failure observed)
            EmptyGalleryError: If there were no processable photos
        """
        self.stats = BuildStats(total_items=len(items))
        if not items:
            raise EmptyGalleryError("did not find any photos")

        self.logger.info(f"Building {len(items)} source items")
        results = self._collect(items)

        failures = [r for r in results if r.failed]
        if failures:
            self.logger.debug(f"{len(failures)} of {len(items)} builds failed")
            first = failures[0]
            raise BuildError(first.path, first.error) from first.error

        entries = reorder(results)
        self.stats.skipped = sum(1 for r in results if r.skipped)
        self.stats.add_entries(entries)

        if progress:
            for result in sorted(results, key=lambda r: r.position):
                if result.skipped:
                    progress.on_item_skipped(result.path)
                else:
                    progress.on_item_built(result.entry)
            progress.on_build_complete(self.stats)

        if not entries:
            raise EmptyGalleryError("did not find any photos")
        return GalleryManifest(entries=entries)

    def _collect(self, items: List[SourceItem]) -> List[BuildResult]:
        """Fan out one task per item, join them all, then drain the queue."""
        results_queue = queue.Queue(maxsize=len(items))

        with ThreadPoolExecutor(max_workers=len(items), thread_name_prefix='pixgen') as executor:
            for item in items:
                executor.submit(self._build_one, item, results_queue)

        results = []
        while not results_queue.empty():
            results.append(results_queue.get_nowait())
        return results

    def _build_one(self, item: SourceItem, results_queue: queue.Queue) -> None:
        """Build one item and put exactly one tagged result."""
        try:
            entry = self.builder.build(item)
        except Exception as e:
            results_queue.put(BuildResult(position=item.position, path=item.path, error=e))
            return
        results_queue.put(BuildResult(position=item.position, path=item.path, entry=entry))
