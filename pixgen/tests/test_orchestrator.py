"""Tests for Orchestrator and reorder."""

import random
import threading
import time
from unittest.mock import MagicMock

import pytest

from pixgen.errors import BuildError, DecodeError, EmptyGalleryError
from pixgen.orchestrator import BuildResult, Orchestrator, reorder
from pixgen.source_item import SourceItem


class SlowBuilder:
    """Builder double that finishes items in a chosen order."""

    def __init__(self, make_entry, delays, fail_at=None, skip_at=()):
        self.make_entry = make_entry
        self.delays = delays
        self.fail_at = fail_at
        self.skip_at = skip_at
        self.built = []
        self.threads = set()
        self._lock = threading.Lock()

    def build(self, item):
        time.sleep(self.delays[item.position])
        with self._lock:
            self.built.append(item.position)
            self.threads.add(threading.get_ident())
        if item.position == self.fail_at:
            raise DecodeError(f"could not decode {item.path}")
        if item.position in self.skip_at:
            return None
        return self.make_entry(item.position, item.filename)


def make_items(count):
    return [SourceItem(path=f"/photos/p{i}.jpg", position=i, modified=0.0) for i in range(count)]


class TestReorder:
    """Tests for the reorder function."""

    def test_restores_input_order(self, make_entry):
        """Results come back in position order whatever the arrival order."""
        results = [BuildResult(position=i, path=f"p{i}.jpg", entry=make_entry(i)) for i in range(6)]
        random.Random(3).shuffle(results)

        entries = reorder(results)

        assert [e.position for e in entries] == [0, 1, 2, 3, 4, 5]

    def test_skips_leave_no_gap(self, make_entry):
        """Skipped positions produce no row."""
        results = [
            BuildResult(position=2, path='c.jpg', entry=make_entry(2)),
            BuildResult(position=1, path='notes.txt'),
            BuildResult(position=0, path='a.jpg', entry=make_entry(0)),
        ]

        entries = reorder(results)

        assert [e.position for e in entries] == [0, 2]

    def test_empty(self):
        assert reorder([]) == []

    def test_duplicate_position(self, make_entry):
        """Two results for one position are rejected."""
        results = [
            BuildResult(position=0, path='a.jpg', entry=make_entry(0)),
            BuildResult(position=0, path='b.jpg', entry=make_entry(0)),
        ]

        with pytest.raises(ValueError, match='duplicate'):
            reorder(results)

    def test_failed_result(self):
        """Failures must be handled before reordering."""
        with pytest.raises(ValueError):
            reorder([BuildResult(position=0, path='a.jpg', error=DecodeError('boom'))])


class TestBuildResult:
    """Tests for BuildResult class."""

    def test_flags(self, make_entry):
        assert BuildResult(position=0, path='a.jpg').skipped
        assert not BuildResult(position=0, path='a.jpg', entry=make_entry(0)).skipped
        assert BuildResult(position=0, path='a.jpg', error=DecodeError('x')).failed


class TestOrchestrator:
    """Tests for Orchestrator class."""

    def test_order_invariance(self, make_entry, logger):
        """Later items finishing first does not change the manifest order."""
        items = make_items(5)
        builder = SlowBuilder(make_entry, delays=[0.25, 0.2, 0.15, 0.1, 0.0])

        manifest = Orchestrator(builder, logger=logger).run(items)

        assert [e.position for e in manifest] == [0, 1, 2, 3, 4]
        assert [e.filename for e in manifest] == [f"p{i}.jpg" for i in range(5)]
        assert builder.built != [0, 1, 2, 3, 4]

    def test_random_delays(self, make_entry, logger):
        """Order holds for random completion orders."""
        rng = random.Random(7)
        items = make_items(12)
        builder = SlowBuilder(make_entry, delays=[rng.uniform(0, 0.05) for _ in items])

        manifest = Orchestrator(builder, logger=logger).run(items)

        assert [e.position for e in manifest] == list(range(12))

    def test_one_worker_per_item(self, make_entry, logger):
        """Every item runs on its own worker at the same time."""
        items = make_items(4)
        builder = SlowBuilder(make_entry, delays=[0.2] * 4)

        started = time.time()
        Orchestrator(builder, logger=logger).run(items)

        assert len(builder.threads) == 4
        assert time.time() - started < 0.6

    def test_skipped_items_omitted(self, make_entry, logger):
        """Unprocessable items shorten the manifest."""
        items = make_items(5)
        builder = SlowBuilder(make_entry, delays=[0.0] * 5, skip_at=(1, 3))

        orchestrator = Orchestrator(builder, logger=logger)
        manifest = orchestrator.run(items)

        assert [e.position for e in manifest] == [0, 2, 4]
        assert orchestrator.stats.skipped == 2
        assert orchestrator.stats.built == 3

    def test_failure_is_fatal(self, make_entry, logger):
        """A failing item fails the run after all tasks finished."""
        items = make_items(4)
        builder = SlowBuilder(make_entry, delays=[0.0, 0.0, 0.1, 0.0], fail_at=1)

        with pytest.raises(BuildError) as exc_info:
            Orchestrator(builder, logger=logger).run(items)

        assert exc_info.value.path == '/photos/p1.jpg'
        assert isinstance(exc_info.value.cause, DecodeError)
        assert sorted(builder.built) == [0, 1, 2, 3]

    def test_unexpected_exception_is_captured(self, logger):
        """Non-gallery exceptions in a worker also become a BuildError."""
        builder = MagicMock()
        builder.build.side_effect = RuntimeError('crop failed')

        with pytest.raises(BuildError, match='crop failed'):
            Orchestrator(builder, logger=logger).run(make_items(2))

    def test_no_items(self, logger):
        """An empty input is an empty gallery."""
        with pytest.raises(EmptyGalleryError):
            Orchestrator(MagicMock(), logger=logger).run([])

    def test_nothing_processable(self, make_entry, logger):
        """All items skipped is an empty gallery."""
        builder = SlowBuilder(make_entry, delays=[0.0] * 3, skip_at=(0, 1, 2))

        with pytest.raises(EmptyGalleryError, match='did not find any photos'):
            Orchestrator(builder, logger=logger).run(make_items(3))

    def test_progress_reported_in_order(self, make_entry, logger):
        """Progress sees entries and skips in gallery order."""
        items = make_items(3)
        builder = SlowBuilder(make_entry, delays=[0.1, 0.0, 0.05], skip_at=(1,))
        progress = MagicMock()

        Orchestrator(builder, logger=logger).run(items, progress=progress)

        assert [c.args[0].position for c in progress.on_item_built.call_args_list] == [0, 2]
        progress.on_item_skipped.assert_called_once_with('/photos/p1.jpg')
        progress.on_build_complete.assert_called_once()

    def test_stats(self, make_entry, logger):
        """Stats count generated and reused renditions."""
        items = make_items(2)

        def build(item):
            return make_entry(item.position, regenerated=item.position == 0)

        builder = MagicMock()
        builder.build.side_effect = build
        orchestrator = Orchestrator(builder, logger=logger)

        orchestrator.run(items)

        assert orchestrator.stats.total_items == 2
        assert orchestrator.stats.smalls_generated == 1
        assert orchestrator.stats.smalls_reused == 1
        assert orchestrator.stats.thumbnails_generated == 1
        assert orchestrator.stats.thumbnails_reused == 1


class TestOrchestratorWithBuilder:
    """Orchestrator running the real RenditionBuilder."""

    def test_mixed_sources(self, builder, make_photo, source_dir, logger):
        """Three photos and two excluded files give three entries in order."""
        (source_dir / 'notes.txt').write_text('hello')
        paths = [
            make_photo('c.jpg'),
            make_photo('photo_small.jpg'),
            make_photo('a.png'),
            str(source_dir / 'notes.txt'),
            make_photo('b.jpg'),
        ]
        items = [SourceItem.from_path(p, i) for i, p in enumerate(paths)]

        manifest = Orchestrator(builder, logger=logger).run(items)

        assert manifest.filenames == ['c.jpg', 'a.png', 'b.jpg']
