"""
Command Line Interface for building a photo gallery.
"""

import argparse
import cProfile
import logging
import os
from datetime import datetime
from typing import List, Optional

from .build_progress import BuildProgress
from .builder import RenditionBuilder
from .config import GalleryConfig
from .errors import GalleryError
from .image_ops import ImageProcessor
from .manifest import assemble
from .orchestrator import Orchestrator
from .renderer import GalleryRenderer
from .source_item import load_sources


def setup_logging(verbosity: int) -> logging.Logger:
    """Configure logging. 0 = warnings only, 1 = progress, 2 = debug."""
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format='%(asctime)s [%(levelname)s] %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    logging.getLogger('PIL').setLevel(logging.WARNING)

    logger = logging.getLogger('pixgen')
    logger.setLevel(level)
    return logger


def get_config(args: argparse.Namespace) -> GalleryConfig:
    """Get gallery configuration from environment and CLI overrides."""
    config = GalleryConfig.from_env()

    if args.output:
        config.output_dir = args.output
    if args.title is not None:
        config.title = args.title
    if args.sw is not None:
        config.small_width = args.sw
    if args.sh is not None:
        config.small_height = args.sh
    if args.tw is not None:
        config.thumb_width = args.tw
    if args.th is not None:
        config.thumb_height = args.th
    if args.quality is not None:
        config.quality = args.quality

    return config


def build(config: GalleryConfig, args: argparse.Namespace, logger: logging.Logger) -> int:
    """Build the gallery described by config from the positional sources."""
    renderer = GalleryRenderer(config.output_dir, logger=logger)
    copied = renderer.copy_assets()
    logger.debug(f"Copied {len(copied)} viewer assets")

    items = load_sources(args.sources)

    builder = RenditionBuilder(
        output_dir=config.output_dir,
        small=config.small_spec,
        thumbnail=config.thumbnail_spec,
        processor=ImageProcessor(quality=config.quality, logger=logger),
        logger=logger
    )
    orchestrator = Orchestrator(builder, logger=logger)

    progress = None
    if not args.quiet:
        progress = BuildProgress(show_files=args.show_files, logger=logger)

    manifest = orchestrator.run(items, progress=progress)
    index_path = renderer.render_index(assemble(config.title, manifest, datetime.now()))

    if not args.quiet:
        stats = orchestrator.stats
        print()
        print(f"Gallery: {index_path}")
        print(f"Photos: {len(manifest)} ({manifest.total_with_copyright} with copyright)")
        print(f"Skipped: {stats.skipped}")
        print(f"Smalls: {stats.smalls_generated} generated, {stats.smalls_reused} reused")
        print(f"Thumbnails: {stats.thumbnails_generated} generated, {stats.thumbnails_reused} reused")
        print(f"Time: {stats.elapsed_seconds:.1f}s")

    return 0


def cmd_build(args: argparse.Namespace) -> int:
    """Execute a gallery build."""
    verbosity = 2 if args.very_verbose else (1 if args.verbose else 0)
    logger = setup_logging(verbosity)

    try:
        config = get_config(args)
    except ValueError as e:
        logger.error(f"Invalid configuration: {e}")
        return 1

    errors = config.validate()
    if errors:
        for error in errors:
            logger.error(error)
        return 1

    try:
        os.makedirs(config.output_dir, exist_ok=True)
    except OSError as e:
        logger.error(f"could not create output dir: {e}")
        return 1

    profiler = None
    if args.cpuprofile:
        profiler = cProfile.Profile()
        profiler.enable()

    try:
        return build(config, args, logger)
    except GalleryError as e:
        logger.error(str(e))
        return 1
    except OSError as e:
        logger.error(f"Gallery output failed: {e}")
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    finally:
        if profiler:
            profiler.disable()
            profiler.dump_stats(args.cpuprofile)
            logger.info(f"CPU profile written to {args.cpuprofile}")


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog='pixgen',
        description='Build a static PhotoSwipe gallery from JPEG and PNG photos',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Example:
  pixgen -o gallery -t "Summer 2026" photos/*.jpg

For each photo the gallery gets the original, NAME_small.EXT and NAME_thm.EXT.
Renditions newer than their photo are reused, so re-running is cheap.

Environment defaults:
  PIXGEN_OUTPUT, PIXGEN_TITLE, PIXGEN_SMALL_SIZE (WxH), PIXGEN_THUMB_SIZE (WxH),
  PIXGEN_QUALITY
"""
    )

    parser.add_argument('sources', nargs='*', metavar='PHOTO', help='Source photos, in gallery order')
    parser.add_argument('-o', '--output', metavar='DIR', help='Output directory for the gallery (required)')
    parser.add_argument('-t', '--title', help='Gallery title (default: Untitled)')
    parser.add_argument('--tw', type=int, metavar='PX', help='Thumbnail width (default: 256)')
    parser.add_argument('--th', type=int, metavar='PX', help='Thumbnail height (default: 256)')
    parser.add_argument('--sw', type=int, metavar='PX', help='Small width bound (default: 2048)')
    parser.add_argument('--sh', type=int, metavar='PX', help='Small height bound (default: 2048)')
    parser.add_argument('--quality', type=int, metavar='Q', help='JPEG quality (default: 85)')
    parser.add_argument('--cpuprofile', metavar='PATH', help='Write a CPU profile to PATH')
    parser.add_argument('-q', '--quiet', action='store_true', help='Suppress the summary')
    parser.add_argument('--show-files', action='store_true', help='Print each photo with its rendition status')
    parser.add_argument('-v', '--verbose', action='store_true', help='Verbose logging')
    parser.add_argument('-V', '--very-verbose', action='store_true', help='Very verbose logging')

    return parser


def main(args: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)
    return cmd_build(parsed_args)
