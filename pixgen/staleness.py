"""
Staleness - Timestamp-only rebuild policy for renditions.
"""

import os


def needs_rebuild(output_path: str, source_modified: float) -> bool:
    """
    Check whether a rendition must be (re)built.

    An output is only reused when its mtime is strictly after the source's.
    Equal timestamps count as stale.

    Args:
        output_path: Path of the rendition file
        source_modified: Source mtime in seconds since the epoch

    Returns:
        True if the output is missing or not newer than the source
    """
    try:
        output_modified = os.stat(output_path).st_mtime
    except FileNotFoundError:
        return True
    return not output_modified > source_modified
