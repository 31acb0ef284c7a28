"""
Mover - relocate one image into its label subfolder.

Rename is tried first. When it fails (typically EXDEV across filesystems)
the file is stream-copied and the source removed only once the copy is
complete.
"""

import logging
import os
import shutil
from pathlib import Path
from typing import Optional, Union

logger = logging.getLogger(__name__)

COPY_BUFFER_SIZE = 1024 * 1024


def move_file(
    source_path: Union[str, Path],
    destination_directory: Union[str, Path],
    filename: Optional[str] = None
) -> Path:
    """
    Move source_path to destination_directory/filename.

    Args:
        source_path: File to move
        destination_directory: Target folder, created with parents if missing
        filename: Name at the destination (defaults to the source name)

    Returns:
        Path of the file at its new location

    Raises:
        OSError: If the directory cannot be created, or the move fails. When
            removing the source fails after a successful copy, the error is
            raised with the copy left in place.
    """
    src = Path(source_path)
    dst_dir = Path(destination_directory)
    dst = dst_dir / (filename or src.name)

    dst_dir.mkdir(parents=True, exist_ok=True)

    try:
        os.rename(src, dst)
        return dst
    except OSError as e:
        logger.debug(f"Rename {src} -> {dst} failed ({e}), falling back to copy")

    _copy_file(src, dst)

    try:
        os.remove(src)
    except OSError:
        logger.error(f"Copied {src} to {dst} but could not remove the source; file now exists twice")
        raise

    return dst


def _copy_file(src: Path, dst: Path) -> None:
    """Stream src into dst, removing a partial dst if the copy fails."""
    with open(src, 'rb') as fsrc:
        try:
            with open(dst, 'wb') as fdst:
                shutil.copyfileobj(fsrc, fdst, COPY_BUFFER_SIZE)
        except OSError:
            _remove_partial(dst)
            raise


def _remove_partial(dst: Path) -> None:
    try:
        dst.unlink(missing_ok=True)
    except OSError as e:
        logger.warning(f"Could not remove partial copy {dst}: {e}")
