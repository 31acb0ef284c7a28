"""
Archiver - pack every label subfolder into a single zip file.

Only direct subdirectories of the working directory are walked; unlabeled
images at the root are left out. Entries keep their path relative to the
working directory, e.g. ``cats/img_001.jpg``.
"""

import logging
import os
import zipfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Union

from label_sorter.errors import ArchiveError
from label_sorter.images import list_label_folders

logger = logging.getLogger(__name__)


@dataclass
class ArchiveReport:
    """Outcome of one archive run."""
    output_path: Path
    archived: list[str] = field(default_factory=list)
    skipped: list[tuple[str, str]] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.skipped


def create_archive(
    working_directory: Union[str, Path],
    output_path: Union[str, Path]
) -> ArchiveReport:
    """
    Write all files under the label subfolders into a fresh zip archive.

    A file that cannot be added is skipped with a warning; the rest of the
    export continues.

    Raises:
        ArchiveError: If the working directory cannot be listed or the
            archive file cannot be created
    """
    root = Path(working_directory)
    report = ArchiveReport(output_path=Path(output_path))

    try:
        folders = list_label_folders(root)
    except OSError as e:
        raise ArchiveError(f"Failed to read working directory {root}: {e}") from e

    try:
        # Pre-1980 mtimes are clamped instead of rejected
        zf = zipfile.ZipFile(
            report.output_path, 'w', zipfile.ZIP_DEFLATED, strict_timestamps=False
        )
    except OSError as e:
        raise ArchiveError(f"Failed to create {report.output_path}: {e}") from e

    with zf:
        for folder in folders:
            _add_folder(zf, root, root / folder, report)

    logger.info(
        f"Wrote {len(report.archived)} files to {report.output_path} "
        f"({len(report.skipped)} skipped)"
    )
    return report


def _add_folder(zf: zipfile.ZipFile, root: Path, folder: Path, report: ArchiveReport) -> None:
    """Recursively add every regular file in folder."""

    def on_walk_error(e: OSError):
        logger.warning(f"Cannot read {e.filename}: {e}")
        report.skipped.append((str(e.filename), str(e)))

    for dirpath, dirnames, filenames in os.walk(folder, onerror=on_walk_error):
        dirnames.sort()
        for name in sorted(filenames):
            file_path = Path(dirpath) / name
            arcname = file_path.relative_to(root).as_posix()

            if not file_path.is_file():
                continue

            try:
                zf.write(file_path, arcname)
            except (OSError, ValueError) as e:
                logger.warning(f"Skipping {arcname}: {e}")
                report.skipped.append((arcname, str(e)))
                continue

            report.archived.append(arcname)
            logger.debug(f"Added to zip: {arcname}")
