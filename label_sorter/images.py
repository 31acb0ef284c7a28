"""Image lister - unlabeled images directly inside the working directory."""

import os
from pathlib import Path
from typing import Union

# Matched case-sensitively against the file suffix
IMAGE_EXTENSIONS = frozenset({".jpg", ".jpeg", ".png", ".gif", ".bmp", ".webp"})


def is_image_name(filename: str) -> bool:
    return os.path.splitext(filename)[1] in IMAGE_EXTENSIONS


def list_images(directory: Union[str, Path]) -> list[str]:
    """
    List image filenames in a directory, non-recursively, sorted by name.

    Subdirectories are skipped even if their name looks like an image.

    Raises:
        OSError: If the directory cannot be read
    """
    images = []
    with os.scandir(directory) as entries:
        for entry in entries:
            if entry.is_dir():
                continue
            if is_image_name(entry.name):
                images.append(entry.name)

    return sorted(images)


def list_label_folders(directory: Union[str, Path]) -> list[str]:
    """List the names of direct subdirectories, sorted."""
    with os.scandir(directory) as entries:
        return sorted(entry.name for entry in entries if entry.is_dir())
