"""Labeling service - business logic behind the page and label endpoints."""

import logging
import os
import re
from pathlib import Path
from typing import Optional, Union

from label_sorter.errors import ValidationError
from label_sorter.images import is_image_name, list_images, list_label_folders
from label_sorter.labels import Label
from label_sorter.lifecycle import LifecycleController
from label_sorter.mover import move_file
from label_sorter.pagination import Page, count_pages, paginate

_INDEX_PATTERN = re.compile(r"[+-]?[0-9]+")


class LabelingService:
    """Service for browsing unlabeled images and assigning labels."""

    def __init__(
        self,
        controller: LifecycleController,
        logger: Optional[logging.Logger] = None
    ):
        self._controller = controller
        self._images_dir = controller.config.images_dir
        self._page_size = controller.config.items_per_page
        self._logger = logger or logging.getLogger(__name__)

    @property
    def labels(self) -> tuple[Label, ...]:
        return self._controller.registry.labels

    def get_page(self, requested_page: Optional[Union[int, str]]) -> Page:
        """
        Build the requested page from the current directory listing.

        Raises:
            OSError: If the working directory cannot be read
        """
        images = list_images(self._images_dir)
        return paginate(images, requested_page, self._page_size)

    def assign_label(self, image: Optional[str], label: Optional[str]) -> Path:
        """
        Move an unlabeled image into the folder of the chosen label.

        Args:
            image: Bare filename inside the working directory
            label: 1-based label index as sent by the client

        Returns:
            New path of the image

        Raises:
            ValidationError: If image or label is missing or invalid
            OSError: If the label folder cannot be created or the move fails
        """
        if not image or not label:
            raise ValidationError("Missing image or label")

        _check_filename(image)
        chosen = self._controller.registry.resolve(_parse_index(label))

        src = self._images_dir / image
        if src.exists() and not src.is_file():
            raise ValidationError(f"Not an image file: {image!r}")

        dst_dir = self._images_dir / chosen.text
        try:
            dst = move_file(src, dst_dir, image)
        except OSError as e:
            self._logger.error(f"Error moving image {image} to '{chosen.text}': {e}")
            raise

        self._logger.info(f"Labeled image {image} with label '{chosen.text}' ({chosen.index})")
        return dst

    def status(self) -> dict:
        """Count unlabeled images and files per label folder."""
        unlabeled = list_images(self._images_dir)
        labeled = {}
        for folder in list_label_folders(self._images_dir):
            labeled[folder] = sum(
                len(files) for _, _, files in os.walk(self._images_dir / folder)
            )

        return {
            "unlabeled": len(unlabeled),
            "labeled": labeled,
            "total_pages": count_pages(len(unlabeled), self._page_size),
            "page_size": self._page_size,
        }


def _check_filename(image: str) -> None:
    """Reject anything that is not a plain name directly in the working directory."""
    if image in (".", "..") or "/" in image or "\\" in image or "\x00" in image:
        raise ValidationError(f"Invalid image name: {image!r}")
    if not is_image_name(image):
        raise ValidationError(f"Not an image name: {image!r}")


def _parse_index(label: str) -> int:
    """Parse a base-10 label index; whitespace, underscores and non-ASCII digits are rejected."""
    if not _INDEX_PATTERN.fullmatch(label):
        raise ValidationError(f"Invalid label: {label!r}")
    return int(label)
