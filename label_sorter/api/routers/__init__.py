"""API routers."""

from label_sorter.api.routers import gallery, labels

__all__ = ["gallery", "labels"]
