"""label-sorter: sort a folder of images into label subfolders from the browser."""

__version__ = "0.1.0"
