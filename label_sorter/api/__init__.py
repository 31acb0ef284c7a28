"""HTTP surface for label-sorter."""
