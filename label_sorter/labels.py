"""Label registry - the ordered label choices loaded at startup."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Union

from label_sorter.errors import ConfigError, ValidationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Label:
    """A label choice with its 1-based position in the source file."""
    index: int
    text: str


def load_labels(source: Union[str, Path]) -> list[str]:
    """
    Read label texts from a UTF-8 file, one per line.

    Lines are stripped and blank lines skipped. Duplicates are kept.

    Raises:
        ConfigError: If the file cannot be read or contains no labels
    """
    path = Path(source)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            labels = [line.strip() for line in f]
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Failed to read labels from {path}: {e}") from e

    labels = [text for text in labels if text]
    if not labels:
        raise ConfigError(f"No labels found in {path}")

    return labels


class LabelRegistry:
    """Immutable, ordered collection of labels."""

    def __init__(self, texts: list[str]):
        if not texts:
            raise ConfigError("Label registry needs at least one label")
        self._labels = tuple(Label(index=i, text=text) for i, text in enumerate(texts, start=1))

    @classmethod
    def from_file(cls, source: Union[str, Path]) -> 'LabelRegistry':
        registry = cls(load_labels(source))
        logger.info(f"Loaded {len(registry)} label choices")
        return registry

    def resolve(self, index: int) -> Label:
        """Return the label at a 1-based index."""
        if not 1 <= index <= len(self._labels):
            raise ValidationError(f"Label index {index} out of range 1..{len(self._labels)}")
        return self._labels[index - 1]

    @property
    def labels(self) -> tuple[Label, ...]:
        return self._labels

    @property
    def texts(self) -> list[str]:
        return [label.text for label in self._labels]

    def __len__(self) -> int:
        return len(self._labels)

    def __iter__(self) -> Iterator[Label]:
        return iter(self._labels)
