"""
Lifecycle controller for the labeling service.

STARTING -> SERVING -> DRAINING -> TERMINATED

start() prepares the working directory and label registry; drain() runs the
shutdown archive exactly once. Request handlers that touch the filesystem
hold a shared gate while they work, and drain() takes the gate exclusively
before walking the label folders, so a move in flight is never half-seen by
the archiver.
"""

import logging
import shutil
import threading
from contextlib import contextmanager
from enum import Enum
from typing import Iterator, Optional

from label_sorter.archiver import ArchiveReport, create_archive
from label_sorter.config import LabelerConfig
from label_sorter.errors import ArchiveError, ServiceUnavailableError
from label_sorter.images import list_label_folders
from label_sorter.labels import LabelRegistry


class LifecycleState(Enum):
    """Service lifecycle states."""
    STARTING = "starting"
    SERVING = "serving"
    DRAINING = "draining"
    TERMINATED = "terminated"


class ReadWriteGate:
    """Many shared holders or one exclusive holder."""

    def __init__(self):
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False

    @contextmanager
    def shared(self) -> Iterator[None]:
        with self._cond:
            while self._writer:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def exclusive(self) -> Iterator[None]:
        with self._cond:
            while self._writer or self._readers:
                self._cond.wait()
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()


class LifecycleController:
    """Owns the process-wide state shared by request handlers."""

    def __init__(
        self,
        config: LabelerConfig,
        logger: Optional[logging.Logger] = None
    ):
        self._config = config
        self._logger = logger or logging.getLogger(__name__)
        self._state = LifecycleState.STARTING
        self._state_lock = threading.Lock()
        self._gate = ReadWriteGate()
        self._registry: Optional[LabelRegistry] = None

    @property
    def config(self) -> LabelerConfig:
        return self._config

    @property
    def state(self) -> LifecycleState:
        return self._state

    @property
    def registry(self) -> LabelRegistry:
        if self._registry is None:
            raise RuntimeError("Label registry is not loaded; call start() first")
        return self._registry

    def start(self) -> None:
        """
        Prepare the service for requests.

        Raises:
            ConfigError: If the label file cannot be loaded
            OSError: If the working directory cannot be created
        """
        images_dir = self._config.images_dir
        images_dir.mkdir(parents=True, exist_ok=True)

        self._registry = LabelRegistry.from_file(self._config.labels_file)
        self._clean_label_folders()

        with self._state_lock:
            self._state = LifecycleState.SERVING
        self._logger.info(f"Serving images from {images_dir.resolve()}")

    def _clean_label_folders(self) -> None:
        """Remove subfolders left from a previous run so every image starts unlabeled."""
        images_dir = self._config.images_dir
        try:
            folders = list_label_folders(images_dir)
        except OSError as e:
            self._logger.warning(f"Failed to clean label subfolders: {e}")
            return

        for name in folders:
            try:
                shutil.rmtree(images_dir / name)
            except OSError as e:
                self._logger.warning(f"Failed to remove directory {images_dir / name}: {e}")
            else:
                self._logger.info(f"Cleaned label subfolder: {name}")

    @contextmanager
    def request(self) -> Iterator[None]:
        """
        Shared hold for a request that reads or changes the working directory.

        Raises:
            ServiceUnavailableError: Once draining has begun
        """
        with self._gate.shared():
            if self._state in (LifecycleState.DRAINING, LifecycleState.TERMINATED):
                raise ServiceUnavailableError("Service is shutting down")
            yield

    def drain(self) -> Optional[ArchiveReport]:
        """
        Archive the label folders and move to TERMINATED.

        Only the first call archives; later calls return None. Archive
        failures are logged, never raised.
        """
        with self._state_lock:
            if self._state in (LifecycleState.DRAINING, LifecycleState.TERMINATED):
                return None
            self._state = LifecycleState.DRAINING

        self._logger.info(f"Shutting down, creating {self._config.archive_path}...")
        report = None
        try:
            with self._gate.exclusive():
                report = create_archive(self._config.images_dir, self._config.archive_path)
        except (ArchiveError, OSError) as e:
            self._logger.error(f"Error creating {self._config.archive_path}: {e}")
        else:
            self._logger.info(f"Successfully created {self._config.archive_path}")
        finally:
            with self._state_lock:
                self._state = LifecycleState.TERMINATED

        return report
