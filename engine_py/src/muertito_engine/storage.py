"""
Snapshot stores.

A store only holds the latest serialized snapshot; deciding whether it is
usable is the engine's job.
"""

import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


class SnapshotStore(ABC):
    """Where the current game is saved between sessions."""

    @abstractmethod
    def load(self) -> Optional[bytes]:
        """Return the stored snapshot, or None if there is none."""
        pass

    @abstractmethod
    def save(self, raw: bytes):
        pass

    @abstractmethod
    def clear(self):
        pass


class MemoryStore(SnapshotStore):
    """Keeps the snapshot in process memory."""

    def __init__(self, raw: Optional[bytes] = None):
        self.raw = raw

    def load(self) -> Optional[bytes]:
        return self.raw

    def save(self, raw: bytes):
        self.raw = raw

    def clear(self):
        self.raw = None


class FileStore(SnapshotStore):
    """
    Keeps the snapshot in a single file.

    I/O failures are logged and treated as "nothing stored"; a game can
    always continue without persistence.
    """

    def __init__(self, path: str):
        self.path = Path(path).expanduser()

    def load(self) -> Optional[bytes]:
        try:
            return self.path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as e:
            logger.warning(f"Could not read snapshot {self.path}: {e}")
            return None

    def save(self, raw: bytes):
        tmp_path = self.path.with_suffix(self.path.suffix + '.tmp')
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_bytes(raw)
            os.replace(tmp_path, self.path)
        except OSError as e:
            logger.error(f"Could not save snapshot to {self.path}: {e}")

    def clear(self):
        try:
            self.path.unlink()
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.error(f"Could not remove snapshot {self.path}: {e}")
