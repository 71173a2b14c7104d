"""
Bucket storage for ClientVault.

NOTE:
Stores only hold the already-encrypted strings handed to them by the
repositories. Nothing here ever sees plaintext records.
"""

import os
import json
import logging
import shutil
import threading
from typing import Dict, Optional

from . import config
from .utils import set_owner_only_permissions

logger = logging.getLogger(__name__)


class MemoryStore:
    """Keeps buckets in a dict for the lifetime of the process."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._buckets: Dict[str, str] = dict(initial or {})
        self._lock = threading.Lock()

    def read(self, bucket: str) -> Optional[str]:
        with self._lock:
            return self._buckets.get(bucket)

    def write(self, bucket: str, value: str) -> None:
        with self._lock:
            self._buckets[bucket] = value

    def remove(self, bucket: str) -> None:
        with self._lock:
            self._buckets.pop(bucket, None)

    def buckets(self) -> Dict[str, str]:
        """Snapshot of every stored bucket."""
        with self._lock:
            return dict(self._buckets)


class FileStore:
    """Persists buckets as one JSON object in a file."""

    def __init__(self, filepath: str):
        """
        Initialize file store.
        Args:
            filepath: Path to the store file. Created on first write.
        """
        self.filepath = filepath
        self._lock = threading.Lock()

    def read(self, bucket: str) -> Optional[str]:
        with self._lock:
            return self._load().get(bucket)

    def write(self, bucket: str, value: str) -> None:
        with self._lock:
            buckets = self._load(keep_corrupt=True)
            buckets[bucket] = value
            self._save(buckets)

    def remove(self, bucket: str) -> None:
        with self._lock:
            buckets = self._load(keep_corrupt=True)
            if bucket in buckets:
                del buckets[bucket]
                self._save(buckets)

    def buckets(self) -> Dict[str, str]:
        """Snapshot of every stored bucket."""
        with self._lock:
            return self._load()

    def _load(self, keep_corrupt: bool = False) -> Dict[str, str]:
        """
        Read the bucket mapping from disk.
        A missing or unreadable file reads as empty. With keep_corrupt, an
        unreadable file is copied aside first, since the caller is about to
        overwrite it."""
        if not os.path.exists(self.filepath):
            return {}
        try:
            with open(self.filepath, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.error(f"Error reading store file {self.filepath}: {e}")
            if keep_corrupt:
                self._backup_corrupt()
            return {}
        if not isinstance(data, dict):
            logger.error(f"Store file {self.filepath} does not hold a bucket mapping, ignoring it")
            if keep_corrupt:
                self._backup_corrupt()
            return {}
        return {k: v for k, v in data.items() if isinstance(v, str)}

    def _backup_corrupt(self) -> None:
        """Copy the unreadable store file to <filepath>.corrupt."""
        backup_path = self.filepath + config.CORRUPT_STORE_SUFFIX
        shutil.copy2(self.filepath, backup_path)
        set_owner_only_permissions(backup_path)
        logger.warning(f"Kept a copy of the unreadable store file at {backup_path}")

    def _save(self, buckets: Dict[str, str]) -> None:
        """
        Write the bucket mapping to disk."""
        directory = os.path.dirname(os.path.abspath(self.filepath))
        os.makedirs(directory, exist_ok=True)
        tmp_path = self.filepath + '.tmp'

        try:
            with open(tmp_path, 'w', encoding='utf-8') as f:
                json.dump(buckets, f, indent=2)

            # Atomic replace using shutil.move
            shutil.move(tmp_path, self.filepath)

            if not set_owner_only_permissions(self.filepath):
                logger.warning(f"Failed to set secure file permissions for store: {self.filepath}.")

        except Exception as e:
            logger.error(f"Error saving store file {self.filepath}: {e}", exc_info=True)
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise
