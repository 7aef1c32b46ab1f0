# services/persistence.py
from __future__ import annotations

import logging
import os
import re
import shutil
import tempfile
import threading
from pathlib import Path
from typing import Dict, Optional, Protocol, Union

log = logging.getLogger(__name__)

_SAFE_KEY = re.compile(r"^[A-Za-z0-9._-]+$")


def _expand(path: Union[str, Path]) -> Path:
    return Path(os.path.expanduser(str(path))).resolve()


class StorageError(RuntimeError):
    pass


class KeyValueStorage(Protocol):
    def get(self, key: str) -> Optional[str]: ...
    def set(self, key: str, value: str) -> None: ...


class ConfigManager:
    """
    File-backed key/value store for small text blobs (one file per key):
    - Atomic writes (tempfile + os.replace)
    - Automatic backup (.bak) of the previous blob on write
    - Thread-safety across calls

    Typical use:
        cfg = ConfigManager(app_name="killick")
        raw = cfg.get("killick-settings")      # None if never written
        cfg.set("killick-settings", '{"theme": "dark"}')

    Blobs live under ``~/.killick`` unless ``base_dir`` or ``KILLICK_HOME`` say otherwise.
    """

    def __init__(
        self,
        app_name: str = "killick",
        base_dir: Optional[Union[str, Path]] = None,
    ):
        self._lock = threading.RLock()
        self.app_name = app_name
        env_dir = os.environ.get(f"{app_name.upper()}_HOME")
        self.base_dir = _expand(base_dir or env_dir or Path.home() / f".{app_name}")
        try:
            self.base_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(f"Cannot create storage directory {self.base_dir}: {e}") from e

    # ------------- key/value API -------------

    def get(self, key: str) -> Optional[str]:
        path = self._path(key)
        with self._lock:
            if not path.exists():
                return None
            try:
                return path.read_text(encoding="utf-8")
            except OSError as e:
                raise StorageError(f"Failed to read {path}: {e}") from e

    def set(self, key: str, value: str) -> None:
        if not isinstance(value, str):
            raise StorageError(f"Only text can be stored, got {type(value).__name__}.")
        path = self._path(key)
        with self._lock:
            try:
                self._atomic_write(path, value, make_backup=True)
            except OSError as e:
                raise StorageError(f"Failed to write {path}: {e}") from e

    def remove(self, key: str) -> None:
        path = self._path(key)
        with self._lock:
            if path.exists():
                path.unlink()

    # ------------- internal utils -------------

    def _path(self, key: str) -> Path:
        if not _SAFE_KEY.match(key or ""):
            raise StorageError(f"Invalid storage key: {key!r}")
        return self.base_dir / f"{key}.json"

    def _atomic_write(self, path: Path, text: str, make_backup: bool = False) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        # Write to temp file first
        fd, tmp = tempfile.mkstemp(prefix=path.stem + ".", suffix=".tmp", dir=str(path.parent))
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(text)
                f.flush()
                os.fsync(f.fileno())
            if path.exists() and make_backup:
                backup = path.with_suffix(path.suffix + ".bak")
                shutil.copy2(path, backup)
            os.replace(tmp, path)  # atomic on POSIX/NTFS
        finally:
            # If replace succeeded, tmp is gone. If failed, ensure cleanup.
            if os.path.exists(tmp):
                try:
                    os.remove(tmp)
                except OSError:
                    log.debug("Could not remove temp file %s", tmp)


class MemoryStorage:
    """In-process storage; nothing survives the interpreter."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value
