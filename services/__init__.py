# services/__init__.py

from .persistence import ConfigManager, MemoryStorage, StorageError

__all__ = ["ConfigManager", "MemoryStorage", "StorageError"]
