from .kv_store import JsonFileStore, KeyValueStore, MemoryStore
from .persistence import PersistenceManager

__all__ = ["JsonFileStore", "KeyValueStore", "MemoryStore", "PersistenceManager"]
