from .cache_store import CacheWorldStore
from .serialization import Snapshot, decode_memento, encode_memento

__all__ = ["CacheWorldStore", "Snapshot", "decode_memento", "encode_memento"]
