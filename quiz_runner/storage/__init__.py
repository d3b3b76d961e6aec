"""Quiz Storage - Persistência de snapshots de sessão."""

from .kv import JsonFileKV, KVBackend, MemoryKV
from .session_store import SessionStore

__all__ = ["KVBackend", "MemoryKV", "JsonFileKV", "SessionStore"]
