"""
Adapters layer - Record store implementations.
"""

from .json_store import JsonFileRecordStore
from .memory_store import InMemoryRecordStore

__all__ = ["InMemoryRecordStore", "JsonFileRecordStore"]
