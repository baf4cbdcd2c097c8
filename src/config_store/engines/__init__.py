"""Engines implementing the write, read and delete semantics over a RecordStore."""

from config_store.engines.deletion import DeletionEngine
from config_store.engines.retrieval import SORT_OPTIONS, RetrievalEngine, parse_sort
from config_store.engines.upsert import UpsertEngine

__all__ = [
    "SORT_OPTIONS",
    "DeletionEngine",
    "RetrievalEngine",
    "UpsertEngine",
    "parse_sort",
]
