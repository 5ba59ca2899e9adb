"""In-memory metric store for tests and dry runs."""

from .in_memory_store import InMemoryMetricStore, InMemoryRecordBuilder

__all__ = ["InMemoryMetricStore", "InMemoryRecordBuilder"]
