"""Persisted state: blob codec, key-value stores and the gateway."""

from geocoin.persistence.gateway import JsonFileStore, KeyValueStore, MemoryStore, PersistenceGateway

__all__ = ["JsonFileStore", "KeyValueStore", "MemoryStore", "PersistenceGateway"]
