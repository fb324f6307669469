"""Persistence backends for TradeLedger."""

from tradeledger.db.store import KeyValueStore, MemoryStore, SqliteStore

__all__ = ["KeyValueStore", "MemoryStore", "SqliteStore"]
