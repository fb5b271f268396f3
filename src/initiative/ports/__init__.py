"""Port interfaces for the initiative store.

Ports define the contracts that adapters must implement. The
migration driver and the accessors depend only on these
abstractions, not on the SQLite engine.
"""

from initiative.ports.storage import StorageEnginePort

__all__ = ["StorageEnginePort"]
