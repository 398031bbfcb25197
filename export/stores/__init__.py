from export.stores.memory_store import MemoryStore, MemorySnapshot
from export.stores.sqlalchemy_store import SQLAlchemyStore, SQLAlchemySnapshot, map_sql_type

__all__ = [
    "MemoryStore",
    "MemorySnapshot",
    "SQLAlchemyStore",
    "SQLAlchemySnapshot",
    "map_sql_type",
]
