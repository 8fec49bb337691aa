from .in_memory_store import InMemoryMemoryStore
from .memory_store import SqlAlchemyMemoryStore
from .sqlalchemy_db import SessionProvider, create_db_engine, get_db_url

__all__ = [
    "InMemoryMemoryStore",
    "SqlAlchemyMemoryStore",
    "SessionProvider",
    "create_db_engine",
    "get_db_url",
]
