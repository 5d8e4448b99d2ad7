from database.connection import DatabasePool, db
from database.db_manager import DatabaseManager
from database.memory import InMemoryStorage
from database.repositories import GameRepositoryDB, ScoreRepositoryDB, ResultRepositoryDB
from database.exceptions import DatabaseError, NotFoundError, DuplicateError, IntegrityError
from database.stores import GameStore, ResultStore, ScoreStore, StorageBackend

__all__ = [
    "DatabasePool",
    "db",
    "DatabaseManager",
    "InMemoryStorage",
    "GameRepositoryDB",
    "ScoreRepositoryDB",
    "ResultRepositoryDB",
    "DatabaseError",
    "NotFoundError",
    "DuplicateError",
    "IntegrityError",
    "GameStore",
    "ResultStore",
    "ScoreStore",
    "StorageBackend",
]
