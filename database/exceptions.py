class DatabaseError(Exception):
    """Base for storage-layer errors (both backends raise these)."""


class NotFoundError(DatabaseError):
    """Game, roster entry or hole does not exist."""


class DuplicateError(DatabaseError):
    """Unique key already taken: game code, roster entry, or a game's results."""


class IntegrityError(DatabaseError):
    """Row references a game that does not exist."""
