class ScoringError(Exception):
    """Base for game scoring and lifecycle errors."""


class InvalidStateError(ScoringError):
    """Operation not allowed in the game's current status."""


class AlreadyFinalizedError(ScoringError):
    """Results for the game have already been recorded."""


class NotAuthorizedError(ScoringError):
    """Caller is not allowed to perform a host-only action."""


class GameFullError(ScoringError):
    """Roster already holds max_players."""


class InvalidGameSettingsError(ScoringError):
    """Requested hole count or roster size is not playable."""
