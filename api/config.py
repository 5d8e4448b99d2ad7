import os
from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Service configuration read from the environment (and a local .env)."""

    # Unset -> in-memory storage (no persistence across restarts)
    DATABASE_URL = os.getenv('DATABASE_URL')
    DB_POOL_MIN_SIZE = int(os.getenv('DB_POOL_MIN_SIZE', 2))
    DB_POOL_MAX_SIZE = int(os.getenv('DB_POOL_MAX_SIZE', 10))

    CORS_ORIGINS = os.getenv('CORS_ORIGINS', 'http://localhost:5173')
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()

    @classmethod
    def get_cors_origins(cls):
        """Comma-separated CORS_ORIGINS as a list."""
        return [origin.strip() for origin in cls.CORS_ORIGINS.split(',') if origin.strip()]

    @classmethod
    def use_database(cls) -> bool:
        return bool(cls.DATABASE_URL)
