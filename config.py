"""
DocCompare - Multi-document JSON comparison
"""
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    # Application Info
    APP_NAME: str = "DocCompare"
    APP_VERSION: str = "1.2.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "WARNING"  # Ignored when DEBUG is set (always INFO)

    # Comparison defaults
    DEFAULT_MODE: str = "line"  # "line", "character" or "semantic"
    TIMESTAMP_FIELD: str = "_ts"  # Epoch seconds used for age ranking
    CHAR_DIFF_TIMEOUT: float = 0.0  # diff-match-patch budget per line in seconds, 0 = unlimited

    # Limits
    MAX_DOCUMENTS: int = 50
    MAX_REQUEST_SIZE: int = 10 * 1024 * 1024  # 10MB

    # Memoization of computed views (entries, 0 disables)
    COMPARE_CACHE_SIZE: int = 128

    # File Watching
    WATCH_DEBOUNCE_SECONDS: float = 0.5  # Wait for writers to finish before reloading

    # CORS - comma-separated list of allowed origins, or "*" for all
    CORS_ORIGINS: str = "*"

    # Allowed hosts for Host header validation (comma-separated, or "*" to disable)
    ALLOWED_HOSTS: str = "*"

    @property
    def log_level(self) -> str:
        return "INFO" if self.DEBUG else self.LOG_LEVEL.upper()

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
