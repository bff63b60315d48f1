# gagyebu/core/config.py

from pathlib import Path
from pydantic_settings import BaseSettings, SettingsConfigDict

# Get the project root directory (where .env should be located)
BASE_DIR = Path(__file__).resolve().parent.parent.parent

class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(BASE_DIR / ".env"),
        env_file_encoding='utf-8',
        case_sensitive=True,
        extra="ignore"
    )

    # App Configuration
    APP_NAME: str = "Gagyebu API"
    DEBUG: bool = False
    VERSION: str = "0.1.0"

    # Database Configuration
    DATABASE_URL: str

    # JWT / Security Configuration
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 10080

    # CORS Configuration
    FRONTEND_URL: str = "http://localhost:3000"

    # Query cache (seconds)
    CACHE_TTL_SECONDS: float = 60.0

    # Used to decide "today" on the calendar
    TIMEZONE: str = "Asia/Seoul"

    # Optional: Environment
    ENVIRONMENT: str = "development"

    @property
    def is_supabase(self) -> bool:
        """Check if we're using a Supabase-hosted database"""
        return any(d in self.DATABASE_URL for d in [
            "supabase.co",
            "supabase.com",
            "pooler.supabase",
        ])

    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")

# Create a global settings instance
settings = Settings()
