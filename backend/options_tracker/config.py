"""
Configuration Management
"""

from pydantic_settings import BaseSettings
from typing import Optional, List
from pathlib import Path


# Get project root directory (2 levels up from this file)
PROJECT_ROOT = Path(__file__).parent.parent.parent.resolve()


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Database
    database_url: str = f"sqlite+aiosqlite:///{PROJECT_ROOT}/data/options_trades.db"

    # Trade store backend: 'sqlite' (SQLAlchemy, any async URL) or 'supabase'
    trade_store: str = "sqlite"

    # Supabase (hosted PostgREST table)
    supabase_url: Optional[str] = None
    supabase_key: Optional[str] = None
    supabase_table: str = "options_trades"
    supabase_timeout: float = 10.0

    # Application
    app_name: str = "Options Tracker"
    app_version: str = "1.0.0"
    log_level: str = "INFO"
    log_dir: str = "logs"

    # Trade form: fields that must be filled in before a draft can be committed
    required_fields: str = "symbol,strike_price,premium"

    # CORS Origins (comma-separated string from env, converted to list)
    cors_origins: str = "http://localhost:3000,http://localhost:8000"

    @property
    def cors_origins_list(self) -> List[str]:
        """Convert CORS origins string to list"""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @property
    def required_fields_list(self) -> List[str]:
        """Convert required form fields string to list"""
        return [field.strip() for field in self.required_fields.split(",") if field.strip()]

    class Config:
        env_file = str(PROJECT_ROOT / ".env")
        env_file_encoding = "utf-8"
        case_sensitive = False


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    """Get application settings"""
    return settings
