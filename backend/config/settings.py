from pydantic_settings import BaseSettings
from pydantic import Field, field_validator
from functools import lru_cache
from typing import List, Optional
import os


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Environment variables can come from:
    - docker-compose.yml environment section
    - .env file (for secrets like SECRET_KEY)
    - System environment

    Variable names match docker-compose conventions:
    - POSTGRES_HOST, POSTGRES_PORT, etc. (for database)
    - JWT_SECRET_KEY or SECRET_KEY (for owner sessions)
    """

    # Environment
    environment: str = "development"
    log_level: str = "INFO"

    # JWT - uses SECRET_KEY from .env or generates default
    jwt_secret_key: str = Field(default="dev-secret-key-change-in-production", validate_default=True)
    jwt_algorithm: str = "HS256"
    jwt_expire_minutes: int = 1440

    # PostgreSQL (from docker-compose)
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_user: str = "variants_user"
    postgres_password: str = "variants_pass"
    postgres_db: str = "element_variants"
    database_url: Optional[str] = Field(default=None, validate_default=True)
    db_pool_min_size: int = 2
    db_pool_max_size: int = 10
    auto_create_schema: bool = False

    # Embedding sites call the integration API cross-origin
    cors_origins: List[str] = ["*"]

    # Loader script cache lifetime (seconds)
    widget_cache_seconds: int = 3600

    class Config:
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"  # Ignore extra env vars

    @field_validator('jwt_secret_key', mode='before')
    @classmethod
    def get_jwt_secret(cls, v):
        """Use SECRET_KEY from env if JWT_SECRET_KEY not set"""
        if v and v != "dev-secret-key-change-in-production":
            return v
        return os.getenv('SECRET_KEY', v or 'dev-secret-key-change-in-production')

    @field_validator('database_url', mode='before')
    @classmethod
    def construct_database_url(cls, v, info):
        """Construct database URL from components if not explicitly set"""
        if v:
            return v

        data = info.data
        host = data.get('postgres_host', 'localhost')
        port = data.get('postgres_port', 5432)
        user = data.get('postgres_user', 'variants_user')
        password = data.get('postgres_password', 'variants_pass')
        db = data.get('postgres_db', 'element_variants')

        return f"postgresql://{user}:{password}@{host}:{port}/{db}"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
