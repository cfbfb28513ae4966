"""
Application Configuration
"""
from typing import Optional
from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings"""

    # Application
    app_name: str = "Grant Portal"
    app_version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"

    # Authentication
    secret_key: str
    access_token_expire_minutes: int = 60
    algorithm: str = "HS256"

    # Database
    database_url: str = "sqlite:///./data/app.db"

    # Document verification
    document_verifier_backend: str = "coverage"  # coverage | llm
    unverifiable_document_score: int = 70  # score for document types without required fields

    # LLM API (only used by the llm document verifier backend)
    llm_api_base_url: Optional[str] = None
    llm_api_key: Optional[str] = None
    llm_model_name: str = "gpt-4o-mini"
    llm_calls_per_minute: int = 20
    llm_max_document_chars: int = 12000

    # Scheduler
    scheduler_enabled: bool = True

    # Seed data
    default_admin_username: str = "admin"
    default_admin_password: str = "admin123!"
    default_admin_email: str = "admin@grantportal.ba"
    seed_demo_data: bool = False

    class Config:
        env_file = ".env"
        case_sensitive = False


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


settings = get_settings()
