from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    # Database
    database_url: str = "duckdb://./data/brewpos.duckdb"

    # JWT
    jwt_secret_key: str = "change-me-in-production"
    jwt_algorithm: str = "HS256"
    jwt_expire_hours: int = 12

    # The one address allowed to sign up as admin; other admins are promoted
    bootstrap_admin_email: Optional[str] = None

    # Chat assistant (Gemini generateContent)
    gemini_api_key: Optional[str] = None
    gemini_model: str = "gemini-1.5-flash"
    gemini_api_base: str = "https://generativelanguage.googleapis.com/v1"
    chat_timeout_seconds: float = 15.0

    # Daily statistics increments applied per completed order
    stats_customers_per_order: int = 1
    stats_smiles_per_order: int = 0

    # API
    api_title: str = "BrewPOS API"
    api_version: str = "1.0.0"
    api_prefix: str = "/api/v1"
    currency_symbol: str = "₱"

    # Logging
    log_dir: Optional[str] = None
    log_level: str = "INFO"

    debug: bool = False

    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()
