from typing import Optional

from ..settings import Settings


class TestingSettings(Settings):
    debug: bool = True
    database_url: str = "duckdb:///:memory:"
    jwt_secret_key: str = "test-secret-key-for-brewpos-suite"
    bootstrap_admin_email: Optional[str] = "admin@example.com"
    api_title: str = "BrewPOS API (Test)"
    api_version: str = "1.0.0-test"
    gemini_api_key: Optional[str] = "test-gemini-key"
