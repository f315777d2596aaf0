from pydantic_settings import BaseSettings
from typing import Optional

class Settings(BaseSettings):
    # Database
    database_url: str = "duckdb://./lunchbox/data/lunchbox.duckdb"

    # JWT
    jwt_secret_key: str = "your-secret-key"
    jwt_algorithm: str = "HS256"
    jwt_expire_hours: int = 24 * 7  # 7 days

    # API
    api_title: str = "Lunchbox API"
    api_version: str = "1.0.0"
    api_prefix: str = "/api/v1"

    # Logging
    log_level: str = "INFO"
    log_json: bool = False
    log_file: Optional[str] = None

    # Accounts whose username is listed here are created as admins on registration
    admin_usernames: str = ""

    debug: bool = False

    class Config:
        env_file = ".env"
        env_prefix = "LUNCHBOX_"
        case_sensitive = False

    @property
    def admin_username_set(self) -> set:
        return {u.strip() for u in self.admin_usernames.split(",") if u.strip()}

# Global settings instance
settings = Settings()
