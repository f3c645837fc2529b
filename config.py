from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="EARTHLINK_", env_file=".env", extra="ignore")

    database_path: str = "db.sqlite3"
    session_cookie_name: str = "earthlink_session"
    session_duration_days: int = 7
    cookie_secure: bool = False
    bcrypt_rounds: int = 10
    cors_origins: List[str] = ["http://localhost:3000"]
    log_level: str = "INFO"
    seed_demo_data: bool = False


settings = Settings()
