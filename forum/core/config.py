from typing import List, Optional

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Application Information
    app_name: str = Field(default="Forum Service")
    app_description: str = Field(default="Forum posts and moderation")
    app_version: str = Field(default="1.0.0")
    debug: bool = Field(default=True)
    production: bool = Field(default=False)

    # Database Configuration
    # database_url wins over the individual db_* fields when set
    database_url: Optional[str] = Field(default=None)
    db_host: str = Field(default="127.0.0.1")
    db_port: int = Field(default=5432)
    db_database: str = Field(default="forum")
    db_username: str = Field(default="forum")
    db_password: str = Field(default="forum")
    db_timezone: str = Field(default="UTC")

    # Security Settings
    cors_allowed_origins: List[str] = Field(default=["http://localhost:3000"])

    # Rate Limiting
    rate_limit_storage_uri: str = Field(default="memory://")
    default_rate_limit: str = Field(default="100/minute")
    report_rate_limit: str = Field(default="20/minute")

    # Logging
    log_level: str = Field(default="info")
    log_file: str = Field(default="logs/app.log")

    # Pagination
    default_page_size: int = Field(default=10)
    max_page_size: int = Field(default=100)

    # Moderation Policy
    report_auto_hide_threshold: int = Field(default=5, ge=1)

    # Admin Defaults
    admin_default_name: str = Field(default="Forum Admin")
    admin_default_email: str = Field(default="admin@example.com")

    @property
    def sqlalchemy_database_url(self) -> str:
        if self.database_url:
            return self.database_url
        return "postgresql+psycopg2://{user}:{password}@{host}:{port}/{database}".format(
            user=self.db_username,
            password=self.db_password,
            host=self.db_host,
            port=self.db_port,
            database=self.db_database,
        )

    # ============================
    # Generic comma-separated parser
    # ============================
    @staticmethod
    def _parse_csv(value, default):
        if isinstance(value, str):
            items = [x.strip() for x in value.split(",") if x.strip()]
            return items if items else default
        if isinstance(value, list):
            return value
        return default

    @field_validator("cors_allowed_origins", mode="before")
    def validate_cors(cls, v):
        return cls._parse_csv(v, ["http://localhost:3000"])

    @field_validator("log_level", mode="before")
    def validate_log_level(cls, v):
        level = str(v).strip().lower()
        if level not in ("debug", "info", "warning", "error", "critical"):
            raise ValueError(f"Unknown log level: {v}")
        return level

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }


def load_settings():
    try:
        settings = Settings()
        print("✅ Settings loaded successfully!")
        return settings
    except ValidationError as e:
        print("❌ Validation Error:", e)
        raise


settings = load_settings()
