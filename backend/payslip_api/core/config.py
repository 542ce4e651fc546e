import os
from functools import lru_cache
from pathlib import Path

from pydantic import AnyHttpUrl, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL

BASE_DIR = Path(__file__).resolve().parent.parent.parent


class Settings(BaseSettings):
    env: str = Field(default="dev", description="Deployment environment")
    app_name: str = "Payslip API"
    host: str = "0.0.0.0"
    port: int = 3979

    database_url: str | None = Field(
        default=None,
        description="Database connection string; assembled from the db_* fields when unset",
    )
    db_user: str = "postgres"
    db_password: str = "postgres"
    db_host: str = "localhost"
    db_port: int = 5432
    db_name: str = "new_employee_db"
    db_pool_size: int = 5
    db_max_overflow: int = 10
    db_pool_timeout: float = Field(default=30, description="Seconds to wait for a pooled connection")
    reset_schema_on_startup: bool = False

    cors_origins: list[AnyHttpUrl] = []
    log_level: str = "INFO"
    sentry_dsn: str | None = Field(default=None, description="Sentry DSN for error monitoring")
    otlp_endpoint: str | None = Field(default=None, description="OTLP endpoint for traces/metrics")

    payslip_id_prefix: str = "PSL"
    payslip_id_attempts: int = Field(default=3, ge=1)
    designations: list[str] = [
        "Software Engineer",
        "Senior Software Engineer",
        "Project Manager",
        "HR Manager",
    ]
    office_locations: list[str] = ["Hyderabad", "Bangalore", "Pune"]
    employment_types: list[str] = ["Permanent", "Contract", "Temporary"]

    model_config = SettingsConfigDict(env_prefix="PAYSLIP_", extra="ignore")

    @field_validator("cors_origins", mode="before")
    @classmethod
    def split_origins(cls, value: str | list[AnyHttpUrl]) -> list[AnyHttpUrl]:
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value

    @property
    def sqlalchemy_database_url(self) -> str | URL:
        if self.database_url:
            return self.database_url
        return URL.create(
            "postgresql",
            username=self.db_user,
            password=self.db_password,
            host=self.db_host,
            port=self.db_port,
            database=self.db_name,
        )


@lru_cache
def get_settings() -> Settings:
    return Settings(_env_file=get_settings_env_file())


def get_settings_env_file() -> str | None:
    """Resolve environment-specific env file if it exists."""
    env = os.getenv("PAYSLIP_ENV", "dev")
    env_file = BASE_DIR / f".env.{env}"
    default_file = BASE_DIR / ".env"
    if env_file.exists():
        return str(env_file)
    if default_file.exists():
        return str(default_file)
    return None


settings = get_settings()
