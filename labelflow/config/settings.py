from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"
    service_name: str = "label-api"

    api_host: str = "0.0.0.0"
    api_port: int = 8081

    default_country: str = "USA"
    max_batch_files: int = 20
    max_countries: int = 10
    max_upload_bytes: int = 10 * 1024 * 1024
    max_concurrency: int = 5
    request_timeout_seconds: float = 120.0
    batch_audit_always_completed: bool = False

    processing_backend: str = "http"
    processing_api_base_url: str = "http://localhost:8000"
    processing_timeout_seconds: float = 60.0
    circuit_failure_threshold: int = 5
    circuit_reset_timeout_seconds: float = 30.0

    validation_backend: str = "http"
    validation_api_base_url: str = "http://localhost:8001"
    validation_timeout_seconds: float = 60.0

    translation_openai_api_key: str = ""
    translation_openai_model_name: str = ""
    translation_openai_base_url: str | None = None
    translation_openai_timeout_seconds: int = 30
    translation_openai_temperature: float = 0.0

    audit_backend: str = "postgres"

    db_host: str = "host.docker.internal"
    db_port: int = 5432
    db_database: str = "labelai"
    db_username: str = "labelai"
    db_password: str = "secret"
    db_pool_max_size: int = 10
    db_pool_timeout_seconds: float = 5.0
