# app/config/settings.py
import os
from urllib.parse import quote_plus
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator


class Settings(BaseSettings):
    # 🔵 Banco principal (PostgreSQL)
    db_host: str = "localhost"
    db_port: int = 5432
    db_name: str = "locacao"
    db_user: str = "postgres"
    db_password: str = "postgres"
    db_ssl: bool = False

    # URL completa (ex.: sqlite:///./dev.db) - tem prioridade sobre db_*
    db_url: str | None = None
    db_create_all: bool = False

    environment: str = "development"
    debug: bool = True
    log_level: str = "INFO"

    app_prefix: str = os.getenv("APP_PREFIX", "/apps/locacao")
    cors_origins_raw: str = os.getenv(
        "CORS_ORIGINS", "http://localhost:5173,http://127.0.0.1:5173"
    )

    files_base_path: str = os.getenv("FILES_BASE_PATH", "./_uploads")
    files_public_base_url: str = os.getenv(
        "FILES_PUBLIC_BASE_URL",
        "https://dianealmeida-modelos.s3.us-east-2.amazonaws.com",
    )
    max_file_size_mb: int = int(os.getenv("MAX_FILE_SIZE_MB", "10"))

    # ✅ Whitelist de imagens aceitas no upload de produto
    allowed_image_mime_types_raw: str = os.getenv(
        "ALLOWED_IMAGE_MIME_TYPES",
        ",".join(
            [
                "image/png",
                "image/jpeg",
                "image/jpg",
                "image/webp",
                "image/gif",
            ]
        ),
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("db_host", "db_name", "db_user", "db_password", mode="before")
    @classmethod
    def strip_strings(cls, v):
        if isinstance(v, str):
            return v.strip().strip('"').strip("'")
        return v

    @property
    def database_url(self) -> str:
        if self.db_url:
            return self.db_url

        user = quote_plus(self.db_user)
        password = quote_plus(self.db_password)
        host = self.db_host
        port = self.db_port
        db = self.db_name

        url = f"postgresql+psycopg2://{user}:{password}@{host}:{port}/{db}"
        if self.db_ssl:
            url += "?sslmode=require"
        return url

    @property
    def cors_origins(self) -> list[str]:
        parts = [p.strip() for p in (self.cors_origins_raw or "").split(",")]
        return [p for p in parts if p]

    @property
    def allowed_image_mime_types(self) -> set[str]:
        raw = (self.allowed_image_mime_types_raw or "").strip()
        if not raw:
            return set()
        parts = [p.strip() for p in raw.split(",")]
        return {p for p in parts if p}


settings = Settings()
