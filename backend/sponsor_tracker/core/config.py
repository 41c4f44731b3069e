# sponsor_tracker/core/config.py
import os
from urllib.parse import quote_plus

from dotenv import load_dotenv


def str_to_bool(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def parse_csv(value: str | None) -> list[str]:
    if not value:
        return []
    return [v.strip() for v in value.split(",") if v.strip()]


def merge_unique(items: list[str]) -> list[str]:
    seen: set[str] = set()
    out: list[str] = []
    for v in items:
        if v in seen:
            continue
        seen.add(v)
        out.append(v)
    return out


class Settings:
    def __init__(self) -> None:
        self.ENV = os.getenv("ENV", "dev").strip().lower()  # dev | prod
        if self.ENV != "prod":
            # Prod takes its env from the service config, never from a local file.
            load_dotenv()

        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").strip().upper()

        # ----------------------------
        # Database
        # ----------------------------
        self.DATABASE_URL = os.getenv("DATABASE_URL", "").strip()
        self.DB_HOST = os.getenv("DB_HOST", "")
        self.DB_PORT = os.getenv("DB_PORT", "5432")
        self.DB_NAME = os.getenv("DB_NAME", "")
        self.DB_USER = os.getenv("DB_USER", "")
        self.DB_PASSWORD = os.getenv("DB_PASSWORD", "")
        self.DB_SSLMODE = os.getenv("DB_SSLMODE", "prefer").strip().lower()
        # No migration history; tables come straight from the model metadata.
        self.DB_CREATE_TABLES = str_to_bool(os.getenv("DB_CREATE_TABLES"), default=True)

        # ----------------------------
        # CORS
        # ----------------------------
        dev_defaults = [
            "http://localhost:5173",
            "http://127.0.0.1:5173",
        ]
        cors_from_env = parse_csv(os.getenv("CORS_ORIGINS"))
        frontend_url = os.getenv("FRONTEND_URL", "").strip().rstrip("/")
        if frontend_url:
            cors_from_env.append(frontend_url)

        if self.ENV == "prod":
            self.CORS_ORIGINS = merge_unique(cors_from_env)
        else:
            self.CORS_ORIGINS = merge_unique(cors_from_env + dev_defaults)

        # ----------------------------
        # Auth / JWT
        # ----------------------------
        self.JWT_SECRET = os.getenv("JWT_SECRET", "")
        self.JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
        self.ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "1440"))

        # ----------------------------
        # Sponsor directory
        # ----------------------------
        self.COMPANIES_MAX_PAGE_SIZE = int(os.getenv("COMPANIES_MAX_PAGE_SIZE", "200"))
        self.MAP_MAX_POINTS = int(os.getenv("MAP_MAX_POINTS", "5000"))
        self.IMPORT_BATCH_SIZE = int(os.getenv("IMPORT_BATCH_SIZE", "500"))

        self._validate_prod()

    def _validate_prod(self) -> None:
        if self.ENV != "prod":
            return

        missing: list[str] = []

        if not self.JWT_SECRET:
            missing.append("JWT_SECRET")
        if not self.DATABASE_URL:
            if not self.DB_HOST:
                missing.append("DB_HOST")
            if not self.DB_NAME:
                missing.append("DB_NAME")
            if not self.DB_USER:
                missing.append("DB_USER")
            if not self.DB_PASSWORD:
                missing.append("DB_PASSWORD")

        if not self.CORS_ORIGINS:
            missing.append("CORS_ORIGINS")

        cors_joined = ",".join(self.CORS_ORIGINS)
        if "localhost" in cors_joined or "127.0.0.1" in cors_joined:
            raise RuntimeError("CORS_ORIGINS contains localhost/dev origins in prod")

        if missing:
            raise RuntimeError(f"Missing required prod env vars: {', '.join(missing)}")

    @property
    def is_prod(self) -> bool:
        return self.ENV == "prod"

    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        encoded_password = quote_plus(self.DB_PASSWORD)
        return (
            f"postgresql+psycopg2://{self.DB_USER}:{encoded_password}"
            f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
            f"?sslmode={self.DB_SSLMODE}"
        )


settings = Settings()


def require_jwt_secret() -> None:
    if not settings.JWT_SECRET:
        raise RuntimeError("JWT_SECRET must be set")
