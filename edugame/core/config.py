import os
from dataclasses import dataclass

from dotenv import load_dotenv


DEFAULT_JWT_SECRET_KEY = "change-me"
DEFAULT_FACULTY_PASSWORD = "change-me-faculty"


def _get_bool(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _get_list(value: str | None, default: str) -> tuple[str, ...]:
    raw = value if value is not None else default
    return tuple(item.strip() for item in raw.split(",") if item.strip())


@dataclass(frozen=True)
class Settings:
    app_env: str = "development"
    database_url: str = "sqlite:///./edugame.db"

    jwt_secret_key: str = DEFAULT_JWT_SECRET_KEY
    jwt_algorithm: str = "HS256"
    jwt_expires_minutes: int = 60

    faculty_email: str = "faculty@edugame.local"
    faculty_password: str = DEFAULT_FACULTY_PASSWORD

    cookie_name: str = "token"
    cookie_domain: str | None = None
    cors_origins: tuple[str, ...] = (
        "http://localhost:3000",
        "http://localhost:3001",
        "http://localhost:5173",
    )
    log_level: str = "INFO"

    @property
    def is_production(self) -> bool:
        return self.app_env.strip().lower() == "production"

    @property
    def cookie_samesite(self) -> str:
        return "none" if self.is_production else "lax"

    @property
    def cookie_secure(self) -> bool:
        return self.is_production

    @classmethod
    def from_env(cls) -> "Settings":
        load_dotenv()
        return cls(
            app_env=os.getenv("APP_ENV", "development"),
            database_url=os.getenv("DATABASE_URL", "sqlite:///./edugame.db"),
            jwt_secret_key=os.getenv("JWT_SECRET_KEY", DEFAULT_JWT_SECRET_KEY),
            jwt_algorithm=os.getenv("JWT_ALGORITHM", "HS256"),
            jwt_expires_minutes=int(os.getenv("JWT_EXPIRES_MINUTES", "60")),
            faculty_email=os.getenv("FACULTY_EMAIL", "faculty@edugame.local"),
            faculty_password=os.getenv("FACULTY_PASSWORD", DEFAULT_FACULTY_PASSWORD),
            cookie_name=os.getenv("SESSION_COOKIE_NAME", "token"),
            cookie_domain=os.getenv("SESSION_COOKIE_DOMAIN") or None,
            cors_origins=_get_list(
                os.getenv("CORS_ORIGINS"),
                "http://localhost:3000,http://localhost:3001,http://localhost:5173",
            ),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )


def cookie_domain_for(settings: Settings) -> str | None:
    # Cross-site cookies are scoped to a shared parent domain only in production.
    return settings.cookie_domain if settings.is_production else None


def validate_runtime_config(settings: Settings) -> None:
    if not settings.is_production:
        return
    if settings.jwt_secret_key == DEFAULT_JWT_SECRET_KEY:
        raise RuntimeError("JWT_SECRET_KEY must be set in production.")
    if settings.faculty_password == DEFAULT_FACULTY_PASSWORD:
        raise RuntimeError("FACULTY_PASSWORD must be set in production.")
