from pydantic_settings import BaseSettings
from typing import Optional

class Settings(BaseSettings):
    # Database
    DATABASE_URL: Optional[str] = None
    PGHOST: Optional[str] = None
    PGDATABASE: Optional[str] = None
    PGUSER: Optional[str] = None
    PGPASSWORD: Optional[str] = None
    PGSSLMODE: str = "require"
    SQLITE_FALLBACK_URL: str = "sqlite:///./angoni.db"

    # Mail relay
    SMTP_HOST: Optional[str] = None
    SMTP_PORT: int = 465
    SMTP_USER: Optional[str] = None
    SMTP_PASS: Optional[str] = None
    SMTP_USE_SSL: bool = True
    SMTP_TIMEOUT: float = 10.0
    MAIL_FROM: Optional[str] = None
    ADMIN_EMAIL: Optional[str] = None

    # Application
    PROJECT_NAME: str = "ANGONI Adventure API"
    VERSION: str = "1.0.0"
    ENVIRONMENT: str = "development"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"
    FRONTEND_URL: str = "https://angoniadventure.com"

    # Bookings
    BOOKING_REFERENCE_PREFIX: str = "ANG"
    BOOKING_REFERENCE_MAX_ATTEMPTS: int = 5

    # Create missing tables at startup
    DB_CREATE_TABLES: bool = False

    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        if self.PGHOST and self.PGDATABASE and self.PGUSER:
            return f"postgresql://{self.PGUSER}:{self.PGPASSWORD or ''}@{self.PGHOST}/{self.PGDATABASE}?sslmode={self.PGSSLMODE}"
        return self.SQLITE_FALLBACK_URL

    @property
    def mail_from(self) -> Optional[str]:
        return self.MAIL_FROM or self.SMTP_USER

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"

settings = Settings()
