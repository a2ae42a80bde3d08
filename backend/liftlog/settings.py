from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    ENV: str = "local"
    LOG_LEVEL: str = "INFO"
    API_VERSION: str = "dev"
    ALLOW_ORIGINS: str = "*"

    # Storage: "memory" keeps state for the process lifetime, "sql" persists via SQLAlchemy
    STORE_BACKEND: str = "memory"
    DB_HOST: str = "db"
    DB_PORT: int = 5432
    DB_USER: str = "postgres"
    DB_PASSWORD: str = "postgres"
    DB_NAME: str = "liftlog"
    SQLALCHEMY_URL: str | None = None   # e.g. sqlite:///./liftlog.db, wins over DB_*

    # Inference service (Gemini)
    GEMINI_API_KEY: str | None = None
    GEMINI_MODEL: str = "gemini-2.5-flash-lite"
    INTERPRETER_TEMPERATURE: float = 0.0
    INTERPRETER_TIMEOUT_SECONDS: float = 15.0

    # Logging screen defaults
    DEFAULT_WORKOUT_NAME: str = "Evening Workout"
    SEED_SAMPLE_DATA: bool = False

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def DATABASE_URL(self) -> str:
        if self.SQLALCHEMY_URL:
            return self.SQLALCHEMY_URL
        return (
            f"postgresql+psycopg://{self.DB_USER}:{self.DB_PASSWORD}"
            f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
        )

    @property
    def allowed_origins(self) -> list[str]:
        return [o.strip() for o in self.ALLOW_ORIGINS.split(",") if o.strip()]

@lru_cache
def get_settings() -> Settings:
    return Settings()
