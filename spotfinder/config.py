"""Configuration du service de recherche de spots."""
from typing import Optional
from urllib.parse import quote
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Configuration de l'application."""

    # ➡️ PostgreSQL / PostGIS
    DB_HOST: str = "localhost"
    DB_PORT: int = 5432
    DB_USER: str = "postgres"
    DB_PASSWORD: str = ""
    DB_NAME: str = "Spots"
    DB_SSLMODE: str = "disable"
    # Si défini, remplace les paramètres DB_* ci-dessus
    DATABASE_URL: Optional[str] = None

    # Table contenant les spots (schema.table)
    SPOTS_TABLE: str = "public.MY_TABLE"

    # Pool de connexions
    DB_POOL_MIN_SIZE: int = 1
    DB_POOL_MAX_SIZE: int = 10
    QUERY_TIMEOUT_SECONDS: float = 10.0

    # Classement : écart de distance (mètres) en dessous duquel la note départage
    RANK_DISTANCE_BAND: float = 50.0

    # Contrôle des bornes lat/lon/rayon (désactivé par défaut)
    STRICT_BOUNDS: bool = False

    # Serveur HTTP
    HOST: str = "0.0.0.0"
    PORT: int = 8080

    # Logs
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"

    @property
    def dsn(self) -> str:
        """DSN PostgreSQL construit à partir des paramètres DB_*."""
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"postgresql://{quote(self.DB_USER, safe='')}:{quote(self.DB_PASSWORD, safe='')}"
            f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}?sslmode={self.DB_SSLMODE}"
        )


settings = Settings()
