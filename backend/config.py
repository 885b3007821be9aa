"""
Application configuration.

Values are read from the environment (and a local .env file) once at process
start and handed to the components that need them.
"""

import os
from dataclasses import dataclass, field
from typing import Optional, Tuple
from urllib.parse import quote

from dotenv import load_dotenv


@dataclass(frozen=True)
class Config:
    """
    Runtime settings for the API.

    Attributes:
        jwt_secret (str): HMAC secret used to sign session tokens.
        database_url (str, optional): Full PostgreSQL DSN. Built from the
            individual DB_* fields when not given.
        token_expiration_minutes (int): Session token lifetime (24h default).
        query_timeout_seconds (int): Upper bound for any single store call.
    """

    jwt_secret: str
    db_host: str = "localhost"
    db_port: int = 5432
    db_user: str = "postgres"
    db_password: str = ""
    db_name: str = "events"
    database_url: Optional[str] = None
    port: int = 8080
    token_expiration_minutes: int = 1440
    query_timeout_seconds: int = 3
    log_level: str = "INFO"
    cors_origins: Tuple[str, ...] = field(default=("*",))

    @property
    def dsn(self) -> str:
        """
        Connection string passed to psycopg2.
        """
        if self.database_url:
            return self.database_url
        return (
            f"postgresql://{quote(self.db_user, safe='')}:{quote(self.db_password, safe='')}"
            f"@{self.db_host}:{self.db_port}/{quote(self.db_name, safe='')}"
        )

    @classmethod
    def from_env(cls) -> "Config":
        """
        Build a Config from environment variables.

        Returns:
            Config: The loaded settings.

        Raises:
            RuntimeError: If JWT_SECRET is missing.
        """
        load_dotenv()

        jwt_secret = os.getenv("JWT_SECRET")
        if not jwt_secret:
            raise RuntimeError("JWT_SECRET is missing. Set it in .env")

        origins = tuple(
            o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()
        )

        return cls(
            jwt_secret=jwt_secret,
            db_host=os.getenv("DB_HOST", "localhost"),
            db_port=int(os.getenv("DB_PORT", 5432)),
            db_user=os.getenv("DB_USER", "postgres"),
            db_password=os.getenv("DB_PASSWORD", ""),
            db_name=os.getenv("DB_NAME", "events"),
            database_url=os.getenv("DATABASE_URL") or None,
            port=int(os.getenv("PORT", 8080)),
            token_expiration_minutes=int(os.getenv("TOKEN_EXPIRATION_MINUTES", 1440)),
            query_timeout_seconds=int(os.getenv("QUERY_TIMEOUT_SECONDS", 3)),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            cors_origins=origins or ("*",),
        )
