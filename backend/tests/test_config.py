import pytest

from backend.config import Config

ENV_VARS = [
    "JWT_SECRET", "DB_HOST", "DB_PORT", "DB_USER", "DB_PASSWORD", "DB_NAME",
    "DATABASE_URL", "PORT", "TOKEN_EXPIRATION_MINUTES", "QUERY_TIMEOUT_SECONDS",
    "LOG_LEVEL", "CORS_ORIGINS",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, mocker):
    # Keep a developer's .env out of these tests
    mocker.patch("backend.config.load_dotenv")
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_from_env_requires_secret():
    with pytest.raises(RuntimeError, match="JWT_SECRET"):
        Config.from_env()


def test_from_env_defaults(monkeypatch):
    monkeypatch.setenv("JWT_SECRET", "s3cret")

    config = Config.from_env()

    assert config.jwt_secret == "s3cret"
    assert config.port == 8080
    assert config.token_expiration_minutes == 1440
    assert config.query_timeout_seconds == 3
    assert config.cors_origins == ("*",)
    assert config.dsn == "postgresql://postgres:@localhost:5432/events"


def test_from_env_reads_database_fields(monkeypatch):
    monkeypatch.setenv("JWT_SECRET", "s3cret")
    monkeypatch.setenv("DB_HOST", "db")
    monkeypatch.setenv("DB_PORT", "6543")
    monkeypatch.setenv("DB_USER", "api")
    monkeypatch.setenv("DB_PASSWORD", "pw")
    monkeypatch.setenv("DB_NAME", "roster")
    monkeypatch.setenv("PORT", "9000")
    monkeypatch.setenv("CORS_ORIGINS", "http://localhost:5500, http://example.com")

    config = Config.from_env()

    assert config.dsn == "postgresql://api:pw@db:6543/roster"
    assert config.port == 9000
    assert config.cors_origins == ("http://localhost:5500", "http://example.com")


def test_database_url_wins(monkeypatch):
    monkeypatch.setenv("JWT_SECRET", "s3cret")
    monkeypatch.setenv("DB_HOST", "ignored")
    monkeypatch.setenv("DATABASE_URL", "postgresql://u:p@h:1/d")

    assert Config.from_env().dsn == "postgresql://u:p@h:1/d"


def test_dsn_escapes_credentials():
    from psycopg2.extensions import parse_dsn

    config = Config(jwt_secret="s", db_user="api:user", db_password="p@ss/word%1",
                    db_host="dbhost", db_name="events")

    parsed = parse_dsn(config.dsn)

    assert parsed["user"] == "api:user"
    assert parsed["password"] == "p@ss/word%1"
    assert parsed["host"] == "dbhost"
    assert parsed["port"] == "5432"
    assert parsed["dbname"] == "events"
