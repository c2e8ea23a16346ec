"""
Tests for database connection options (per-call deadline)
"""
from subtracker.config import Settings
from subtracker.infrastructure.db.session import _connect_args


def test_postgres_gets_connect_and_statement_timeout():
    settings = Settings(
        DATABASE_URL="postgresql://user:pass@db:5432/subscriptions",
        DB_CONNECT_TIMEOUT=3,
        DB_STATEMENT_TIMEOUT_MS=1500,
    )

    assert _connect_args(settings) == {
        "connect_timeout": 3,
        "options": "-c statement_timeout=1500",
    }


def test_url_assembled_from_parts_is_postgres():
    settings = Settings(DATABASE_URL="", DB_HOST="pg", DB_STATEMENT_TIMEOUT_MS=5000)

    assert settings.get_sqlalchemy_url().startswith("postgresql+psycopg://")
    assert _connect_args(settings)["options"] == "-c statement_timeout=5000"


def test_zero_statement_timeout_disables_deadline():
    settings = Settings(
        DATABASE_URL="postgresql+psycopg://user:pass@db/subscriptions",
        DB_CONNECT_TIMEOUT=5,
        DB_STATEMENT_TIMEOUT_MS=0,
    )

    assert _connect_args(settings) == {"connect_timeout": 5}


def test_non_postgres_url_has_no_connect_args():
    settings = Settings(DATABASE_URL="sqlite+pysqlite:///:memory:")

    assert _connect_args(settings) == {}
