"""Settings loading from environment variables."""

from app.core.config import Settings


def test_defaults(monkeypatch):
    for name in ("MONGO_URI", "MONGO_DB", "SEARCH_DEFAULT_LIMIT", "SEARCH_MAX_LIMIT", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)

    s = Settings(_env_file=None)

    assert s.MONGO_URI == "mongodb://localhost:27017"
    assert s.MONGO_DB == "recipes"
    assert s.SEARCH_DEFAULT_LIMIT == 10
    assert s.SEARCH_MAX_LIMIT == 100
    assert s.LOG_LEVEL == "INFO"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("MONGO_URI", "mongodb://db:27017")
    monkeypatch.setenv("MONGO_DB", "staging")
    monkeypatch.setenv("DB_CONNECT_RETRIES", "3")
    monkeypatch.setenv("CORS_ORIGINS", '["https://recipes.example.com"]')

    s = Settings(_env_file=None)

    assert s.MONGO_URI == "mongodb://db:27017"
    assert s.MONGO_DB == "staging"
    assert s.DB_CONNECT_RETRIES == 3
    assert s.CORS_ORIGINS == ["https://recipes.example.com"]
