from starterkit.settings import get_settings


def test_defaults(monkeypatch):
    for name in ["DATABASE_URL", "API_URL", "CORS_ALLOW_ORIGINS", "ENABLE_TOKEN_AUTH", "API_TOKEN", "LOG_LEVEL"]:
        monkeypatch.delenv(name, raising=False)
    s = get_settings()
    assert s.database_url == "sqlite:///./data/todos.db"
    assert s.api_url == "http://localhost:8787"
    assert s.cors_allow_origins == ["http://localhost:5173", "http://localhost:3000"]
    assert s.enable_token_auth is False
    assert s.api_token is None
    assert s.log_level == "INFO"


def test_overrides(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "postgresql://user:pw@db/app")
    monkeypatch.setenv("CORS_ALLOW_ORIGINS", "*")
    monkeypatch.setenv("ENABLE_TOKEN_AUTH", "yes")
    monkeypatch.setenv("API_TOKEN", "t0ken")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    s = get_settings()
    assert s.database_url == "postgresql://user:pw@db/app"
    assert s.cors_allow_origins == ["*"]
    assert s.enable_token_auth is True
    assert s.api_token == "t0ken"
    assert s.log_level == "DEBUG"


def test_token_ignored_when_auth_disabled(monkeypatch):
    monkeypatch.setenv("ENABLE_TOKEN_AUTH", "nonsense")
    monkeypatch.setenv("API_TOKEN", "t0ken")
    s = get_settings()
    assert s.enable_token_auth is False
    assert s.api_token is None
