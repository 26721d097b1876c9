from macrolog.config import Settings


def test_defaults():
    s = Settings(_env_file=None)
    assert s.API_PORT == 8090
    assert s.ACTIVITY_WINDOW_DAYS == 14
    assert s.cors_origins_list == ["*"]


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("CORS_ORIGINS", "http://localhost:5173, https://app.example.com")
    monkeypatch.setenv("activity_window_days", "21")
    s = Settings(_env_file=None)
    assert s.cors_origins_list == ["http://localhost:5173", "https://app.example.com"]
    assert s.ACTIVITY_WINDOW_DAYS == 21
