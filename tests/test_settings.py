import pytest

from storefront.settings import DEFAULT_ORIGINS, Settings, split_origins


@pytest.mark.parametrize("raw, expected", [
    (None, list(DEFAULT_ORIGINS)),
    ("   ", list(DEFAULT_ORIGINS)),
    ('["https://kicks.example"]', ["https://kicks.example"]),
    ("https://a.example, https://b.example,", ["https://a.example", "https://b.example"]),
    (["https://c.example"], ["https://c.example"]),
])
def test_split_origins(raw, expected):
    assert split_origins(raw) == expected


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("LOW_STOCK_THRESHOLD", "3")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    s = Settings(_env_file=None)
    assert s.low_stock_threshold == 3
    assert s.log_level == "DEBUG"
    assert s.currency == "ZAR"


def test_bad_log_level(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "chatty")
    with pytest.raises(ValueError):
        Settings(_env_file=None)
