import json

import pytest
import structlog

from champ_amm.core.config import Settings
from champ_amm.core.log import configure_logging

ENV_KEYS = [
    "AMM_DEFAULT_LIQUIDITY",
    "AMM_SEARCH_BRACKET_MULTIPLIER",
    "AMM_SEARCH_TOLERANCE",
    "AMM_SEARCH_MAX_ITERATIONS",
    "AMM_ALLOW_NEGATIVE_OUTSTANDING",
    "AMM_LOG_LEVEL",
    "AMM_LOG_FORMAT",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    # keep a stray .env in the working tree out of these tests
    monkeypatch.chdir(tmp_path)


def test_defaults(tmp_path):
    s = Settings.from_env(str(tmp_path / "missing.env"))
    assert s == Settings()
    assert s.search_bracket_multiplier == 100.0
    assert s.search_tolerance == 1e-4
    assert not s.allow_negative_outstanding


def test_env_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("AMM_DEFAULT_LIQUIDITY", "250")
    monkeypatch.setenv("AMM_SEARCH_MAX_ITERATIONS", "64")
    monkeypatch.setenv("AMM_ALLOW_NEGATIVE_OUTSTANDING", "true")
    monkeypatch.setenv("AMM_LOG_FORMAT", "JSON")
    s = Settings.from_env(str(tmp_path / "missing.env"))
    assert s.default_liquidity == 250.0
    assert s.search_max_iterations == 64
    assert s.allow_negative_outstanding
    assert s.log_format == "json"


def test_dotenv_file_is_loaded(tmp_path, monkeypatch):
    # register the key with monkeypatch so the value dotenv writes is undone
    monkeypatch.setenv("AMM_SEARCH_TOLERANCE", "unset")
    monkeypatch.delenv("AMM_SEARCH_TOLERANCE")
    env_file = tmp_path / ".env"
    env_file.write_text("AMM_SEARCH_TOLERANCE=0.001\n")
    s = Settings.from_env(str(env_file))
    assert s.search_tolerance == 0.001


def test_invalid_values(monkeypatch, tmp_path):
    monkeypatch.setenv("AMM_DEFAULT_LIQUIDITY", "lots")
    with pytest.raises(ValueError):
        Settings.from_env(str(tmp_path / "missing.env"))
    with pytest.raises(ValueError):
        Settings(log_format="xml")
    with pytest.raises(ValueError):
        Settings(default_liquidity=0.0)


def test_json_logging(capsys):
    configure_logging(Settings(log_format="json"))
    try:
        structlog.get_logger("test").info("trade_executed", pool_id="p", shares=1.5)
        line = capsys.readouterr().out.strip().splitlines()[-1]
        event = json.loads(line)
        assert event["event"] == "trade_executed"
        assert event["level"] == "info"
        assert event["shares"] == 1.5
    finally:
        structlog.reset_defaults()
