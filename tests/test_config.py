import pytest

from hero_credito.config import AppSettings, load_settings


def test_load_settings_defaults(monkeypatch) -> None:
    monkeypatch.delenv("PROJECT_NAME", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.delenv("ANNUAL_INTEREST_RATE", raising=False)

    settings = load_settings()

    assert settings.PROJECT_NAME == "hero_credito"
    assert settings.LOG_LEVEL == "INFO"
    assert settings.ANNUAL_INTEREST_RATE == 0.095
    assert settings.AFFORDABILITY_RATIO == 0.30
    assert settings.TERM_SEARCH_MIN_YEARS == 10
    assert settings.TERM_SEARCH_MAX_YEARS == 35


def test_load_settings_env_override(monkeypatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("ANNUAL_INTEREST_RATE", "0.11")
    monkeypatch.setenv("TERM_SEARCH_MAX_YEARS", "30")

    settings = load_settings()

    assert settings.LOG_LEVEL == "DEBUG"
    assert settings.ANNUAL_INTEREST_RATE == 0.11
    assert settings.TERM_SEARCH_MAX_YEARS == 30


def test_interest_rate_must_be_a_fraction() -> None:
    with pytest.raises(ValueError):
        AppSettings(ANNUAL_INTEREST_RATE=9.5)

    with pytest.raises(ValueError):
        AppSettings(ANNUAL_INTEREST_RATE=0)


def test_affordability_ratio_bounds() -> None:
    with pytest.raises(ValueError):
        AppSettings(AFFORDABILITY_RATIO=0)

    with pytest.raises(ValueError):
        AppSettings(AFFORDABILITY_RATIO=1.5)


def test_term_search_range_must_be_ordered() -> None:
    with pytest.raises(ValueError):
        AppSettings(TERM_SEARCH_MIN_YEARS=20, TERM_SEARCH_MAX_YEARS=15)


def test_whatsapp_secrets_hidden_from_repr() -> None:
    settings = AppSettings(WHATSAPP_EVOLUTION_API_KEY="token-secreto")

    assert "token-secreto" not in repr(settings)


def test_accepted_term_and_history_limit_must_be_positive() -> None:
    assert AppSettings().MAX_ACCEPTED_TERM_YEARS == 50
    assert AppSettings().WHATSAPP_HISTORY_LIMIT == 50

    with pytest.raises(ValueError):
        AppSettings(MAX_ACCEPTED_TERM_YEARS=0)

    with pytest.raises(ValueError):
        AppSettings(WHATSAPP_HISTORY_LIMIT=0)
