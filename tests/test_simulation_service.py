import pytest

from hero_credito.config import AppSettings
from hero_credito.simulation.calculator import price_installment, sac_installments
from hero_credito.simulation.messages import (
    DISCLAIMER,
    MISSING_DATA_PROMPT,
    format_brl,
    format_percent,
    is_simulator_message,
)
from hero_credito.simulation.schemas import AmortizationSystem
from hero_credito.simulation.service import SimulationService

RATE = 0.095

BASE_TRANSCRIPT = """Valor do imóvel: 500 mil
Entrada: 100 mil
Renda: 8 mil
Prazo: 30 anos
"""


@pytest.fixture
def service() -> SimulationService:
    return SimulationService(settings=AppSettings())


def test_simulation_price_end_to_end(service: SimulationService) -> None:
    outcome = service.simulate(BASE_TRANSCRIPT)

    assert outcome.status == "calculada"
    assert len(outcome.results) == 1
    result = outcome.results[0]
    expected = price_installment(400000, RATE, 360)

    assert result.system is AmortizationSystem.PRICE
    assert result.financed_amount == 400000.0
    assert result.months == 360
    assert result.first_installment == pytest.approx(expected)
    assert result.last_installment == pytest.approx(expected)
    assert result.income_commitment_percent == pytest.approx(expected / 8000 * 100)
    assert result.exceeds_ceiling is True
    assert result.term_adjustment is None
    assert "Parcela fixa: " + format_brl(expected) in outcome.message
    assert "Mesmo com prazo máximo, a parcela ultrapassa 30%." in outcome.message
    assert outcome.message.endswith(DISCLAIMER)


def test_simulation_reports_term_adjustment(service: SimulationService) -> None:
    transcript = (
        "Valor do imóvel: 500 mil\nEntrada: 100 mil\nRenda: 12 mil\nPrazo: 15 anos\n"
    )

    outcome = service.simulate(transcript)
    result = outcome.results[0]

    assert result.exceeds_ceiling is True
    assert result.term_adjustment is not None
    assert 10 <= result.term_adjustment.years <= 35
    assert result.term_adjustment.installment <= 12000 * 0.30
    assert "📌 Ajuste Estratégico Automático:" in outcome.message
    assert f"o prazo ideal seria {result.term_adjustment.years} anos." in outcome.message


def test_simulation_within_ceiling_has_no_adjustment(service: SimulationService) -> None:
    transcript = (
        "Valor do imóvel: 300 mil\nEntrada: 100 mil\nRenda: 15 mil\nPrazo: 30 anos\n"
    )

    outcome = service.simulate(transcript)

    assert outcome.results[0].exceeds_ceiling is False
    assert outcome.results[0].term_adjustment is None
    assert "Ajuste Estratégico" not in outcome.message
    assert "Mesmo com prazo máximo" not in outcome.message


def test_simulation_handles_both_systems_in_mention_order(
    service: SimulationService,
) -> None:
    transcript = BASE_TRANSCRIPT + "FGTS: 40 mil\nSistema: SAC\nE na PRICE?\n"

    outcome = service.simulate(transcript)
    sac, price = outcome.results
    sac_expected = sac_installments(360000, RATE, 360)

    assert [sac.system, price.system] == [
        AmortizationSystem.SAC,
        AmortizationSystem.PRICE,
    ]
    assert sac.financed_amount == price.financed_amount == 360000.0
    assert sac.first_installment == pytest.approx(sac_expected.first)
    assert sac.last_installment == pytest.approx(sac_expected.last)
    assert outcome.message.index("📊 SAC") < outcome.message.index("📊 PRICE")
    assert outcome.message.count(DISCLAIMER) == 1
    assert "FGTS: R$ 40.000,00" in outcome.message
    assert "💰 Simulação estimada (SAC e PRICE)" in outcome.message


def test_incomplete_input_returns_canonical_prompt(service: SimulationService) -> None:
    transcript = "Valor do imóvel: 500 mil"

    first = service.simulate(transcript)
    second = service.simulate(transcript)

    assert first.status == "dados_incompletos"
    assert first.message == MISSING_DATA_PROMPT
    assert second.message == MISSING_DATA_PROMPT
    assert first.missing_fields == ["down_payment", "monthly_income", "term_years"]
    assert service.respond(transcript) == MISSING_DATA_PROMPT


def test_non_positive_financed_amount_returns_prompt(service: SimulationService) -> None:
    transcript = "Valor do imóvel: 100 mil\nEntrada: 150 mil\nRenda: 8 mil\nPrazo: 30 anos"

    outcome = service.simulate(transcript)

    assert outcome.status == "dados_incompletos"
    assert outcome.message == MISSING_DATA_PROMPT
    assert outcome.results == []


def test_zero_term_returns_prompt(service: SimulationService) -> None:
    transcript = "Valor do imóvel: 300 mil\nEntrada: 50 mil\nRenda: 8 mil\nPrazo: 0"

    assert service.respond(transcript) == MISSING_DATA_PROMPT


def test_settings_drive_rate_and_ceiling() -> None:
    service = SimulationService(
        settings=AppSettings(ANNUAL_INTEREST_RATE=0.12, AFFORDABILITY_RATIO=0.6)
    )

    outcome = service.simulate(BASE_TRANSCRIPT)
    result = outcome.results[0]

    assert result.first_installment == pytest.approx(price_installment(400000, 0.12, 360))
    assert result.exceeds_ceiling is False
    assert "Taxa de juros: 12% a.a." in outcome.message


def test_format_helpers_use_brazilian_convention() -> None:
    assert format_brl(400000) == "R$ 400.000,00"
    assert format_brl(1234.5) == "R$ 1.234,50"
    assert format_percent(42.04) == "42%"
    assert format_percent(37.56) == "37,6%"
    assert format_percent(9.5, 2) == "9,5%"


OVERSIZED_TERM_TRANSCRIPT = (
    "Valor do imóvel: 500 mil\n"
    "Entrada: 100 mil\n"
    "Renda: 8 mil\n"
    "Prazo de 30 anos, pagando uns 2 mil por mês"
)


def test_oversized_term_returns_prompt(service: SimulationService) -> None:
    outcome = service.simulate(OVERSIZED_TERM_TRANSCRIPT)

    assert outcome.facts.term_years == 30000.0
    assert outcome.status == "dados_incompletos"
    assert outcome.message == MISSING_DATA_PROMPT
    assert outcome.results == []


def test_non_finite_installment_returns_prompt() -> None:
    service = SimulationService(settings=AppSettings(MAX_ACCEPTED_TERM_YEARS=10**6))

    outcome = service.simulate(OVERSIZED_TERM_TRANSCRIPT)

    assert outcome.status == "dados_incompletos"
    assert outcome.message == MISSING_DATA_PROMPT


def test_term_at_accepted_limit_is_simulated(service: SimulationService) -> None:
    transcript = BASE_TRANSCRIPT.replace("Prazo: 30 anos", "Prazo: 50 anos")

    outcome = service.simulate(transcript)

    assert outcome.status == "calculada"
    assert outcome.results[0].months == 600


def test_simulator_messages_are_recognized(service: SimulationService) -> None:
    outcome = service.simulate(BASE_TRANSCRIPT)

    assert is_simulator_message(outcome.message)
    assert is_simulator_message(MISSING_DATA_PROMPT)
    assert not is_simulator_message("Renda: 8 mil")
