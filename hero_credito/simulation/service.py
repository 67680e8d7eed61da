"""Orquestração do simulador: conversa -> dados -> cálculo -> mensagem."""

from __future__ import annotations

import logging
import math

from hero_credito.config import AppSettings
from hero_credito.simulation.calculator import (
    find_ideal_term,
    max_affordable_installment,
    price_installment,
    sac_installments,
)
from hero_credito.simulation.extractor import extract_facts
from hero_credito.simulation.messages import MISSING_DATA_PROMPT, render_simulation
from hero_credito.simulation.schemas import (
    AmortizationSystem,
    ParsedFacts,
    SimulationOutcome,
    SimulationResult,
)

logger = logging.getLogger(__name__)


def financed_amount_for(facts: ParsedFacts) -> float:
    amount = (
        (facts.property_value or 0.0)
        - (facts.down_payment or 0.0)
        - facts.fgts_contribution
    )
    return max(amount, 0.0)


class SimulationService:
    """Executa a simulação completa a partir da transcrição visível."""

    def __init__(self, settings: AppSettings) -> None:
        self.settings = settings

    def respond(self, transcript: str) -> str:
        return self.simulate(transcript).message

    def simulate(self, transcript: str) -> SimulationOutcome:
        facts = extract_facts(transcript)
        missing = facts.missing_fields()
        if missing:
            logger.info(
                "simulacao_dados_incompletos",
                extra={"missing_fields": missing},
            )
            return self._incomplete(facts, missing)

        financed_amount = financed_amount_for(facts)
        months = int(round((facts.term_years or 0.0) * 12))
        income = facts.monthly_income or 0.0
        max_months = self.settings.MAX_ACCEPTED_TERM_YEARS * 12
        if (
            financed_amount <= 0
            or months <= 0
            or months > max_months
            or income <= 0
        ):
            logger.warning(
                "simulacao_valores_invalidos",
                extra={
                    "financed_amount_positive": financed_amount > 0,
                    "months": months,
                    "income_positive": income > 0,
                },
            )
            return self._incomplete(facts, [])

        results = [
            self._simulate_system(system, financed_amount, months, income)
            for system in facts.requested_systems
        ]
        if not all(math.isfinite(result.first_installment) for result in results):
            logger.warning("simulacao_parcela_nao_finita", extra={"months": months})
            return self._incomplete(facts, [])
        message = render_simulation(
            facts,
            results,
            annual_rate=self.settings.ANNUAL_INTEREST_RATE,
            ratio=self.settings.AFFORDABILITY_RATIO,
        )
        logger.info(
            "simulacao_calculada",
            extra={
                "systems": [result.system.value for result in results],
                "months": months,
                "term_adjusted": [
                    result.term_adjustment is not None for result in results
                ],
            },
        )
        return SimulationOutcome(
            status="calculada",
            message=message,
            facts=facts,
            results=results,
        )

    def _incomplete(self, facts: ParsedFacts, missing: list[str]) -> SimulationOutcome:
        return SimulationOutcome(
            status="dados_incompletos",
            message=MISSING_DATA_PROMPT,
            facts=facts,
            missing_fields=missing,
        )

    def _simulate_system(
        self,
        system: AmortizationSystem,
        financed_amount: float,
        months: int,
        income: float,
    ) -> SimulationResult:
        annual_rate = self.settings.ANNUAL_INTEREST_RATE
        ratio = self.settings.AFFORDABILITY_RATIO

        if system is AmortizationSystem.SAC:
            first, last = sac_installments(financed_amount, annual_rate, months)
        else:
            first = last = price_installment(financed_amount, annual_rate, months)

        exceeds_ceiling = first > max_affordable_installment(income, ratio)
        adjustment = None
        if exceeds_ceiling:
            adjustment = find_ideal_term(
                financed_amount,
                income,
                annual_rate,
                system,
                min_years=self.settings.TERM_SEARCH_MIN_YEARS,
                max_years=self.settings.TERM_SEARCH_MAX_YEARS,
                ratio=ratio,
            )

        return SimulationResult(
            system=system,
            financed_amount=financed_amount,
            months=months,
            first_installment=first,
            last_installment=last,
            income_commitment_percent=first / income * 100,
            exceeds_ceiling=exceeds_ceiling,
            term_adjustment=adjustment,
        )
