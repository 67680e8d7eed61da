"""Schemas da camada de simulação de crédito."""

from __future__ import annotations

from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field


class AmortizationSystem(str, Enum):
    """Sistemas de amortização suportados."""

    SAC = "SAC"
    PRICE = "PRICE"


REQUIRED_FIELD_LABELS: dict[str, str] = {
    "property_value": "Valor do imóvel",
    "down_payment": "Entrada",
    "monthly_income": "Renda bruta mensal",
    "term_years": "Prazo (anos)",
}


class ParsedFacts(BaseModel):
    """Dados financeiros extraídos da conversa."""

    property_value: float | None = None
    down_payment: float | None = None
    fgts_contribution: float = 0.0
    monthly_income: float | None = None
    term_years: float | None = None
    requested_systems: list[AmortizationSystem] = Field(
        default_factory=lambda: [AmortizationSystem.PRICE],
        description="Sistemas citados, na ordem da primeira menção",
    )
    default_system: AmortizationSystem = AmortizationSystem.PRICE

    def missing_fields(self) -> list[str]:
        return [
            field_name
            for field_name in REQUIRED_FIELD_LABELS
            if getattr(self, field_name) is None
        ]

    @property
    def is_complete(self) -> bool:
        return not self.missing_fields()


class TermAdjustment(BaseModel):
    """Prazo sugerido para manter a parcela dentro do teto de renda."""

    years: int
    installment: float


class SimulationResult(BaseModel):
    """Resultado da simulação para um sistema de amortização."""

    system: AmortizationSystem
    financed_amount: float
    months: int
    first_installment: float
    last_installment: float
    income_commitment_percent: float
    exceeds_ceiling: bool = False
    term_adjustment: TermAdjustment | None = None


class SimulationOutcome(BaseModel):
    """Saída consolidada de uma execução do simulador."""

    status: Literal["dados_incompletos", "calculada"]
    message: str
    facts: ParsedFacts
    results: list[SimulationResult] = Field(default_factory=list)
    missing_fields: list[str] = Field(default_factory=list)


class SimulationRequest(BaseModel):
    """Entrada da API: transcrição visível da conversa."""

    transcript: str = Field(description="Mensagens da conversa, uma por linha")
