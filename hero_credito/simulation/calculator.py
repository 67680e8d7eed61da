"""Fórmulas de financiamento: tabela PRICE, SAC e teto de comprometimento."""

from __future__ import annotations

import math
from typing import NamedTuple

from hero_credito.simulation.schemas import AmortizationSystem, TermAdjustment

DEFAULT_ANNUAL_RATE = 0.095
DEFAULT_AFFORDABILITY_RATIO = 0.30
DEFAULT_MIN_TERM_YEARS = 10
DEFAULT_MAX_TERM_YEARS = 35


class SacInstallments(NamedTuple):
    first: float
    last: float


def _require_positive_months(months: int) -> None:
    if months <= 0:
        raise ValueError("months must be greater than 0.")


def price_installment(principal: float, annual_rate: float, months: int) -> float:
    """Parcela fixa da tabela PRICE com taxa mensal = taxa anual / 12.

    Prazos grandes demais para a aritmética de ponto flutuante retornam
    math.inf.
    """
    _require_positive_months(months)
    monthly_rate = annual_rate / 12
    if monthly_rate == 0:
        return principal / months
    try:
        factor = (1 + monthly_rate) ** months
    except OverflowError:
        return math.inf
    return principal * (monthly_rate * factor) / (factor - 1)


def sac_installments(principal: float, annual_rate: float, months: int) -> SacInstallments:
    """Primeira e última parcela do SAC.

    A última parcela considera saldo final igual a uma cota de amortização.
    """
    _require_positive_months(months)
    monthly_rate = annual_rate / 12
    amortization = principal / months
    first = amortization + principal * monthly_rate
    last = amortization + amortization * monthly_rate
    return SacInstallments(first=first, last=last)


def max_affordable_installment(
    income: float, ratio: float = DEFAULT_AFFORDABILITY_RATIO
) -> float:
    return income * ratio


def installment_for(
    system: AmortizationSystem, principal: float, annual_rate: float, months: int
) -> float:
    """Parcela de referência do sistema (no SAC, a primeira e maior)."""
    if system is AmortizationSystem.SAC:
        return sac_installments(principal, annual_rate, months).first
    return price_installment(principal, annual_rate, months)


def find_ideal_term(
    principal: float,
    income: float,
    annual_rate: float,
    system: AmortizationSystem = AmortizationSystem.PRICE,
    *,
    min_years: int = DEFAULT_MIN_TERM_YEARS,
    max_years: int = DEFAULT_MAX_TERM_YEARS,
    ratio: float = DEFAULT_AFFORDABILITY_RATIO,
) -> TermAdjustment | None:
    """Menor prazo, em anos, cuja parcela cabe no teto de renda."""
    ceiling = max_affordable_installment(income, ratio)
    for years in range(min_years, max_years + 1):
        installment = installment_for(system, principal, annual_rate, years * 12)
        if installment <= ceiling:
            return TermAdjustment(years=years, installment=installment)
    return None
