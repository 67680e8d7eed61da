"""Extração de dados financeiros a partir da transcrição do chat."""

from __future__ import annotations

import re

from hero_credito.simulation.schemas import AmortizationSystem, ParsedFacts
from hero_credito.simulation.text_normalizer import normalize_number, remove_accents

TIMESTAMP_PATTERN = re.compile(r"^\s*\[?\d{1,2}:\d{2}")

PROPERTY_PATTERN = re.compile(r"imovel", re.IGNORECASE)
DOWN_PAYMENT_PATTERN = re.compile(
    r"\b(?:entrada|sinal|recursos?\s+proprios?)\b",
    re.IGNORECASE,
)
FGTS_PATTERN = re.compile(r"\bfgts\b", re.IGNORECASE)
INCOME_PATTERN = re.compile(r"\brenda\b", re.IGNORECASE)
TERM_PATTERN = re.compile(r"\bprazo\b", re.IGNORECASE)

SYSTEM_PATTERNS: tuple[tuple[AmortizationSystem, re.Pattern[str]], ...] = (
    (AmortizationSystem.SAC, re.compile(r"\bsac\b", re.IGNORECASE)),
    (AmortizationSystem.PRICE, re.compile(r"\bprice\b", re.IGNORECASE)),
)

FIELD_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("property_value", PROPERTY_PATTERN),
    ("down_payment", DOWN_PAYMENT_PATTERN),
    ("fgts_contribution", FGTS_PATTERN),
    ("monthly_income", INCOME_PATTERN),
    ("term_years", TERM_PATTERN),
)


def _is_scannable(line: str) -> bool:
    return bool(line.strip()) and not TIMESTAMP_PATTERN.match(line)


def _mentioned_systems(line: str) -> list[AmortizationSystem]:
    """Sistemas citados na linha, na ordem em que aparecem no texto."""
    found: list[tuple[int, AmortizationSystem]] = []
    for system, pattern in SYSTEM_PATTERNS:
        match = pattern.search(line)
        if match:
            found.append((match.start(), system))
    return [system for _, system in sorted(found, key=lambda item: item[0])]


def extract_facts(transcript: str) -> ParsedFacts:
    """Varre a conversa linha a linha e preenche os campos reconhecidos.

    Cada campo guarda o último valor válido encontrado. Linhas iniciadas
    por horário de mensagem ("14:35", "[9:05]") são ignoradas.
    """
    values: dict[str, float] = {}
    requested: list[AmortizationSystem] = []
    default_system = AmortizationSystem.PRICE

    for line in transcript.splitlines():
        if not _is_scannable(line):
            continue

        keywords = remove_accents(line)
        for field_name, pattern in FIELD_PATTERNS:
            if not pattern.search(keywords):
                continue
            parsed = normalize_number(line)
            if parsed is not None:
                values[field_name] = parsed

        for system in _mentioned_systems(keywords):
            if system not in requested:
                requested.append(system)
            default_system = system

    return ParsedFacts(
        **values,
        requested_systems=requested or [AmortizationSystem.PRICE],
        default_system=default_system,
    )
