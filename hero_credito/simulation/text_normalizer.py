"""Normalização de valores numéricos escritos em linguagem natural."""

from __future__ import annotations

import math
import re
import unicodedata

# 350.000,00 | 1,5 | 30
NUMBER_PATTERN = re.compile(r"\d+(?:\.\d+)*(?:,\d+)?")
MILLION_PATTERN = re.compile(r"(?<![a-z])milh(?:ao|oes)(?![a-z])")
THOUSAND_PATTERN = re.compile(r"(?<![a-z])mil(?![a-z])")


def remove_accents(text: str) -> str:
    nfkd = unicodedata.normalize("NFKD", text)
    return "".join(char for char in nfkd if not unicodedata.combining(char))


def _magnitude(normalized: str) -> float:
    if MILLION_PATTERN.search(normalized):
        return 1_000_000.0
    if THOUSAND_PATTERN.search(normalized):
        return 1_000.0
    return 1.0


def normalize_number(text: str | None) -> float | None:
    """Converte o primeiro número do texto (padrão brasileiro) em float.

    Pontos são separadores de milhar e a vírgula é o separador decimal.
    As palavras "mil" e "milhão"/"milhões" multiplicam o valor encontrado,
    de modo que "1,5 mil" vira 1500.0. Retorna None quando não há número.
    """
    if not text:
        return None

    normalized = remove_accents(text).lower()
    match = NUMBER_PATTERN.search(normalized)
    if match is None:
        return None

    raw_number = match.group(0).replace(".", "").replace(",", ".")
    try:
        value = float(raw_number) * _magnitude(normalized)
    except ValueError:
        return None

    if not math.isfinite(value):
        return None
    return value
