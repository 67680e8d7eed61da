"""Textos enviados ao cliente pelo simulador."""

from __future__ import annotations

from hero_credito.simulation.schemas import (
    AmortizationSystem,
    ParsedFacts,
    SimulationResult,
)

PROMPT_TITLE = "💰 Vamos simular seu potencial de compra?"
SIMULATION_TITLE = "💰 Simulação estimada"

MISSING_DATA_PROMPT = (
    f"{PROMPT_TITLE}\n"
    "\n"
    "Envie:\n"
    "\n"
    "• Valor do imóvel\n"
    "• Entrada\n"
    "• FGTS (opcional)\n"
    "• Renda bruta mensal\n"
    "• Prazo (anos)\n"
    "• Sistema: SAC ou PRICE"
)

DISCLAIMER = "⚠️ Estimativa sujeita à análise do banco. Taxas e CET podem variar."


def format_brl(value: float) -> str:
    """Formata valores monetários no padrão brasileiro (R$ 1.234,56)."""
    formatted = f"{value:,.2f}".replace(",", "_").replace(".", ",").replace("_", ".")
    return f"R$ {formatted}"


def format_percent(value: float, decimals: int = 1) -> str:
    formatted = f"{value:.{decimals}f}".replace(".", ",")
    if "," in formatted:
        formatted = formatted.rstrip("0").rstrip(",")
    return f"{formatted}%"


def _format_years(years: float) -> str:
    if float(years).is_integer():
        return str(int(years))
    return f"{years:.1f}".replace(".", ",")


def render_header(
    facts: ParsedFacts,
    financed_amount: float,
    months: int,
    annual_rate: float,
) -> str:
    systems = " e ".join(system.value for system in facts.requested_systems)
    lines = [
        f"{SIMULATION_TITLE} ({systems})",
        "",
        f"Valor do imóvel: {format_brl(facts.property_value or 0.0)}",
        f"Entrada: {format_brl(facts.down_payment or 0.0)}",
    ]
    if facts.fgts_contribution > 0:
        lines.append(f"FGTS: {format_brl(facts.fgts_contribution)}")
    lines.extend(
        [
            f"Valor financiado: {format_brl(financed_amount)}",
            f"Prazo: {_format_years(facts.term_years or 0.0)} anos ({months} meses)",
            f"Taxa de juros: {format_percent(annual_rate * 100, 2)} a.a.",
        ]
    )
    return "\n".join(lines)


def render_system_block(result: SimulationResult, ratio: float) -> str:
    ceiling_percent = format_percent(ratio * 100, 1)
    lines = [f"📊 {result.system.value}"]
    if result.system is AmortizationSystem.SAC:
        lines.append(f"Parcela inicial: {format_brl(result.first_installment)}")
        lines.append(f"Parcela final: {format_brl(result.last_installment)}")
    else:
        lines.append(f"Parcela fixa: {format_brl(result.first_installment)}")
    lines.append(
        f"Comprometimento de renda: {format_percent(result.income_commitment_percent)}"
    )

    if not result.exceeds_ceiling:
        return "\n".join(lines)

    adjustment = result.term_adjustment
    if adjustment is not None:
        lines.extend(
            [
                "",
                "📌 Ajuste Estratégico Automático:",
                "",
                f"Para manter até {ceiling_percent} da renda,",
                f"o prazo ideal seria {adjustment.years} anos.",
                "",
                "Nova parcela estimada:",
                format_brl(adjustment.installment),
            ]
        )
    else:
        lines.extend(
            [
                "",
                f"⚠️ Mesmo com prazo máximo, a parcela ultrapassa {ceiling_percent}.",
                "Pode ser necessário aumentar entrada.",
            ]
        )
    return "\n".join(lines)


def render_simulation(
    facts: ParsedFacts,
    results: list[SimulationResult],
    *,
    annual_rate: float,
    ratio: float,
) -> str:
    financed_amount = results[0].financed_amount
    months = results[0].months
    blocks = [render_header(facts, financed_amount, months, annual_rate)]
    blocks.extend(render_system_block(result, ratio) for result in results)
    blocks.append(DISCLAIMER)
    return "\n\n".join(blocks)


def is_simulator_message(text: str) -> bool:
    """Indica se o texto é uma resposta gerada pelo próprio simulador.

    Essas respostas repetem rótulos como "Comprometimento de renda" e não
    podem voltar para a transcrição analisada.
    """
    return SIMULATION_TITLE in text or PROMPT_TITLE in text
