"""FastAPI app entrypoint."""

from __future__ import annotations

import logging
from typing import Any

import httpx
from fastapi import FastAPI, Header, HTTPException

from hero_credito.config import load_settings
from hero_credito.integrations.whatsapp import (
    EvolutionWhatsAppClient,
    handle_credit_trigger,
    parse_evolution_webhook,
)
from hero_credito.logging_config import configure_logging
from hero_credito.simulation.extractor import extract_facts
from hero_credito.simulation.schemas import (
    ParsedFacts,
    SimulationOutcome,
    SimulationRequest,
)
from hero_credito.simulation.service import SimulationService

settings = load_settings()
configure_logging(settings)
simulation_service = SimulationService(settings=settings)
whatsapp_client = EvolutionWhatsAppClient.from_settings(settings)

logger = logging.getLogger(__name__)

app = FastAPI(title=settings.PROJECT_NAME)


@app.get("/health")
def health() -> dict[str, str]:
    """Simple health check."""
    return {"status": "ok"}


@app.post("/v1/simulation", response_model=SimulationOutcome)
def simulate(payload: SimulationRequest) -> SimulationOutcome:
    """Gera a mensagem de simulação a partir da conversa."""
    return simulation_service.simulate(payload.transcript)


@app.post("/v1/simulation/facts", response_model=ParsedFacts)
def simulation_facts(payload: SimulationRequest) -> ParsedFacts:
    """Retorna apenas os dados reconhecidos na conversa."""
    return extract_facts(payload.transcript)


@app.post("/v1/channels/whatsapp/evolution/webhook")
def whatsapp_evolution_webhook(
    payload: dict[str, Any],
    x_webhook_secret: str | None = Header(default=None),
) -> dict[str, str]:
    """Executa o simulador quando o atendente envia o comando de crédito."""
    if not settings.WHATSAPP_CHANNEL_ENABLED:
        return {"status": "ignored", "reason": "channel-disabled"}

    expected_secret = settings.WHATSAPP_WEBHOOK_SECRET
    if expected_secret and x_webhook_secret != expected_secret:
        raise HTTPException(status_code=401, detail="Invalid webhook secret.")

    incoming = parse_evolution_webhook(payload)
    if incoming is None:
        return {"status": "ignored", "reason": "no-text-message"}
    if not incoming.is_credit_trigger:
        return {"status": "ignored", "reason": "not-a-credit-trigger"}

    if not whatsapp_client.is_enabled:
        raise HTTPException(status_code=503, detail="WhatsApp client not configured.")

    try:
        handle_credit_trigger(incoming, whatsapp_client, simulation_service.respond)
    except httpx.HTTPError as exc:
        logger.error("whatsapp_gatilho_falhou", extra={"error": str(exc)})
        raise HTTPException(
            status_code=502, detail="Failed to reach the WhatsApp provider."
        ) from exc

    return {"status": "processed"}
