"""Gatilho do simulador em conversas de WhatsApp via Evolution API.

O atendente dispara a simulação enviando o comando de crédito na própria
conversa. O histórico visível é lido da Evolution API, vira a transcrição
do simulador e a resposta é enviada de volta ao mesmo contato.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import httpx

from hero_credito.config import AppSettings
from hero_credito.integrations.compose import is_trigger_command
from hero_credito.simulation.messages import is_simulator_message


@dataclass
class WhatsAppIncomingMessage:
    """Mensagem de texto normalizada a partir do webhook."""

    remote_jid: str
    text: str
    from_me: bool
    timestamp: int = 0

    @property
    def is_credit_trigger(self) -> bool:
        return self.from_me and is_trigger_command(self.text)


class EvolutionWhatsAppClient:
    """Cliente da Evolution API: histórico da conversa e envio de texto."""

    def __init__(
        self,
        *,
        base_url: str,
        api_key: str,
        instance: str,
        timeout_seconds: float = 10.0,
        history_limit: int = 50,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._instance = instance
        self._timeout_seconds = timeout_seconds
        self._history_limit = history_limit
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: AppSettings) -> "EvolutionWhatsAppClient":
        return cls(
            base_url=settings.WHATSAPP_EVOLUTION_BASE_URL,
            api_key=settings.WHATSAPP_EVOLUTION_API_KEY or "",
            instance=settings.WHATSAPP_EVOLUTION_INSTANCE,
            timeout_seconds=settings.WHATSAPP_TIMEOUT_SECONDS,
            history_limit=settings.WHATSAPP_HISTORY_LIMIT,
        )

    @property
    def is_enabled(self) -> bool:
        return bool(self._base_url and self._api_key and self._instance)

    def _client(self) -> httpx.Client:
        return httpx.Client(
            base_url=self._base_url,
            headers={"apikey": self._api_key, "Content-Type": "application/json"},
            timeout=self._timeout_seconds,
            transport=self._transport,
        )

    def fetch_history(self, remote_jid: str) -> list[WhatsAppIncomingMessage]:
        """Últimas mensagens de texto da conversa, em ordem cronológica."""
        payload = {
            "where": {"key": {"remoteJid": remote_jid}},
            "offset": self._history_limit,
            "page": 1,
        }
        with self._client() as client:
            response = client.post(f"/chat/findMessages/{self._instance}", json=payload)
            response.raise_for_status()
            body = response.json()

        # v1 devolve uma lista; v2 pagina em {"messages": {"records": [...]}}
        if isinstance(body, dict):
            records = (body.get("messages") or {}).get("records") or []
        else:
            records = body or []

        messages = [
            message
            for message in (parse_message_record(record) for record in records)
            if message is not None
        ]
        messages.sort(key=lambda item: item.timestamp)
        return messages[-self._history_limit :]

    def send_text(self, *, number: str, text: str) -> None:
        """Envia texto para o número/contato de destino."""
        with self._client() as client:
            response = client.post(
                f"/message/sendText/{self._instance}",
                json={"number": number, "text": text},
            )
            response.raise_for_status()


def _message_text(message: dict[str, Any]) -> str:
    extended = message.get("extendedTextMessage") or {}
    return str(message.get("conversation") or extended.get("text") or "").strip()


def parse_message_record(record: dict[str, Any]) -> WhatsAppIncomingMessage | None:
    """Normaliza um registro de mensagem da Evolution API (webhook ou histórico)."""
    key = record.get("key") or {}
    remote_jid = str(key.get("remoteJid") or "").strip()
    if not remote_jid:
        return None

    text = _message_text(record.get("message") or {})
    if not text:
        return None

    try:
        timestamp = int(record.get("messageTimestamp") or 0)
    except (TypeError, ValueError):
        timestamp = 0

    return WhatsAppIncomingMessage(
        remote_jid=remote_jid,
        text=text,
        from_me=bool(key.get("fromMe")),
        timestamp=timestamp,
    )


def parse_evolution_webhook(payload: dict) -> WhatsAppIncomingMessage | None:
    """Extrai a mensagem de texto do evento messages.upsert."""
    if payload.get("event") != "messages.upsert":
        return None
    return parse_message_record(payload.get("data") or {})


def build_transcript(history: list[WhatsAppIncomingMessage]) -> str:
    """Junta o histórico visível, sem comandos de crédito nem respostas anteriores."""
    lines = [
        message.text
        for message in history
        if not is_trigger_command(message.text)
        and not (message.from_me and is_simulator_message(message.text))
    ]
    return "\n".join(lines)


def handle_credit_trigger(
    incoming: WhatsAppIncomingMessage,
    client: EvolutionWhatsAppClient,
    respond: Callable[[str], str],
) -> str:
    """Simula sobre o histórico da conversa e envia o resultado ao contato."""
    transcript = build_transcript(client.fetch_history(incoming.remote_jid))
    reply = respond(transcript)
    client.send_text(number=normalize_whatsapp_number(incoming.remote_jid), text=reply)
    return reply


def normalize_whatsapp_number(remote_jid: str) -> str:
    """Converte remoteJid para o formato esperado pelo endpoint de envio."""
    return remote_jid.split("@")[0]
