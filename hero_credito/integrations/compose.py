"""Campo de composição e gatilho do simulador na tela de atendimento."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

from hero_credito.simulation.schemas import AmortizationSystem
from hero_credito.simulation.text_normalizer import remove_accents

TRIGGER_LABEL = "💰 Crédito"
TRIGGER_COMMANDS = frozenset({"💰 credito", "/credito", "#credito"})


@dataclass
class ComposeField:
    """Rascunho da próxima mensagem do atendente.

    Cada inserção é anexada ao final seguida de uma linha em branco.
    """

    text: str = ""

    def insert_text(self, text: str) -> None:
        self.text += f"{text}\n\n"

    def clear(self) -> str:
        previous, self.text = self.text, ""
        return previous


@dataclass
class CreditTrigger:
    """Botão que executa o simulador e escreve o resultado no rascunho.

    ``ensure_attached`` pode ser chamado a cada renderização da tela; o
    callback de anexação roda apenas na primeira vez.
    """

    on_attach: Callable[[str], None] | None = None
    label: str = TRIGGER_LABEL
    attached: bool = field(default=False, init=False)

    def ensure_attached(self) -> bool:
        """Anexa o gatilho se ainda não estiver presente; retorna True se anexou agora."""
        if self.attached:
            return False
        if self.on_attach is not None:
            self.on_attach(self.label)
        self.attached = True
        return True

    def detach(self) -> None:
        self.attached = False

    def fire(
        self,
        transcript: str,
        compose: ComposeField,
        respond: Callable[[str], str],
    ) -> str:
        message = respond(transcript)
        compose.insert_text(message)
        return message


def system_chip_text(system: AmortizationSystem) -> str:
    """Resposta rápida usada pelos chips SAC/PRICE."""
    return f"Sistema: {system.value}"


def is_trigger_command(text: str) -> bool:
    """Reconhece o rótulo do gatilho ou os comandos /credito e #credito."""
    return remove_accents(text).strip().lower() in TRIGGER_COMMANDS
