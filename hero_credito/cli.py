"""CLI entrypoints for hero_credito."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from hero_credito.config import load_settings
from hero_credito.logging_config import configure_logging
from hero_credito.simulation.extractor import extract_facts
from hero_credito.simulation.service import SimulationService

app = typer.Typer(help="hero_credito CLI")
INPUT_OPTION = typer.Option(
    None,
    "--input",
    exists=True,
    dir_okay=False,
    help="Arquivo com a conversa. Sem ele, lê da entrada padrão.",
)


def _read_transcript(input_path: Path | None) -> str:
    if input_path is None:
        return typer.get_text_stream("stdin").read()
    return input_path.read_text(encoding="utf-8")


@app.command("simular")
def simular(input_path: Optional[Path] = INPUT_OPTION) -> None:
    """Gera a mensagem de simulação para a conversa informada."""
    settings = load_settings()
    configure_logging(settings)
    service = SimulationService(settings=settings)
    typer.echo(service.respond(_read_transcript(input_path)))


@app.command("extrair")
def extrair(input_path: Optional[Path] = INPUT_OPTION) -> None:
    """Mostra os dados financeiros reconhecidos na conversa."""
    facts = extract_facts(_read_transcript(input_path))
    typer.echo(facts.model_dump_json(indent=2))


if __name__ == "__main__":
    app()
