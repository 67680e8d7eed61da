import json
from pathlib import Path

from typer.testing import CliRunner

from hero_credito.cli import app
from hero_credito.simulation.messages import MISSING_DATA_PROMPT

runner = CliRunner()

TRANSCRIPT = "Valor do imóvel: 500 mil\nEntrada: 100 mil\nRenda: 8 mil\nPrazo: 30 anos\n"


def test_simular_reads_file(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("DISABLE_LOGS", "true")
    conversation = tmp_path / "conversa.txt"
    conversation.write_text(TRANSCRIPT, encoding="utf-8")

    result = runner.invoke(app, ["simular", "--input", str(conversation)])

    assert result.exit_code == 0
    assert "Valor financiado: R$ 400.000,00" in result.output


def test_simular_reads_stdin(monkeypatch) -> None:
    monkeypatch.setenv("DISABLE_LOGS", "true")

    result = runner.invoke(app, ["simular"], input="Renda: 8 mil\n")

    assert result.exit_code == 0
    assert MISSING_DATA_PROMPT in result.output


def test_extrair_prints_facts_json(tmp_path: Path) -> None:
    conversation = tmp_path / "conversa.txt"
    conversation.write_text(TRANSCRIPT + "SAC\n", encoding="utf-8")

    result = runner.invoke(app, ["extrair", "--input", str(conversation)])

    assert result.exit_code == 0
    facts = json.loads(result.output)
    assert facts["down_payment"] == 100000.0
    assert facts["requested_systems"] == ["SAC"]
