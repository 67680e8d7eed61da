"""Console de atendimento em Streamlit com o simulador de crédito."""

from __future__ import annotations

import os

import requests
import streamlit as st

from hero_credito.integrations.compose import ComposeField, CreditTrigger, system_chip_text
from hero_credito.simulation.messages import is_simulator_message
from hero_credito.simulation.schemas import AmortizationSystem

API_URL = os.getenv("SIMULATION_API_URL", "http://localhost:8000/v1/simulation")
TIMEOUT_SECONDS = float(os.getenv("SIMULATION_API_TIMEOUT_SECONDS", "15"))

st.set_page_config(page_title="Hero Crédito", page_icon="💰", layout="wide")
st.title("💰 Hero Crédito - Atendimento")
st.caption("Cole ou digite a conversa e gere a simulação direto no rascunho.")

if "messages" not in st.session_state:
    st.session_state.messages = []
if "compose" not in st.session_state:
    st.session_state.compose = ComposeField()
if "trigger" not in st.session_state:
    st.session_state.trigger = CreditTrigger()

compose: ComposeField = st.session_state.compose
trigger: CreditTrigger = st.session_state.trigger


def request_simulation(transcript: str) -> str:
    response = requests.post(
        API_URL,
        json={"transcript": transcript},
        timeout=TIMEOUT_SECONDS,
    )
    response.raise_for_status()
    return str(response.json().get("message", ""))


with st.sidebar:
    st.header("Conversa")
    st.write(f"**API alvo:** `{API_URL}`")
    if st.button("Limpar conversa"):
        st.session_state.messages = []
        compose.clear()

for message in st.session_state.messages:
    with st.chat_message(message["role"]):
        st.markdown(message["content"])

incoming = st.chat_input("Mensagem do cliente")
if incoming:
    st.session_state.messages.append({"role": "user", "content": incoming})
    st.rerun()

st.divider()
columns = st.columns([2, 1, 1])

trigger.ensure_attached()
with columns[0]:
    if st.button(trigger.label, type="primary"):
        transcript = "\n".join(
            item["content"]
            for item in st.session_state.messages
            if not is_simulator_message(item["content"])
        )
        with st.spinner("Calculando simulação..."):
            try:
                trigger.fire(transcript, compose, request_simulation)
            except requests.RequestException as exc:
                st.error(f"Falha ao consultar API: {exc}")

for column, system in zip(columns[1:], AmortizationSystem):
    with column:
        if st.button(system.value, key=f"chip-{system.value}"):
            compose.insert_text(system_chip_text(system))

draft = st.text_area("Rascunho da resposta", value=compose.text, height=260)
compose.text = draft

if st.button("Enviar rascunho") and draft.strip():
    st.session_state.messages.append({"role": "assistant", "content": draft.strip()})
    compose.clear()
    st.rerun()
