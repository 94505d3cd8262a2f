"""
AI Tutor — study assistant backed by Gemini.

The server keeps no conversation state. Each request carries the latest
message and, optionally, the transcript the client holds in memory; the
transcript is replayed to the model as chat history.
"""

from __future__ import annotations

import logging

import google.generativeai as genai

logger = logging.getLogger(__name__)

TUTOR_SYSTEM_PROMPT = (
    "Você é um tutor de estudos prestativo e encorajador para um app chamado Estuda Jonata. "
    "Seu objetivo é ajudar os alunos a gerenciar seu tempo, entender as matérias e manter a motivação. "
    "Mantenha as respostas concisas, bem formatadas (usando markdown) e práticas. "
    "Se perguntado sobre planos de estudo, sugira cronogramas realistas. "
    "Responda sempre em português brasileiro."
)

GREETING = (
    "Olá! Eu sou o seu tutor de estudos Estuda Jonata. Como posso te ajudar hoje? "
    "Posso te ajudar a criar um plano de estudos, explicar tópicos complexos ou dar dicas de produtividade."
)

EMPTY_RESPONSE = "Desculpe, não consegui processar esse pedido."

APOLOGY = (
    "Desculpe, estou com problemas para conectar ao meu cérebro agora. "
    "Por favor, tente novamente mais tarde."
)

# Gemini calls the assistant side of a conversation "model"
_ROLE_MAP = {"user": "user", "assistant": "model"}


class TutorSession:
    """One request/response exchange with the tutor model."""

    def __init__(self, api_key: str, model: str = "gemini-2.0-flash"):
        if not api_key:
            raise EnvironmentError("GEMINI_API_KEY not set")
        genai.configure(api_key=api_key)
        self.model_name = model
        self.model = genai.GenerativeModel(model, system_instruction=TUTOR_SYSTEM_PROMPT)

    @staticmethod
    def build_history(messages: list[dict]) -> list[dict]:
        """Convert ``[{role, content}]`` transcript entries to Gemini chat history."""
        history = []
        for msg in messages:
            # The canned greeting never came from the model
            if msg["role"] == "assistant" and msg["content"] == GREETING:
                continue
            history.append({"role": _ROLE_MAP[msg["role"]], "parts": [msg["content"]]})
        return history

    def respond(self, message: str, history: list[dict] | None = None) -> str:
        """Send ``message`` (with optional prior turns) and return the reply text."""
        chat = self.model.start_chat(history=self.build_history(history or []))
        response = chat.send_message(message)
        try:
            text = response.text
        except ValueError:
            # Blocked or empty candidates
            text = ""
        return text or EMPTY_RESPONSE


def ask_tutor(message: str, history: list[dict] | None = None, *, api_key: str, model: str) -> str:
    """Ask the tutor, converting any failure into the fixed apology."""
    try:
        return TutorSession(api_key=api_key, model=model).respond(message, history)
    except Exception as e:
        logger.error("AI tutor error: %s", e, exc_info=True)
        return APOLOGY
