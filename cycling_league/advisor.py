"""Advisor chat backed by Google Generative AI (Gemini) with search grounding.

The client is a stateless request/response wrapper: one question in, one
answer (or one typed error) out. The conversation itself lives in a
:class:`Transcript` owned by the caller, which turns every failure into an
error-flagged message instead of raising.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, List, Optional, Tuple

from google import genai
from google.genai import types

from . import config


logger = logging.getLogger(__name__)

# Gemini 2.0+ models only accept the ``google_search`` grounding tool.
SEARCH_TOOL = types.Tool(google_search=types.GoogleSearch())
DEFAULT_SOURCE_TITLE = "Ver en PCS"

WELCOME_TEXT = (
    "¡Director! El coche de apoyo está listo. Estoy conectado directamente a "
    "ProCyclingStats para darte la info más fresca de la temporada 2026. "
    "¿Qué necesitas analizar?"
)
EMPTY_ANSWER_TEXT = "La señal se ha perdido en el túnel. No tengo respuesta."
UPSTREAM_ERROR_TEXT = (
    "¡Pinchazo! La conexión ha fallado. Esto suele pasar si la red es inestable "
    "o el servicio corta el proceso. Pulsa abajo para reintentar."
)
CONFIGURATION_ERROR_TEXT = (
    "El coche de apoyo no tiene radio: falta la clave del servicio de IA. "
    "Configura GEMINI_API_KEY y vuelve a intentarlo."
)


class AdvisorError(Exception):
    """Base class for advisor failures."""


class ConfigurationError(AdvisorError):
    """The API key is missing or blank; no request was attempted."""


class UpstreamError(AdvisorError):
    """The Gemini call failed or was rejected."""


class EmptyResponse(AdvisorError):
    """The Gemini call succeeded but produced no usable text."""


class AdvisorMode(Enum):
    PCS = "pcs"
    ENCYCLOPEDIA = "encyclopedia"

    @property
    def system_instruction(self) -> str:
        return SYSTEM_INSTRUCTIONS[self]


SYSTEM_INSTRUCTIONS = {
    AdvisorMode.PCS: (
        "Eres el Oráculo de la Liga Frikis. Tu única fuente de verdad es ProCyclingStats "
        "(procyclingstats.com). Responde siempre de forma concisa, épica y técnica. "
        "Si el usuario pregunta por resultados, busca en tiempo real. Usa terminología "
        "ciclista (abanicos, fuera de control, gregario, vatios)."
    ),
    AdvisorMode.ENCYCLOPEDIA: (
        "Eres el Cronista de la Liga Frikis, una enciclopedia viva de la historia del "
        "ciclismo. Responde con narrativa histórica: ediciones pasadas, palmarés, "
        "etapas míticas y anécdotas. Busca en la web para contrastar fechas y datos "
        "y no inventes resultados."
    ),
}


@dataclass(frozen=True)
class Source:
    uri: str
    title: str = DEFAULT_SOURCE_TITLE


@dataclass(frozen=True)
class AdvisorAnswer:
    text: str
    sources: Tuple[Source, ...] = ()


ModelFactory = Callable[[str, str, str], Any]


class GeminiModel:
    """Binds a Gemini client to one model and one system instruction."""

    def __init__(self, api_key: str, model_name: str, system_instruction: str) -> None:
        self.client = genai.Client(api_key=api_key)
        self.model_name = model_name
        self.config = types.GenerateContentConfig(
            system_instruction=system_instruction,
            tools=[SEARCH_TOOL],
        )

    def generate_content(self, contents: str) -> Any:
        return self.client.models.generate_content(
            model=self.model_name,
            contents=contents,
            config=self.config,
        )


def _extract_text(resp: Any) -> str:
    text = getattr(resp, "text", None)
    if isinstance(text, str) and text.strip():
        return text.strip()

    candidates = getattr(resp, "candidates", None) or []
    if not candidates:
        return ""
    content = getattr(candidates[0], "content", None)
    parts = getattr(content, "parts", None) or []
    texts = [p.text for p in parts if isinstance(getattr(p, "text", None), str) and p.text]
    return "\n".join(texts).strip()


def _extract_sources(resp: Any) -> Tuple[Source, ...]:
    candidates = getattr(resp, "candidates", None) or []
    if not candidates:
        return ()
    metadata = getattr(candidates[0], "grounding_metadata", None)
    chunks = getattr(metadata, "grounding_chunks", None) or []

    sources: List[Source] = []
    for chunk in chunks:
        web = getattr(chunk, "web", None)
        uri = getattr(web, "uri", None)
        if uri:
            sources.append(Source(uri=uri, title=getattr(web, "title", None) or DEFAULT_SOURCE_TITLE))
    return tuple(sources)


class AdvisorClient:
    """Thin wrapper around a Gemini model answering one question at a time."""

    def __init__(
        self,
        api_key: Optional[str],
        *,
        model_name: str = config.ADVISOR_MODEL,
        model_factory: Optional[ModelFactory] = None,
    ) -> None:
        self.api_key = (api_key or "").strip()
        self.model_name = model_name
        self._model_factory = model_factory or GeminiModel

    @classmethod
    def from_env(cls) -> "AdvisorClient":
        return cls(config.ADVISOR_API_KEY, model_name=config.ADVISOR_MODEL)

    def ask(self, question: str, mode: AdvisorMode = AdvisorMode.PCS) -> AdvisorAnswer:
        if not self.api_key:
            raise ConfigurationError("An API key is required to query the advisor")

        logger.debug("Advisor request (%s, %s): %s", self.model_name, mode.value, question)
        try:
            model = self._model_factory(self.api_key, self.model_name, mode.system_instruction)
            resp = model.generate_content(question)
            text = _extract_text(resp)
            sources = _extract_sources(resp)
        except Exception as exc:
            raise UpstreamError(f"Advisor request failed: {exc}") from exc

        if not text:
            raise EmptyResponse("Advisor returned no text")
        return AdvisorAnswer(text=text, sources=sources)


class ChatRole(Enum):
    USER = "user"
    BOT = "bot"


class ChatStatus(Enum):
    IDLE = "idle"
    PENDING = "pending"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class ChatMessage:
    role: ChatRole
    text: str
    sources: Tuple[Source, ...] = ()
    is_error: bool = False


def _welcome() -> List[ChatMessage]:
    return [ChatMessage(role=ChatRole.BOT, text=WELCOME_TEXT)]


def _error_text(exc: AdvisorError) -> str:
    if isinstance(exc, ConfigurationError):
        return CONFIGURATION_ERROR_TEXT
    if isinstance(exc, EmptyResponse):
        return EMPTY_ANSWER_TEXT
    return UPSTREAM_ERROR_TEXT


@dataclass
class Transcript:
    """A linear conversation with the advisor, held by its caller."""

    messages: List[ChatMessage] = field(default_factory=_welcome)
    status: ChatStatus = ChatStatus.IDLE

    def last_question(self) -> Optional[str]:
        for message in reversed(self.messages):
            if message.role is ChatRole.USER:
                return message.text
        return None

    def send(
        self,
        client: AdvisorClient,
        question: str,
        mode: AdvisorMode = AdvisorMode.PCS,
        *,
        retry: bool = False,
    ) -> Optional[ChatMessage]:
        """Ask ``question`` and append the reply.

        With ``retry`` the question is not appended again; it is expected to
        be the one that failed last. Blank questions, and questions sent while
        a request is pending, are ignored and return ``None``.
        """

        question = question.strip()
        if not question or self.status is ChatStatus.PENDING:
            return None

        if not retry:
            self.messages.append(ChatMessage(role=ChatRole.USER, text=question))
        self.status = ChatStatus.PENDING

        try:
            answer = client.ask(question, mode)
        except AdvisorError as exc:
            logger.warning("Advisor request failed (%s): %s", type(exc).__name__, exc, exc_info=True)
            reply = ChatMessage(role=ChatRole.BOT, text=_error_text(exc), is_error=True)
            self.messages.append(reply)
            self.status = ChatStatus.ERROR
            return reply
        finally:
            # Never leave the transcript locked if the client raised something else.
            if self.status is ChatStatus.PENDING:
                self.status = ChatStatus.ERROR

        reply = ChatMessage(role=ChatRole.BOT, text=answer.text, sources=answer.sources)
        self.messages = [message for message in self.messages if not message.is_error]
        self.messages.append(reply)
        self.status = ChatStatus.SUCCESS
        return reply


__all__ = [
    "AdvisorAnswer",
    "AdvisorClient",
    "AdvisorError",
    "AdvisorMode",
    "ChatMessage",
    "ChatRole",
    "ChatStatus",
    "ConfigurationError",
    "EmptyResponse",
    "GeminiModel",
    "Source",
    "Transcript",
    "UpstreamError",
]
