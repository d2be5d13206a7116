import logging
from typing import Callable, Optional

import requests

from .models import ChatMessage
from .relay import Relay

logger = logging.getLogger("mistral_chat")

DEFAULT_SYSTEM_PROMPT = "You are a concise, helpful assistant."
DEFAULT_CLIENT_MODEL = "open-mistral-7b"

Transport = Callable[[dict], dict]


class ChatRequestFailed(Exception):
    pass


class HttpTransport:
    """Posts payloads to a running relay server."""

    def __init__(self, base_url: str, session: Optional[requests.Session] = None,
                 timeout: Optional[float] = None):
        self.url = base_url.rstrip("/") + "/api/chat"
        self.session = session or requests.Session()
        self.timeout = timeout

    def __call__(self, payload: dict) -> dict:
        response = self.session.post(self.url, json=payload, timeout=self.timeout)
        data = response.json()
        if not response.ok:
            error = data.get("error") if isinstance(data, dict) else None
            raise ChatRequestFailed(error or "Request failed")
        return data


class LocalTransport:
    """Calls a relay in-process, skipping HTTP."""

    def __init__(self, relay: Relay):
        self.relay = relay

    def __call__(self, payload: dict) -> dict:
        return self.relay.relay(
            [ChatMessage(**m) for m in payload["messages"]],
            model=payload.get("model"),
            temperature=payload.get("temperature"),
            mock=payload.get("mock", False),
        )


def extract_reply(data) -> str:
    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        content = None
    return content if content is not None else "No content"


class Conversation:
    """In-memory message list for one chat session.

    The first message is always the system prompt. Every ``send`` appends the
    user message and then exactly one assistant message, which holds either
    the reply or the error text, so the history doubles as the error log.
    """

    def __init__(self, transport: Transport, system_prompt: str = DEFAULT_SYSTEM_PROMPT,
                 model: str = DEFAULT_CLIENT_MODEL, temperature: float = 0.3, mock: bool = False):
        self.transport = transport
        self.model = model
        self.temperature = temperature
        self.mock = mock
        self.loading = False
        self.initial_system_prompt = system_prompt
        self.messages: list[ChatMessage] = [ChatMessage(role="system", content=system_prompt)]

    @property
    def system_prompt(self) -> str:
        return self.messages[0].content

    def set_system_prompt(self, text: str):
        self.messages = [ChatMessage(role="system", content=text)] + self.messages[1:]

    def visible_messages(self) -> list[ChatMessage]:
        return [m for m in self.messages if m.role != "system"]

    def reset(self):
        self.messages = [ChatMessage(role="system", content=self.initial_system_prompt)]

    def send(self, text: str) -> Optional[ChatMessage]:
        text = text.strip()
        if not text:
            return None

        self.messages = self.messages + [ChatMessage(role="user", content=text)]
        payload = {
            "messages": [m.model_dump() for m in self.messages],
            "model": self.model,
            "temperature": self.temperature,
            "mock": self.mock,
        }
        self.loading = True
        try:
            content = extract_reply(self.transport(payload))
        except Exception as e:
            logger.warning(f"Chat request failed: {e}")
            content = f"Error: {e}"
        finally:
            self.loading = False

        reply = ChatMessage(role="assistant", content=content)
        self.messages.append(reply)
        return reply
