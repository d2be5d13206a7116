import logging
import time
from typing import Optional, Sequence

from .config import Settings
from .errors import ConfigurationError, InvalidRequest
from .models import ChatChoice, ChatCompletionResponse, ChatMessage
from .upstream import CompletionClient

logger = logging.getLogger("mistral_chat")

MOCK_REPLY = "🤖 Mock reply: Hello! Your setup works locally."


def mock_completion(model: str) -> dict:
    """Canned completion used to exercise the stack without a credential."""
    return ChatCompletionResponse(
        id="mock",
        created=int(time.time()),
        model=model,
        choices=[
            ChatChoice(index=0, message=ChatMessage(role="assistant", content=MOCK_REPLY)),
        ],
    ).model_dump()


class Relay:
    """Forwards a conversation to the completion service.

    Holds no per-request state; the only inputs besides the call arguments
    are the injected settings.
    """

    def __init__(self, settings: Settings, client: Optional[CompletionClient] = None):
        self.settings = settings
        self._client = client

    @property
    def client(self) -> CompletionClient:
        if not self.settings.api_key:
            raise ConfigurationError("Missing API credential")
        if self._client is None:
            self._client = CompletionClient(
                api_key=self.settings.api_key,
                endpoint=self.settings.endpoint,
                timeout=self.settings.timeout,
            )
        return self._client

    def resolve_model(self, model: Optional[str]) -> str:
        return model or self.settings.default_model

    def relay(self, conversation: Optional[Sequence[ChatMessage]], model: Optional[str] = None,
              temperature: Optional[float] = None, mock: bool = False) -> dict:
        """
        Send ``conversation`` upstream and return the completion body unchanged.

        Args:
            conversation: chronological messages, must not be empty.
            model: model identifier; the configured default when omitted.
            temperature: forwarded as-is, the client fills in 0.3 when None.
            mock: skip the network and return a canned reply.

        Raises:
            InvalidRequest: no messages.
            ConfigurationError: no API credential configured.
            UpstreamError: the service answered with a non-success status.
        """
        if not conversation:
            raise InvalidRequest("No messages provided")

        model = self.resolve_model(model)
        logger.info(f"Relaying {len(conversation)} messages (model={model}, mock={mock})")

        if mock:
            return mock_completion(model)

        return self.client.create(model, conversation, temperature)
