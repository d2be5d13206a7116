import json
import logging
from typing import Optional, Sequence

import requests

from .config import DEFAULT_TEMPERATURE
from .errors import UpstreamError
from .models import ChatMessage, UpstreamRequest

logger = logging.getLogger("mistral_chat")


class CompletionClient:
    """Thin client for the chat completions endpoint.

    One ``create`` call is exactly one POST; nothing is retried.
    """

    def __init__(self, api_key: str, endpoint: str, timeout: Optional[float] = None,
                 session: Optional[requests.Session] = None):
        self.api_key = api_key
        self.endpoint = endpoint
        self.timeout = timeout
        self.session = session

    def create(self, model: str, messages: Sequence[ChatMessage],
               temperature: Optional[float] = None) -> dict:
        payload = UpstreamRequest(
            model=model,
            messages=list(messages),
            temperature=DEFAULT_TEMPERATURE if temperature is None else temperature,
        ).model_dump()
        logger.debug("Upstream request:\n%s", json.dumps(payload, indent=2, ensure_ascii=False))

        http = self.session or requests
        response = http.post(
            self.endpoint,
            json=payload,
            headers={
                "Authorization": f"Bearer {self.api_key}",
                "Content-Type": "application/json",
            },
            timeout=self.timeout,
        )
        if not response.ok:
            logger.error(f"Upstream API error: {response.status_code} - {response.text}")
            raise UpstreamError(response.status_code, response.text)

        logger.info(f"Received upstream response ({len(response.text)} bytes)")
        return response.json()
