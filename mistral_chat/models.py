from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict

Role = Literal["system", "user", "assistant"]


class ChatMessage(BaseModel):
    model_config = ConfigDict(frozen=True, extra="allow")

    role: Role
    content: str


class ChatCompletionRequest(BaseModel):
    """Inbound body of POST /api/chat."""
    messages: Optional[list[ChatMessage]] = None
    model: Optional[str] = None
    temperature: Optional[float] = None
    mock: Optional[bool] = None


class UpstreamRequest(BaseModel):
    model: str
    messages: list[ChatMessage]
    temperature: float = 0.3
    stream: bool = False  # partial output is never consumed


class ChatChoice(BaseModel):
    index: int
    message: ChatMessage


class ChatCompletionResponse(BaseModel):
    id: str
    object: str = "chat.completion"
    created: int
    model: str
    choices: list[ChatChoice]
