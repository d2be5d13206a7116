import json
import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.concurrency import run_in_threadpool

from .config import AVAILABLE_MODELS, Settings, get_settings
from .errors import InvalidRequest, RelayError, UnknownError
from .models import ChatCompletionRequest
from .relay import Relay

logger = logging.getLogger("mistral_chat")


def parse_chat_request(body) -> ChatCompletionRequest:
    if not isinstance(body, dict) or not body.get("messages"):
        raise InvalidRequest("No messages provided")
    try:
        return ChatCompletionRequest.model_validate(body)
    except ValidationError as e:
        errors = "; ".join(
            f"{'.'.join(str(loc) for loc in err['loc']) or 'body'}: {err['msg']}" for err in e.errors()
        )
        raise InvalidRequest(f"Invalid request: {errors}") from e


async def relay_error_handler(request: Request, exc: RelayError):
    return JSONResponse(status_code=exc.http_status, content={"error": exc.message})


def create_app(settings: Optional[Settings] = None, relay: Optional[Relay] = None) -> FastAPI:
    settings = settings or get_settings()
    logging.basicConfig(level=settings.log_level, format="[%(asctime)s] %(levelname)s - %(message)s")

    app = FastAPI(title="Mistral Chat Relay")
    app.state.settings = settings
    app.state.relay = relay or Relay(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(RelayError, relay_error_handler)

    @app.post("/api/chat")
    async def handle_chat(request: Request):
        relay: Relay = request.app.state.relay
        try:
            body = await request.json()
            logger.debug("Incoming request:\n%s", json.dumps(body, indent=2, ensure_ascii=False))
            chat_request = parse_chat_request(body)
            response_data = await run_in_threadpool(
                relay.relay,
                chat_request.messages,
                model=chat_request.model,
                temperature=chat_request.temperature,
                mock=bool(chat_request.mock),
            )
        except RelayError:
            raise
        except Exception as e:
            logger.exception(f"Chat relay failed: {e}")
            raise UnknownError(str(e) or "Unknown error") from e
        return JSONResponse(content=response_data)

    @app.get("/api/models")
    def list_models():
        return {"models": AVAILABLE_MODELS, "default": settings.default_model}

    @app.get("/health")
    def health():
        return {"status": "ok"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "mistral_chat.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        env_file=".env"
    )
