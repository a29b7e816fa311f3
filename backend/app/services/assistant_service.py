"""
Navigation-help assistant: relays a streamed chat completion from an
OpenAI-compatible gateway as server-sent events.
"""
from __future__ import annotations

import json
import logging
from typing import Iterator

import requests

from app.core.config import settings
from app.core.errors import MarketplaceError
from app.services.common.llm_client import load_prompt
from app.services.common.sse import SSEDecoder, DONE_SENTINEL

logger = logging.getLogger("ai.assistant")

SYSTEM_PROMPT = load_prompt("assistant/navigation.prompt.txt")
UPSTREAM_TIMEOUT = (10, 120)  # connect, read


class AssistantGatewayError(MarketplaceError):
    def __init__(self, message: str, status_code: int = 500):
        super().__init__(message)
        self.status_code = status_code


def build_payload(messages: list[dict[str, str]]) -> dict:
    history = [m for m in messages if m.get("role") != "system"]
    return {
        "model": settings.ASSISTANT_MODEL,
        "messages": [{"role": "system", "content": SYSTEM_PROMPT}, *history],
        "stream": True,
    }


def open_stream(messages: list[dict[str, str]]) -> requests.Response:
    """Start the upstream request; HTTP errors are mapped before any byte is streamed."""
    if not settings.OPENAI_API_KEY:
        raise AssistantGatewayError("AI assistant is not configured", 500)

    try:
        response = requests.post(
            settings.AI_GATEWAY_URL,
            headers={
                "Authorization": f"Bearer {settings.OPENAI_API_KEY}",
                "Content-Type": "application/json",
            },
            json=build_payload(messages),
            stream=True,
            timeout=UPSTREAM_TIMEOUT,
        )
    except requests.RequestException as e:
        logger.error("AI gateway unreachable: %s", e)
        raise AssistantGatewayError("AI gateway error", 500) from e

    if response.status_code == 429:
        response.close()
        raise AssistantGatewayError("Rate limits exceeded, please try again later.", 429)
    if response.status_code == 402:
        response.close()
        raise AssistantGatewayError("Payment required, please add funds to your workspace.", 402)
    if not response.ok:
        logger.error("AI gateway error: %s %s", response.status_code, response.text[:500])
        response.close()
        raise AssistantGatewayError("AI gateway error", 500)
    return response


def _frame(content: str) -> str:
    return "data: " + json.dumps({"choices": [{"delta": {"content": content}}]}) + "\n\n"


def relay(response: requests.Response) -> Iterator[str]:
    """Re-emit upstream content deltas in arrival order, then the [DONE] frame."""
    decoder = SSEDecoder()
    chunks = 0
    try:
        for content in decoder.iter_content(response.iter_content(chunk_size=None)):
            chunks += 1
            yield _frame(content)
    except requests.RequestException as e:
        logger.error("AI stream interrupted after %d chunks: %s", chunks, e)
    finally:
        response.close()
    logger.debug("Assistant relayed %d chunks", chunks)
    yield f"data: {DONE_SENTINEL}\n\n"


def chat_stream(messages: list[dict[str, str]]) -> Iterator[str]:
    return relay(open_stream(messages))
