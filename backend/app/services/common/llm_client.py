# app/services/common/llm_client.py
"""LLM access for structured extraction (Post-Job autofill).

Two providers:
  - Ollama (when LLM_CHAT_MODEL is set): /api/chat with format=json.
  - OpenAI or any compatible gateway: chat completions, optionally forcing a
    single function call whose arguments are the JSON object we want.
"""
from __future__ import annotations
import json
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

import requests
from openai import OpenAI, APIConnectionError, APIStatusError, RateLimitError

from app.core.config import settings

logger = logging.getLogger("ai.llm")

PROMPTS_DIR = Path(__file__).resolve().parents[2] / "prompts"
LLM_ERROR_KEY = "__llm_error__"

OLLAMA_OPTIONS: Dict[str, Any] = {"temperature": 0, "seed": 7, "num_ctx": 8192, "num_predict": 2048}

_FENCE_RE = re.compile(r"^\s*```(?:json)?\s*|\s*```\s*$", re.IGNORECASE)


@dataclass
class _JSONResponse:
    """`.data` holds the parsed object; on failure it carries an `__llm_error__` key."""
    data: Dict[str, Any]

    @property
    def error(self) -> Optional[str]:
        return self.data.get(LLM_ERROR_KEY)


def _failed(reason: str) -> _JSONResponse:
    return _JSONResponse(data={LLM_ERROR_KEY: reason})


def load_prompt(relative_path: str) -> str:
    """Read app/prompts/<relative_path>."""
    path = PROMPTS_DIR / relative_path
    if not path.exists():
        raise FileNotFoundError(f"Prompt file not found: {path}")
    return path.read_text(encoding="utf-8")


def parse_json_object(text: str) -> Dict[str, Any]:
    """
    Pull one JSON object out of a model answer.
    Tolerates markdown fences, prose around the object and a one-item list.
    Raises ValueError when no object can be found.
    """
    text = _FENCE_RE.sub("", text or "").strip()
    if not text:
        return {}
    decoder = json.JSONDecoder()
    for start in [0] + [m.start() for m in re.finditer(r"[\[{]", text)]:
        try:
            obj, _ = decoder.raw_decode(text, start)
        except json.JSONDecodeError:
            continue
        if isinstance(obj, list) and len(obj) == 1:
            obj = obj[0]
        if isinstance(obj, dict):
            return obj
    raise ValueError("no JSON object in model output")


class LLMClient:
    def __init__(self, provider: Optional[str] = None, model: Optional[str] = None):
        self.provider = (provider or ("ollama" if settings.LLM_CHAT_MODEL else "openai")).lower()
        if self.provider == "ollama":
            if not settings.OLLAMA_BASE_URL:
                raise ValueError("OLLAMA_BASE_URL is not set")
            self.model = model or settings.LLM_CHAT_MODEL
        elif self.provider == "openai":
            self.model = model or settings.OPENAI_MODEL or settings.ASSISTANT_MODEL
        else:
            raise ValueError(f"Unknown LLM provider: {self.provider}")
        self._openai: Optional[OpenAI] = None
        logger.info("LLM client ready (%s / %s)", self.provider, self.model)

    def chat_json(
        self,
        messages: List[Dict[str, str]],
        *,
        function: Optional[Dict[str, Any]] = None,
        timeout: int = 90,
    ) -> _JSONResponse:
        """
        Run one completion and return its JSON object.
        `function` is an OpenAI tool definition; the OpenAI provider forces that call
        and returns its arguments. Ollama ignores it and relies on the prompt.
        """
        if self.provider == "ollama":
            return self._ollama(messages, timeout)
        return self._openai_chat(messages, function, timeout)

    def _ollama(self, messages: List[Dict[str, str]], timeout: int) -> _JSONResponse:
        url = f"{settings.OLLAMA_BASE_URL.rstrip('/')}/api/chat"
        body = {"model": self.model, "messages": messages, "format": "json", "stream": False, "options": OLLAMA_OPTIONS}
        try:
            resp = requests.post(url, json=body, timeout=timeout)
            resp.raise_for_status()
        except requests.RequestException as e:
            logger.error("Ollama request failed: %s", e)
            return _failed(str(e))
        return self._decode(resp.json().get("message", {}).get("content", ""))

    def _client(self) -> OpenAI:
        if self._openai is None:
            if not settings.OPENAI_API_KEY:
                raise ValueError("OPENAI_API_KEY is not set")
            base_url = settings.AI_GATEWAY_URL.rsplit("/chat/completions", 1)[0]
            self._openai = OpenAI(api_key=settings.OPENAI_API_KEY, base_url=base_url)
        return self._openai

    def _openai_chat(self, messages: List[Dict[str, str]], function: Optional[Dict[str, Any]], timeout: int) -> _JSONResponse:
        kwargs: Dict[str, Any] = {"model": self.model, "messages": messages, "timeout": timeout}
        if function:
            kwargs["tools"] = [{"type": "function", "function": function}]
            kwargs["tool_choice"] = {"type": "function", "function": {"name": function["name"]}}
        else:
            kwargs["response_format"] = {"type": "json_object"}

        try:
            resp = self._client().chat.completions.create(**kwargs)
        except (APIConnectionError, RateLimitError, APIStatusError, ValueError) as e:
            logger.error("OpenAI chat failed: %s", e)
            return _failed(str(e))

        message = resp.choices[0].message
        if function and message.tool_calls:
            return self._decode(message.tool_calls[0].function.arguments)
        return self._decode(message.content or "")

    @staticmethod
    def _decode(raw: str) -> _JSONResponse:
        try:
            return _JSONResponse(data=parse_json_object(raw))
        except ValueError:
            logger.error("Model returned no JSON object: %s", (raw or "")[:300])
            return _failed("json_decode_error")


_default_client: Optional[LLMClient] = None


def get_llm_client() -> LLMClient:
    """Process-wide client, created on first use so imports never need LLM settings."""
    global _default_client
    if _default_client is None:
        _default_client = LLMClient()
    return _default_client
