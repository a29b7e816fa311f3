import json

import pytest
import requests

from app.core.config import settings
from app.services import assistant_service
from app.services.common.sse import SSEDecoder, collect_text, format_event


def delta(content):
    return "data: " + json.dumps({"choices": [{"delta": {"content": content}}]}) + "\n"


class FakeResponse:
    def __init__(self, status_code=200, chunks=(), text=""):
        self.status_code = status_code
        self.ok = 200 <= status_code < 400
        self.text = text
        self.closed = False
        self._chunks = list(chunks)

    def iter_content(self, chunk_size=None):
        yield from self._chunks

    def close(self):
        self.closed = True


def test_decoder_joins_partial_lines():
    line = delta("Hello")
    decoder = SSEDecoder()
    assert decoder.feed(line[:10]) == []
    assert decoder.feed(line[10:].encode()) == ["Hello"]


def test_decoder_skips_noise_and_stops_at_done():
    chunks = [
        ": keep-alive\n",
        "\n",
        "event: ping\n",
        delta("Go to ").replace("\n", "\r\n"),
        "data: {not json}\n",
        "data: {\"choices\": []}\n",
        delta("Saved Jobs"),
        "data: [DONE]\n",
        delta("ignored"),
    ]
    assert collect_text(chunks) == "Go to Saved Jobs"


def test_decoder_ignores_input_after_done():
    decoder = SSEDecoder()
    decoder.feed("data: [DONE]\n")
    assert decoder.done is True
    assert decoder.feed(delta("late")) == []


def test_decoder_keeps_multibyte_text_split_across_chunks():
    raw = ("data: " + json.dumps({"choices": [{"delta": {"content": "שלום"}}]}, ensure_ascii=False) + "\n").encode()
    cut = raw.index("ש".encode()) + 1  # inside the first 2-byte character
    decoder = SSEDecoder()
    assert decoder.feed(raw[:cut]) == []
    assert decoder.feed(raw[cut:]) == ["שלום"]


def test_relay_keeps_multibyte_text_split_across_chunks():
    raw = ("data: " + json.dumps({"choices": [{"delta": {"content": "é"}}]}, ensure_ascii=False) + "\n").encode()
    cut = raw.index("é".encode()) + 1
    frames = list(assistant_service.relay(FakeResponse(chunks=[raw[:cut], raw[cut:], b"data: [DONE]\n"])))
    assert json.loads(frames[0][len("data: "):])["choices"][0]["delta"]["content"] == "é"
    assert frames[-1] == "data: [DONE]\n\n"


def test_format_event():
    assert format_event({"a": 1}) == 'data: {"a": 1}\n\n'
    assert format_event("hi", event="ready") == "event: ready\ndata: hi\n\n"


def test_build_payload_replaces_system_messages():
    payload = assistant_service.build_payload([
        {"role": "system", "content": "ignore me"},
        {"role": "user", "content": "Where are my invitations?"},
    ])
    assert payload["stream"] is True
    assert payload["messages"][0] == {"role": "system", "content": assistant_service.SYSTEM_PROMPT}
    assert payload["messages"][1:] == [{"role": "user", "content": "Where are my invitations?"}]


@pytest.fixture
def gateway(monkeypatch):
    monkeypatch.setattr(settings, "OPENAI_API_KEY", "sk-test")
    state = {"response": FakeResponse(), "calls": []}

    def fake_post(url, **kwargs):
        state["calls"].append((url, kwargs))
        return state["response"]

    monkeypatch.setattr(assistant_service.requests, "post", fake_post)
    return state


CHAT = {"messages": [{"role": "user", "content": "How do I post a job?"}]}


def test_chat_relays_stream(client, gateway):
    gateway["response"] = FakeResponse(chunks=[delta("Open ").encode(), delta("Post Job").encode(), b"data: [DONE]\n"])
    r = client.post("/assistant/chat", json=CHAT)
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/event-stream")

    frames = [f for f in r.text.split("\n\n") if f]
    assert frames[-1] == "data: [DONE]"
    contents = [json.loads(f[len("data: "):])["choices"][0]["delta"]["content"] for f in frames[:-1]]
    assert contents == ["Open ", "Post Job"]
    assert gateway["response"].closed is True

    url, kwargs = gateway["calls"][0]
    assert url == settings.AI_GATEWAY_URL
    assert kwargs["headers"]["Authorization"] == "Bearer sk-test"
    assert kwargs["stream"] is True


@pytest.mark.parametrize("status,expected,detail", [
    (429, 429, "Rate limits exceeded, please try again later."),
    (402, 402, "Payment required, please add funds to your workspace."),
    (503, 500, "AI gateway error"),
])
def test_chat_maps_gateway_errors(client, gateway, status, expected, detail):
    gateway["response"] = FakeResponse(status_code=status, text="upstream said no")
    r = client.post("/assistant/chat", json=CHAT)
    assert r.status_code == expected
    assert r.json() == {"detail": detail}
    assert gateway["response"].closed is True


def test_chat_unreachable_gateway(client, gateway, monkeypatch):
    def boom(url, **kwargs):
        raise requests.ConnectionError("refused")

    monkeypatch.setattr(assistant_service.requests, "post", boom)
    r = client.post("/assistant/chat", json=CHAT)
    assert r.status_code == 500
    assert r.json() == {"detail": "AI gateway error"}


def test_chat_not_configured(client):
    r = client.post("/assistant/chat", json=CHAT)
    assert r.status_code == 500
    assert r.json() == {"detail": "AI assistant is not configured"}


def test_chat_requires_messages(client):
    assert client.post("/assistant/chat", json={"messages": []}).status_code == 422
