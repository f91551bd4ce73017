import pytest
import requests

from footcare import chat_chain, dialogue


class FakeResponse:
    def __init__(self, data, status=200):
        self.data = data
        self.status = status

    def raise_for_status(self):
        if self.status >= 400:
            raise requests.HTTPError(f"status {self.status}")

    def json(self):
        return self.data


@pytest.fixture
def live_mode(monkeypatch):
    monkeypatch.setattr(chat_chain, "OPENAI_API_KEY", "sk-test")


@pytest.fixture
def captured(monkeypatch):
    calls = []

    def respond(content):
        def fake_post(url, json=None, headers=None, timeout=None):
            calls.append({"url": url, "json": json, "headers": headers})
            return FakeResponse({"choices": [{"message": {"content": content}}]})

        monkeypatch.setattr(chat_chain.requests, "post", fake_post)
        return calls

    return respond


@pytest.mark.parametrize("key", [None, "", "demo-key"])
def test_demo_mode_without_real_key(monkeypatch, key):
    monkeypatch.setattr(chat_chain, "OPENAI_API_KEY", key)

    reply, demo = chat_chain.generate_reply([{"role": "user", "content": "hi"}])

    assert demo is True
    assert reply == dialogue.GREETING


def test_live_mode_prefixes_system_prompt(live_mode, captured):
    calls = captured("How long has it hurt?")
    messages = [
        {"role": "assistant", "content": "Hello"},
        {"role": "user", "content": "Jane"},
    ]

    reply, demo = chat_chain.generate_reply(messages)

    assert (reply, demo) == ("How long has it hurt?", False)
    payload = calls[0]["json"]
    assert calls[0]["url"].endswith("/chat/completions")
    assert calls[0]["headers"]["Authorization"] == "Bearer sk-test"
    assert payload["messages"][0] == {"role": "system", "content": chat_chain.SYSTEM_PROMPT}
    assert payload["messages"][1:] == messages
    assert payload["temperature"] == 0.7
    assert payload["max_tokens"] == 500


def test_live_mode_empty_content_uses_apology(live_mode, captured):
    captured("")

    reply, demo = chat_chain.generate_reply([{"role": "user", "content": "hi"}])

    assert reply == chat_chain.EMPTY_REPLY
    assert demo is False


def test_live_mode_errors_propagate(live_mode, monkeypatch):
    monkeypatch.setattr(
        chat_chain.requests, "post", lambda *a, **kw: FakeResponse({}, status=503)
    )

    with pytest.raises(requests.HTTPError):
        chat_chain.generate_reply([{"role": "user", "content": "hi"}])


def test_timeout_read_from_env(monkeypatch):
    monkeypatch.setenv("LLM_TIMEOUT", "12.5")
    assert chat_chain._timeout_from_env() == 12.5

    monkeypatch.delenv("LLM_TIMEOUT")
    assert chat_chain._timeout_from_env() is None


def test_bad_timeout_names_the_variable(monkeypatch):
    monkeypatch.setenv("LLM_TIMEOUT", "soon")

    with pytest.raises(RuntimeError, match="LLM_TIMEOUT"):
        chat_chain._timeout_from_env()
