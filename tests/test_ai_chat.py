import pytest
from app.dependencies import get_llm_client
from app.main import app
from fakes import FakeOpenAI, auth_header, rate_limit_error, register_and_login


@pytest.fixture
def token(client):
    return register_and_login(client)


@pytest.fixture
def llm():
    fake = FakeOpenAI(reply="Hello there")
    app.dependency_overrides[get_llm_client] = lambda: fake
    return fake


def test_prompt_becomes_single_user_message(client, token, llm):
    r = client.post("/ai/chat", json={"prompt": "Say hi", "temperature": 0.2}, headers=auth_header(token))
    assert r.status_code == 200
    body = r.json()
    assert body["content"] == "Hello there"
    assert body["model"] == "gpt-4o-mini"
    assert body["finish_reason"] == "stop"
    assert body["usage"]["total_tokens"] == 13

    params = llm.calls[0]
    assert params["messages"] == [{"role": "user", "content": "Say hi"}]
    assert params["temperature"] == 0.2
    assert params["model"] == "gpt-4o-mini"


def test_messages_are_forwarded_with_default_temperature(client, token, llm):
    messages = [
        {"role": "system", "content": "You are a helpful assistant."},
        {"role": "user", "content": "Plan my week"},
    ]
    r = client.post("/ai/chat", json={"messages": messages, "max_tokens": 50}, headers=auth_header(token))
    assert r.status_code == 200
    params = llm.calls[0]
    assert params["messages"] == messages
    assert params["temperature"] == 0.7
    assert params["max_tokens"] == 50


def test_requires_authentication(client, llm):
    r = client.post("/ai/chat", json={"prompt": "hi"})
    assert r.status_code == 400
    r = client.post("/ai/chat", json={"prompt": "hi"}, headers=auth_header("nope"))
    assert r.status_code == 401
    assert llm.calls == []


def test_requires_messages_or_prompt(client, token, llm):
    r = client.post("/ai/chat", json={}, headers=auth_header(token))
    assert r.status_code == 400
    assert "messages" in r.json()["error"]

    r = client.post("/ai/chat", json={"messages": []}, headers=auth_header(token))
    assert r.status_code == 400
    assert r.json() == {"error": "Invalid messages format"}


def test_unconfigured_provider(client, token):
    # no API key in the test environment
    r = client.post("/ai/chat", json={"prompt": "hi"}, headers=auth_header(token))
    assert r.status_code == 500
    assert r.json() == {"error": "OpenAI API key not configured"}


def test_provider_error_status_is_propagated(client, token, llm):
    llm.error = rate_limit_error()
    r = client.post("/ai/chat", json={"prompt": "hi"}, headers=auth_header(token))
    assert r.status_code == 429
    body = r.json()
    assert "quota" in body["error"]
    assert body["code"] == "insufficient_quota"
    assert body["type"] == "insufficient_quota"


def test_empty_completion(client, token, llm):
    llm.reply = ""
    r = client.post("/ai/chat", json={"prompt": "hi"}, headers=auth_header(token))
    assert r.status_code == 500
    assert r.json() == {"error": "No response from OpenAI"}
