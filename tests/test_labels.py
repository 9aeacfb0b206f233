import logging
import pytest
from app.services.labels import LabelSuggester, build_prompt, parse_label
from fakes import FakeOpenAI, rate_limit_error, server_error, timeout_error


@pytest.mark.parametrize("text,expected", [
    ("work", "work"),
    ("Work \n", "work"),
    ("  SHOPPING", "shopping"),
    ("home\nbecause it is a chore", "home"),
    ("urgent", None),
    ("", None),
    ("   ", None),
    (None, None),
    ("work stuff", None),
    ("work.", None),
])
def test_parse_label(text, expected):
    assert parse_label(text) == expected


def test_prompt_lists_the_vocabulary():
    prompt = build_prompt("Buy milk", None)
    assert '"Buy milk"' in prompt
    assert "work, personal, priority, shopping, home" in prompt
    assert "Reply with just the label word" in prompt


def test_suggest_issues_single_constrained_call():
    client = FakeOpenAI(reply="Personal")
    suggester = LabelSuggester(client, model="gpt-4o-mini", temperature=0.3, max_tokens=16)

    assert suggester.suggest("Call mom", "birthday") == "personal"
    assert len(client.calls) == 1
    params = client.calls[0]
    assert params["model"] == "gpt-4o-mini"
    assert params["temperature"] == 0.3
    assert params["max_tokens"] == 16
    assert params["messages"][0]["role"] == "user"
    assert "Call mom" in params["messages"][0]["content"]
    assert "birthday" in params["messages"][0]["content"]


def test_suggest_discards_unknown_label():
    assert LabelSuggester(FakeOpenAI(reply="urgent")).suggest("x") is None


def test_disabled_suggester_never_calls():
    client = FakeOpenAI(reply="work")
    suggester = LabelSuggester(client, enabled=False)
    assert suggester.enabled is False
    assert suggester.suggest("x") is None
    assert client.calls == []


def test_suggester_without_client_is_disabled():
    suggester = LabelSuggester(None)
    assert suggester.enabled is False
    assert suggester.suggest("x") is None


def test_rate_limit_is_swallowed_and_logged_as_quota(caplog):
    suggester = LabelSuggester(FakeOpenAI(error=rate_limit_error()))
    with caplog.at_level(logging.WARNING, logger="app.services.labels"):
        assert suggester.suggest("x") is None
    assert any(r.levelno == logging.WARNING and "quota" in r.getMessage() for r in caplog.records)
    assert not any(r.levelno >= logging.ERROR for r in caplog.records)


@pytest.mark.parametrize("error", [server_error(), timeout_error(), ValueError("malformed")])
def test_provider_errors_are_swallowed_and_logged(caplog, error):
    suggester = LabelSuggester(FakeOpenAI(error=error))
    with caplog.at_level(logging.WARNING, logger="app.services.labels"):
        assert suggester.suggest("x") is None
    assert any(r.levelno == logging.ERROR and "OpenAI error" in r.getMessage() for r in caplog.records)


def test_call_parameters_default_to_config(monkeypatch):
    import app.config
    monkeypatch.setattr(app.config, "OPENAI_MODEL", "gpt-test-mini")
    monkeypatch.setattr(app.config, "LABEL_TEMPERATURE", 0.1)
    monkeypatch.setattr(app.config, "LABEL_MAX_TOKENS", 4)
    client = FakeOpenAI(reply="home")

    assert LabelSuggester(client).suggest("Fix the sink") == "home"
    params = client.calls[0]
    assert params["model"] == "gpt-test-mini"
    assert params["temperature"] == 0.1
    assert params["max_tokens"] == 4
