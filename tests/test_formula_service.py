import pytest
from openai import OpenAIError

from formula_pad.services import formula_service
from formula_pad.services.formula_service import (
    EmptyModelResponseError,
    GatewayConfigError,
    ModelProviderError,
    build_messages,
    to_latex,
)
from formula_pad.utils.prompt_utils import ERROR_MARKER

from conftest import FakeOpenAI


@pytest.fixture
def fake_openai(monkeypatch):
    fake = FakeOpenAI(content="x^{2}+1")
    monkeypatch.setattr(formula_service, "_get_client", lambda: fake)
    return fake


def test_returns_first_choice_verbatim(fake_openai, png_data_url):
    fake_openai.content = "  \\frac{a}{b}\n"
    assert to_latex(png_data_url, model="gpt-4o", language="english") == "  \\frac{a}{b}\n"


def test_sends_single_turn_multimodal_request(fake_openai, png_data_url):
    to_latex(png_data_url, model="gpt-4o-mini", language="japanese")

    assert len(fake_openai.requests) == 1
    req = fake_openai.requests[0]
    assert req["model"] == "gpt-4o-mini"
    system, user = req["messages"]
    assert system["role"] == "system"
    assert "japanese" in system["content"]
    assert ERROR_MARKER in system["content"]
    assert user["role"] == "user"
    assert user["content"] == [{"type": "image_url", "image_url": {"url": png_data_url}}]


def test_error_marker_reply_is_not_interpreted(fake_openai, png_data_url):
    fake_openai.content = "ERROR:判読できません"
    assert to_latex(png_data_url, model="gpt-4o", language="japanese") == "ERROR:判読できません"


@pytest.mark.parametrize("content", [None, ""])
def test_empty_reply_raises(fake_openai, png_data_url, content):
    fake_openai.content = content
    with pytest.raises(EmptyModelResponseError):
        to_latex(png_data_url, model="gpt-4o", language="english")


def test_sdk_error_becomes_provider_error(fake_openai, png_data_url):
    fake_openai.error = OpenAIError("rate limited")
    with pytest.raises(ModelProviderError) as info:
        to_latex(png_data_url, model="gpt-4o", language="english")
    assert isinstance(info.value.__cause__, OpenAIError)


def test_missing_api_key(monkeypatch, png_data_url):
    monkeypatch.setattr(formula_service, "OPENAI_API_KEY", "")
    with pytest.raises(GatewayConfigError):
        to_latex(png_data_url, model="gpt-4o", language="english")


def test_client_uses_configured_endpoint(monkeypatch):
    created = {}

    def fake_ctor(**kwargs):
        created.update(kwargs)
        return FakeOpenAI()

    monkeypatch.setattr(formula_service, "OPENAI_API_KEY", "sk-test")
    monkeypatch.setattr(formula_service, "OPENAI_BASE_URL", "https://llm.example/v1")
    monkeypatch.setattr(formula_service, "OpenAI", fake_ctor)
    formula_service._get_client()
    assert created["api_key"] == "sk-test"
    assert created["base_url"] == "https://llm.example/v1"


def test_prompt_forbids_delimiters():
    system = build_messages("data:image/png;base64,AA==", "english")[0]["content"]
    assert "$...$" in system
    assert "\\[...\\]" in system
