"""Tests for the JSON-mode model clients."""

from types import SimpleNamespace

import openai
import pytest

from .errors import MalformedPayloadError, ProviderError
from .llm import GeminiJsonModel, OpenAIJsonModel, parse_json_text


class TestParseJsonText:
    def test_plain_json(self):
        assert parse_json_text('{"a": 1}', "test") == {"a": 1}

    def test_fenced_json(self):
        assert parse_json_text('```json\n[1, 2]\n```', "test") == [1, 2]

    def test_bare_fence(self):
        assert parse_json_text('```\n{"ok": true}\n```\n', "test") == {"ok": True}

    @pytest.mark.parametrize("text", [None, "", "   ", "```\n```", "not json", "{'single': 1}"])
    def test_malformed(self, text):
        with pytest.raises(MalformedPayloadError):
            parse_json_text(text, "test")


# ---------------------------------------------------------------------------
# Gemini
# ---------------------------------------------------------------------------

class FakeGeminiModels:
    def __init__(self, text=None, error=None):
        self.text = text
        self.error = error
        self.calls: list[dict] = []

    async def generate_content(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return SimpleNamespace(text=self.text)


def gemini_client(models: FakeGeminiModels):
    return SimpleNamespace(aio=SimpleNamespace(models=models))


class TestGeminiJsonModel:
    @pytest.mark.asyncio
    async def test_json_mode_request(self):
        models = FakeGeminiModels('{"headline": "x"}')
        model = GeminiJsonModel(gemini_client(models), "gemini-2.5-flash", temperature=0.2)

        assert await model.generate_json("SYSTEM", "PROMPT", temperature=0.7) == {"headline": "x"}

        call = models.calls[0]
        assert call["model"] == "gemini-2.5-flash"
        assert call["contents"] == "SYSTEM\n\nPROMPT"
        assert call["config"].response_mime_type == "application/json"
        assert call["config"].temperature == 0.7

    @pytest.mark.asyncio
    async def test_default_temperature(self):
        models = FakeGeminiModels("[]")
        await GeminiJsonModel(gemini_client(models), "m", temperature=0.2).generate_json("s", "p")
        assert models.calls[0]["config"].temperature == 0.2

    @pytest.mark.asyncio
    async def test_invalid_reply(self):
        model = GeminiJsonModel(gemini_client(FakeGeminiModels("sorry, no")), "m")
        with pytest.raises(MalformedPayloadError):
            await model.generate_json("s", "p")

    def test_name(self):
        assert GeminiJsonModel(gemini_client(FakeGeminiModels()), "gemini-2.5-pro").name == "gemini:gemini-2.5-pro"


# ---------------------------------------------------------------------------
# OpenAI
# ---------------------------------------------------------------------------

class FakeCompletions:
    def __init__(self, content=None, error=None, choices=True):
        self.content = content
        self.error = error
        self.choices = choices
        self.calls: list[dict] = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        if not self.choices:
            return SimpleNamespace(choices=[])
        return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=self.content))])


def openai_client(completions: FakeCompletions):
    return SimpleNamespace(chat=SimpleNamespace(completions=completions))


class TestOpenAIJsonModel:
    @pytest.mark.asyncio
    async def test_json_object_request(self):
        completions = FakeCompletions('{"headline": "y"}')
        model = OpenAIJsonModel(openai_client(completions))

        assert await model.generate_json("SYSTEM", "PROMPT") == {"headline": "y"}

        call = completions.calls[0]
        assert call["model"] == "gpt-4o"
        assert call["response_format"] == {"type": "json_object"}
        assert call["temperature"] == 0.1
        assert call["messages"] == [
            {"role": "system", "content": "SYSTEM"},
            {"role": "user", "content": "PROMPT"},
        ]

    @pytest.mark.asyncio
    async def test_api_error_is_provider_error(self):
        completions = FakeCompletions(error=openai.OpenAIError("quota exceeded"))
        with pytest.raises(ProviderError):
            await OpenAIJsonModel(openai_client(completions)).generate_json("s", "p")

    @pytest.mark.asyncio
    async def test_no_choices(self):
        completions = FakeCompletions(choices=False)
        with pytest.raises(MalformedPayloadError):
            await OpenAIJsonModel(openai_client(completions)).generate_json("s", "p")
