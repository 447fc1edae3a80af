"""JSON-mode clients for the generative models behind analysis, scoring
and summaries.

Both clients expose ``generate_json(system_prompt, prompt)`` and return the
decoded JSON value.  Transport and API failures raise ``ProviderError``;
a reply that is not valid JSON raises ``MalformedPayloadError``.  Schema
validation of the decoded value is left to the caller.
"""

import json
import logging
from typing import Any

import httpx
import openai
from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from .errors import MalformedPayloadError, ProviderError

logger = logging.getLogger(__name__)


def parse_json_text(text: str | None, capability: str) -> Any:
    """Decode a model reply, tolerating a surrounding markdown code fence."""
    cleaned = (text or "").strip()
    if cleaned.startswith("```"):
        cleaned = cleaned.split("\n", 1)[1] if "\n" in cleaned else ""
        if cleaned.rstrip().endswith("```"):
            cleaned = cleaned.rstrip()[:-3]
    if not cleaned.strip():
        raise MalformedPayloadError(capability, "empty response")
    try:
        return json.loads(cleaned)
    except ValueError as exc:
        raise MalformedPayloadError(capability, f"invalid JSON: {exc}") from exc


class GeminiJsonModel:
    """Gemini ``generate_content`` in JSON response mode."""

    def __init__(self, client: genai.Client, model: str, temperature: float = 0.2):
        self.client = client
        self.model = model
        self.temperature = temperature

    @property
    def name(self) -> str:
        return f"gemini:{self.model}"

    async def generate_json(
        self, system_prompt: str, prompt: str, temperature: float | None = None,
    ) -> Any:
        temperature = self.temperature if temperature is None else temperature
        try:
            response = await self.client.aio.models.generate_content(
                model=self.model,
                contents=f"{system_prompt}\n\n{prompt}",
                config=types.GenerateContentConfig(
                    temperature=temperature,
                    response_mime_type="application/json",
                ),
            )
        except (genai_errors.APIError, httpx.HTTPError) as exc:
            raise ProviderError(self.name, f"generate_content failed: {exc}") from exc
        return parse_json_text(response.text, self.name)


class OpenAIJsonModel:
    """OpenAI chat completions with ``json_object`` response format."""

    def __init__(self, client: openai.AsyncOpenAI, model: str = "gpt-4o", temperature: float = 0.1):
        self.client = client
        self.model = model
        self.temperature = temperature

    @property
    def name(self) -> str:
        return f"openai:{self.model}"

    async def generate_json(
        self, system_prompt: str, prompt: str, temperature: float | None = None,
    ) -> Any:
        temperature = self.temperature if temperature is None else temperature
        try:
            completion = await self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": prompt},
                ],
                temperature=temperature,
                response_format={"type": "json_object"},
            )
        except openai.OpenAIError as exc:
            raise ProviderError(self.name, f"chat completion failed: {exc}") from exc
        if not completion.choices:
            raise MalformedPayloadError(self.name, "no choices in completion")
        return parse_json_text(completion.choices[0].message.content, self.name)
