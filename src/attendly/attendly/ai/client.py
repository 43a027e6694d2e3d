from __future__ import annotations

import json
import logging
import re
from typing import Any, Optional, Protocol

import httpx

from ..core.exceptions import ExtractionError

logger = logging.getLogger(__name__)

GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/models"
_DATA_URI = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+);base64,(?P<data>.+)$", re.DOTALL)


def split_data_uri(data_uri: str) -> tuple[str, str]:
    """'data:<mime>;base64,<payload>' -> (mime, payload)."""
    m = _DATA_URI.match((data_uri or "").strip())
    if not m:
        raise ExtractionError("Expected a base64 data URI ('data:<mimetype>;base64,<data>')")
    return m.group("mime"), m.group("data")


class LLMClient(Protocol):
    def generate_json(self, prompt: str, *, media_data_uri: Optional[str] = None) -> Any:
        """Run a prompt (optionally with an attached image/document) and return parsed JSON."""

        raise NotImplementedError


class GeminiClient(LLMClient):
    """Gemini `generateContent` over REST in JSON response mode."""

    def __init__(
        self,
        *,
        api_key: str,
        model: str = "gemini-2.5-flash",
        timeout: float = 25.0,
        temperature: float = 0.2,
        http_client: Optional[httpx.Client] = None,
    ):
        self._api_key = api_key
        self._url = f"{GEMINI_BASE_URL}/{model}:generateContent"
        self._temperature = temperature
        self._timeout = httpx.Timeout(timeout, connect=10.0)
        # an injected client is owned by the caller; otherwise one is opened per request
        self._http = http_client

    def _body(self, prompt: str, media_data_uri: Optional[str]) -> dict:
        parts: list[dict] = [{"text": prompt}]
        if media_data_uri:
            mime, data = split_data_uri(media_data_uri)
            parts.append({"inline_data": {"mime_type": mime, "data": data}})
        return {
            "generationConfig": {"temperature": self._temperature, "responseMimeType": "application/json"},
            "contents": [{"role": "user", "parts": parts}],
        }

    def _post(self, client: httpx.Client, body: dict) -> Any:
        r = client.post(self._url, params={"key": self._api_key}, json=body)
        r.raise_for_status()
        return r.json()

    def generate_json(self, prompt: str, *, media_data_uri: Optional[str] = None) -> Any:
        body = self._body(prompt, media_data_uri)
        try:
            if self._http is not None:
                data = self._post(self._http, body)
            else:
                with httpx.Client(timeout=self._timeout) as client:
                    data = self._post(client, body)
        except httpx.HTTPError as e:
            logger.error("Gemini request failed: %s", e)
            raise ExtractionError("The AI service is unavailable, please try again later") from e

        logger.debug("Gemini raw response: %s", json.dumps(data, ensure_ascii=False)[:2000])

        try:
            text = "".join(p.get("text", "") for p in data["candidates"][0]["content"]["parts"])
        except (KeyError, IndexError, TypeError) as e:
            raise ExtractionError("The AI service returned an empty answer") from e

        try:
            return json.loads(_strip_fences(text))
        except json.JSONDecodeError as e:
            raise ExtractionError("The AI service returned invalid JSON") from e


def _strip_fences(text: str) -> str:
    text = text.strip()
    if text.startswith("```"):
        text = re.sub(r"^```(?:json)?\s*", "", text)
        text = re.sub(r"\s*```$", "", text)
    return text
