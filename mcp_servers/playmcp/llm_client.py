"""
Minimal OpenAI-compatible chat-completions client.

Used by the scanner's insight generator. Only JSON-mode completions are
needed: the caller sends a prompt and gets back a parsed JSON object.
"""

from __future__ import annotations

import json
import logging
from typing import Any

import aiohttp

from .errors import LLMClientError

logger = logging.getLogger("mcp.playmcp.llm")


class ChatCompletionClient:
    """POST {base_url}/chat/completions over a lazily created aiohttp session."""

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        base_url: str = "https://api.openai.com/v1",
        timeout: float = 60.0,
    ) -> None:
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session: aiohttp.ClientSession | None = None

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create HTTP session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=self.timeout))
        return self._session

    async def close(self) -> None:
        """Close the HTTP session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self) -> ChatCompletionClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    def _headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.api_key}", "Content-Type": "application/json"}

    async def complete(
        self,
        prompt: str,
        max_tokens: int = 800,
        temperature: float = 0.3,
        json_mode: bool = False,
    ) -> str:
        """Single-turn completion; returns the assistant message text."""
        payload: dict[str, Any] = {
            "model": self.model,
            "messages": [{"role": "user", "content": prompt}],
            "temperature": temperature,
            "max_tokens": max_tokens,
        }
        if json_mode:
            payload["response_format"] = {"type": "json_object"}

        session = await self._get_session()
        try:
            async with session.post(
                f"{self.base_url}/chat/completions",
                headers=self._headers(),
                json=payload,
            ) as response:
                if response.status != 200:
                    error_text = await response.text()
                    raise LLMClientError(f"Chat completion error: {response.status} - {error_text[:300]}")
                data = await response.json()
        except (aiohttp.ClientError, ValueError) as e:
            logger.error("chat completion request failed: %s", e)
            raise LLMClientError(f"Chat completion request failed: {e}") from e

        try:
            content = data["choices"][0]["message"].get("content") or ""
        except (KeyError, IndexError, TypeError, AttributeError) as e:
            raise LLMClientError("Chat completion response has no message content") from e
        logger.debug("completion model=%s usage=%s", data.get("model", self.model), data.get("usage"))
        return content

    async def complete_json(self, prompt: str, max_tokens: int = 800, temperature: float = 0.3) -> dict[str, Any]:
        """JSON-mode completion parsed into a dict."""
        content = await self.complete(prompt, max_tokens=max_tokens, temperature=temperature, json_mode=True)
        try:
            parsed = json.loads(content)
        except json.JSONDecodeError as e:
            raise LLMClientError(f"Model returned invalid JSON: {e}") from e
        if not isinstance(parsed, dict):
            raise LLMClientError("Model returned JSON that is not an object")
        return parsed
