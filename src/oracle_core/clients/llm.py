"""OpenAI-compatible chat completion client."""

from __future__ import annotations

import httpx

from oracle_core.clients.base import HttpClient


class ChatCompletionClient(HttpClient):
    """Minimal ``/chat/completions`` client for single-prompt completions."""

    timeout = 60.0

    def __init__(
        self,
        api_key: str,
        model_id: str = "gpt-4",
        api_endpoint: str = "https://api.openai.com/v1",
        max_tokens: int = 200,
        temperature: float = 0.85,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        super().__init__(api_endpoint, transport)
        self.api_key = api_key
        self.model_id = model_id
        self.max_tokens = max_tokens
        self.temperature = temperature

    @staticmethod
    def _raise_for_status_with_context(response: httpx.Response) -> None:
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            detail = response.text.strip()
            try:
                body = response.json()
                if isinstance(body, dict) and isinstance(body.get("error"), dict):
                    detail = body["error"].get("message") or detail
            except ValueError:
                pass
            raise RuntimeError(
                f"LLM API request failed ({response.status_code}): {detail[:400]}"
            ) from exc

    async def complete(self, prompt: str) -> str:
        """Send *prompt* as the system message and return the trimmed reply text.

        Raises RuntimeError on HTTP errors and ValueError if the response has
        no message content.
        """
        http = await self._get_http()
        resp = await http.post(
            f"{self.base_url}/chat/completions",
            headers={"Authorization": f"Bearer {self.api_key}"},
            json={
                "model": self.model_id,
                "messages": [{"role": "system", "content": prompt}],
                "max_tokens": self.max_tokens,
                "temperature": self.temperature,
            },
        )
        self._raise_for_status_with_context(resp)
        body = resp.json()
        try:
            content = body["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as e:
            raise ValueError(f"LLM response has no message content: {e}") from e
        if not isinstance(content, str):
            raise ValueError("LLM response content is not text")
        return content.strip()
