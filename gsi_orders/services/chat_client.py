# gsi_orders/services/chat_client.py
import json
from typing import Dict, Iterator, List

import requests

from gsi_orders.utils.retry import http_retry
from gsi_orders.utils.settings import OPENAI_API_KEY, OPENAI_BASE_URL, CHATBOT_MODEL
from gsi_orders.utils.logging import get_logger

logger = get_logger(__name__)


class ChatClient:
    """Chat completions over plain HTTP (OpenAI compatible API)."""

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        model: str | None = None,
        timeout: int = 30,
    ):
        self.api_key = api_key if api_key is not None else OPENAI_API_KEY
        self.base_url = (base_url or OPENAI_BASE_URL).rstrip("/")
        self.model = model or CHATBOT_MODEL
        self.timeout = timeout

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    def _request(self, messages: List[Dict[str, str]], max_tokens: int, temperature: float, stream: bool) -> dict:
        return {
            "model": self.model,
            "messages": messages,
            "max_tokens": max_tokens,
            "temperature": temperature,
            "stream": stream,
        }

    @property
    def _headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.api_key}", "Content-Type": "application/json"}

    @http_retry()
    def complete(self, messages: List[Dict[str, str]], max_tokens: int = 500, temperature: float = 0.7) -> str:
        url = f"{self.base_url}/chat/completions"
        logger.info(f"ChatClient POST {url} ({self.model})")

        resp = requests.post(
            url,
            headers=self._headers,
            json=self._request(messages, max_tokens, temperature, stream=False),
            timeout=self.timeout,
        )
        resp.raise_for_status()

        choices = resp.json().get("choices") or []
        if not choices:
            return ""
        return (choices[0].get("message") or {}).get("content") or ""

    @http_retry()
    def _open_stream(self, messages: List[Dict[str, str]], max_tokens: int, temperature: float) -> requests.Response:
        url = f"{self.base_url}/chat/completions"
        logger.info(f"ChatClient POST {url} ({self.model}, stream)")

        resp = requests.post(
            url,
            headers=self._headers,
            json=self._request(messages, max_tokens, temperature, stream=True),
            timeout=self.timeout,
            stream=True,
        )
        resp.raise_for_status()
        return resp

    def stream(self, messages: List[Dict[str, str]], max_tokens: int = 500, temperature: float = 0.7) -> Iterator[str]:
        """
        Yield content deltas as they arrive.
        The request is sent on the first next(), HTTP errors surface there.
        """
        resp = self._open_stream(messages, max_tokens, temperature)
        try:
            for line in resp.iter_lines(decode_unicode=True):
                if not line or not line.startswith("data:"):
                    continue
                data = line[len("data:"):].strip()
                if data == "[DONE]":
                    break
                chunk = json.loads(data)
                choices = chunk.get("choices") or []
                if not choices:
                    continue
                content = (choices[0].get("delta") or {}).get("content")
                if content:
                    yield content
        finally:
            resp.close()
