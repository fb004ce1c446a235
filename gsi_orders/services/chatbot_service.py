# gsi_orders/services/chatbot_service.py
import itertools
import json
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, List

import requests

from gsi_orders.domain.errors import InvalidInput, InternalError, UpstreamError
from gsi_orders.domain.schemas import ChatbotIn
from gsi_orders.services.chat_client import ChatClient
from gsi_orders.utils.settings import APP_ENV
from gsi_orders.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_BRAND = "liquidheaven"
MAX_QUESTION_LENGTH = 1000
MAX_TOKENS = 500
TEMPERATURE = 0.7

BRAND_PROMPTS = {
    "liquidheaven": (
        "You are a helpful customer service assistant for Liquid Heaven, a premium wellness "
        "and CBD products brand. You help customers with product recommendations, usage questions, "
        "and general wellness advice. Be knowledgeable about CBD benefits, wellness practices, "
        "and Liquid Heaven's product line."
    ),
    "motaquila": (
        "You are a helpful customer service assistant for Motaquila, a premium beverage brand. "
        "You help customers with product recommendations, cocktail recipes, and beverage-related "
        "questions. Be knowledgeable about premium spirits, mixology, and Motaquila's product offerings."
    ),
    "lastgenie": (
        "You are a helpful customer service assistant for Last Genie, a specialty products brand. "
        "You help customers with product recommendations, usage instructions, and general inquiries. "
        "Be knowledgeable about Last Genie's unique product line and customer needs."
    ),
}

HONESTY_SUFFIX = (
    "\n\nPlease provide helpful, accurate, and friendly responses. "
    "If you don't know something, say so rather than making up information."
)
FALLBACK_RESPONSE = "I apologize, but I was unable to generate a response. Please try again."


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _invalid(details: str) -> InvalidInput:
    return InvalidInput("Invalid request", details=details)


def system_prompt(brand: str, page_context: str | None = None) -> str:
    prompt = BRAND_PROMPTS.get(brand, BRAND_PROMPTS[DEFAULT_BRAND])
    if page_context:
        prompt += f"\n\nCurrent page context: {page_context}"
    return prompt + HONESTY_SUFFIX


class ChatbotService:
    """Brand aware customer-service assistant on top of a chat completions API."""

    def __init__(self, client: ChatClient):
        self.client = client

    @staticmethod
    def validate(payload: ChatbotIn) -> None:
        question = payload.user_question
        if not isinstance(question, str):
            raise _invalid("userQuestion is required and must be a string")
        if not question.strip():
            raise _invalid("userQuestion cannot be empty")
        if len(question) > MAX_QUESTION_LENGTH:
            raise _invalid(f"userQuestion must be {MAX_QUESTION_LENGTH} characters or less")
        if payload.brand and not isinstance(payload.brand, str):
            raise _invalid("brand must be a string")
        if payload.page_context and not isinstance(payload.page_context, str):
            raise _invalid("pageContext type must be a string")

    def _prepare(self, payload: ChatbotIn) -> tuple[str, List[Dict[str, str]]]:
        if not self.client.configured:
            logger.error("OpenAI API key not configured")
            raise InternalError("Chatbot service not configured", details="OpenAI API key missing")

        self.validate(payload)

        brand = payload.brand or DEFAULT_BRAND
        question = payload.user_question.strip()
        logger.info(f"Chatbot question for {brand}: {question[:100]}")

        messages = [
            {"role": "system", "content": system_prompt(brand, payload.page_context)},
            {"role": "user", "content": question},
        ]
        return brand, messages

    def ask(self, payload: ChatbotIn) -> Dict[str, Any]:
        brand, messages = self._prepare(payload)

        try:
            content = self.client.complete(messages, max_tokens=MAX_TOKENS, temperature=TEMPERATURE)
        except requests.RequestException as e:
            raise self._map_error(e)

        return {"response": content or FALLBACK_RESPONSE, "brand": brand, "timestamp": _now()}

    def ask_stream(self, payload: ChatbotIn) -> Iterator[str]:
        """
        Server-sent events: one `data:` frame per content chunk, then a final
        frame with done=true. Errors before the first chunk are raised here so
        the caller can still answer with a JSON error.
        """
        brand, messages = self._prepare(payload)

        chunks = self.client.stream(messages, max_tokens=MAX_TOKENS, temperature=TEMPERATURE)
        try:
            first = next(chunks, None)
        except requests.RequestException as e:
            raise self._map_error(e)

        return self._sse(brand, first, chunks)

    def _sse(self, brand: str, first: str | None, chunks: Iterator[str]) -> Iterator[str]:
        full_response = ""
        try:
            for content in itertools.chain([first] if first else [], chunks):
                full_response += content
                yield f"data: {json.dumps({'content': content, 'timestamp': _now()})}\n\n"
        except requests.RequestException as e:
            # headers are already sent, the stream just ends early
            logger.error(f"Chatbot stream interrupted: {e}")

        logger.info(f"Chatbot streamed {len(full_response)} characters for {brand}")
        done = {"done": True, "fullResponse": full_response, "brand": brand, "timestamp": _now()}
        yield f"data: {json.dumps(done)}\n\n"

    @staticmethod
    def _map_error(e: requests.RequestException) -> UpstreamError:
        response = getattr(e, "response", None)
        status = response.status_code if response is not None else None
        logger.error(f"Chatbot API error ({status}): {e}")

        if status == 429:
            return UpstreamError(
                "Rate limit exceeded", status_code=429, details="Please try again in a few moments"
            )
        if status == 401:
            return UpstreamError("Authentication error", details="OpenAI API key may be invalid")
        if status == 400:
            return UpstreamError(
                "Invalid request to AI service", status_code=400, details=_provider_message(response, e)
            )

        extra = {"details": str(e)} if APP_ENV == "development" else {}
        return UpstreamError("Failed to process chatbot request", **extra)


def _provider_message(response: requests.Response, e: Exception) -> str:
    try:
        return response.json()["error"]["message"]
    except (ValueError, KeyError, TypeError):
        return str(e)
