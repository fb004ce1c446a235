import json

import pytest
import requests


def _http_error(status, message="error"):
    response = requests.Response()
    response.status_code = status
    response._content = json.dumps({"error": {"message": message}}).encode()
    return requests.HTTPError(f"{status} Client Error", response=response)


def test_chatbot_answers(client, chat_client):
    r = client.post("/api/chatbot", json={"userQuestion": "What is CBD?", "pageContext": "Product page"})
    assert r.status_code == 200
    body = r.json()
    assert body["response"] == "Hello from the assistant"
    assert body["brand"] == "liquidheaven"
    assert body["timestamp"]

    call = chat_client.calls[0]
    assert call["max_tokens"] == 500
    assert call["temperature"] == 0.7
    system, user = call["messages"]
    assert system["role"] == "system"
    assert "Liquid Heaven" in system["content"]
    assert "Current page context: Product page" in system["content"]
    assert system["content"].endswith("rather than making up information.")
    assert user == {"role": "user", "content": "What is CBD?"}


@pytest.mark.parametrize("brand, name", [("motaquila", "Motaquila"), ("lastgenie", "Last Genie"), ("other", "Liquid Heaven")])
def test_chatbot_brand_prompts(client, chat_client, brand, name):
    r = client.post("/api/chatbot", json={"brand": brand, "userQuestion": "Hi"})
    assert r.status_code == 200
    assert name in chat_client.calls[0]["messages"][0]["content"]


def test_chatbot_fallback_when_empty(client, chat_client):
    chat_client.reply = ""
    r = client.post("/api/chatbot", json={"userQuestion": "Hello"})
    assert r.json()["response"] == "I apologize, but I was unable to generate a response. Please try again."


@pytest.mark.parametrize(
    "payload, details",
    [
        ({"brand": "liquidheaven"}, "userQuestion is required and must be a string"),
        ({"userQuestion": 42}, "userQuestion is required and must be a string"),
        ({"userQuestion": "   "}, "userQuestion cannot be empty"),
        ({"userQuestion": "a" * 1001}, "userQuestion must be 1000 characters or less"),
        ({"brand": 123, "userQuestion": "Hello"}, "brand must be a string"),
        ({"pageContext": 456, "userQuestion": "Hello"}, "pageContext type must be a string"),
    ],
)
def test_chatbot_validation(client, payload, details):
    r = client.post("/api/chatbot", json=payload)
    assert r.status_code == 400
    assert r.json() == {"error": "Invalid request", "details": details}


def test_chatbot_not_configured(client, chat_client):
    chat_client.configured = False
    r = client.post("/api/chatbot", json={"userQuestion": "Hello"})
    assert r.status_code == 500
    assert r.json() == {"error": "Chatbot service not configured", "details": "OpenAI API key missing"}


@pytest.mark.parametrize(
    "status, expected_status, body",
    [
        (429, 429, {"error": "Rate limit exceeded", "details": "Please try again in a few moments"}),
        (401, 500, {"error": "Authentication error", "details": "OpenAI API key may be invalid"}),
        (400, 400, {"error": "Invalid request to AI service", "details": "Invalid request"}),
    ],
)
def test_chatbot_provider_errors(client, chat_client, status, expected_status, body):
    chat_client.error = _http_error(status, "Invalid request")
    r = client.post("/api/chatbot", json={"userQuestion": "Hello"})
    assert r.status_code == expected_status
    assert r.json() == body


def test_chatbot_generic_error(client, chat_client):
    chat_client.error = requests.ConnectionError("Network error")
    r = client.post("/api/chatbot", json={"userQuestion": "Hello"})
    assert r.status_code == 500
    assert r.json() == {"error": "Failed to process chatbot request", "details": "Network error"}


def test_chatbot_streams_events(client, chat_client):
    r = client.post(
        "/api/chatbot",
        json={"brand": "motaquila", "userQuestion": "Cocktail ideas?"},
        headers={"Accept": "text/event-stream"},
    )
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/event-stream")

    events = [json.loads(line[len("data: "):]) for line in r.text.split("\n\n") if line]
    assert [e["content"] for e in events[:-1]] == ["Hello", " there"]
    assert events[-1]["done"] is True
    assert events[-1]["fullResponse"] == "Hello there"
    assert events[-1]["brand"] == "motaquila"


def test_chatbot_stream_error_before_first_chunk(client, chat_client):
    chat_client.error = _http_error(429)
    r = client.post(
        "/api/chatbot",
        json={"userQuestion": "Hello"},
        headers={"Accept": "text/event-stream"},
    )
    assert r.status_code == 429
    assert r.json()["error"] == "Rate limit exceeded"
