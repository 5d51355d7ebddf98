# tests/api/v1/test_tokenizer_api.py
import pytest
from fastapi import status

pytestmark = pytest.mark.asyncio

BASE = "/api/v1/tokenizer"


async def test_list_models(client):
    response = await client.get(f"{BASE}/models")
    assert response.status_code == status.HTTP_200_OK

    body = response.json()
    assert body["status"] == 200
    models = {m["value"]: m for m in body["data"]}
    assert list(models) == ["gpt-3.5-turbo", "gpt-4", "claude-3", "llama-2", "mistral-7b"]
    assert models["gpt-4"]["label"] == "GPT-4"
    assert models["gpt-4"]["supported"] is True
    assert models["claude-3"]["supported"] is False

async def test_encode(client):
    response = await client.post(f"{BASE}/encode", json={"text": "Hi there", "model": "gpt-4"})
    assert response.status_code == status.HTTP_200_OK

    data = response.json()["data"]
    assert data["mode"] == "encode"
    assert data["tokens"] == [{"text": "Hi", "id": 0}, {"text": " there", "id": 1}]
    assert data["is_empty"] is False
    assert data["stats"]["token_count"] == 2
    assert data["stats"]["distinct_count"] == 2

async def test_encode_whitespace_is_empty(client):
    response = await client.post(f"{BASE}/encode", json={"text": "   ", "model": "gpt-4"})
    data = response.json()["data"]
    assert data["tokens"] == []
    assert data["is_empty"] is True

async def test_encode_degraded_model(client):
    response = await client.post(f"{BASE}/encode", json={"text": "one two", "model": "mistral-7b"})
    data = response.json()["data"]
    assert data["tokens"] == [{"text": "one", "id": 0}, {"text": "two", "id": 1}]

async def test_encode_unknown_model_is_404(client):
    response = await client.post(f"{BASE}/encode", json={"text": "hi", "model": "gpt-99"})
    assert response.status_code == status.HTTP_404_NOT_FOUND
    body = response.json()
    assert body["data"] is None
    assert "gpt-99" in body["msg"]

async def test_decode_accepts_string_and_list(client, override_manager):
    override_manager.resolve("gpt-4").encode("Hi there")

    by_string = await client.post(f"{BASE}/decode", json={"ids": "0, junk, 1", "model": "gpt-4"})
    by_list = await client.post(f"{BASE}/decode", json={"ids": [0, 1], "model": "gpt-4"})

    assert by_string.json()["data"]["text"] == "Hi there"
    assert by_list.json()["data"]["text"] == "Hi there"

async def test_decode_degraded_model_is_empty(client):
    response = await client.post(f"{BASE}/decode", json={"ids": "0 1", "model": "claude-3"})
    data = response.json()["data"]
    assert data["text"] == ""
    assert data["is_empty"] is True

async def test_decode_provider_failure_is_empty(client):
    response = await client.post(f"{BASE}/decode", json={"ids": "12345", "model": "gpt-4"})
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["data"]["is_empty"] is True

async def test_export_ids(client):
    response = await client.post(f"{BASE}/export", json={"text": "Hi there", "model": "gpt-4"})
    data = response.json()["data"]
    assert data["content"] == "0\n1"
    assert data["result"]["mode"] == "encode"

async def test_export_annotated_numbered(client):
    response = await client.post(f"{BASE}/export", json={
        "text": "Hi there",
        "model": "gpt-4",
        "display_mode": "numbered",
        "export_format": "annotated",
    })
    assert response.json()["data"]["content"] == "1. Hi -> 0\n2.  there -> 1"

async def test_export_empty_has_no_content(client):
    response = await client.post(f"{BASE}/export", json={"text": "", "model": "gpt-4"})
    assert response.json()["data"]["content"] is None

async def test_export_rejects_bad_mode(client):
    response = await client.post(f"{BASE}/export", json={"text": "x", "model": "gpt-4", "mode": "sideways"})
    assert response.status_code == 422
