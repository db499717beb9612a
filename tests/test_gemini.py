"""Tests for the Gemini client wrapper with a mocked SDK client."""

import pytest
from unittest.mock import AsyncMock, MagicMock

from services.exceptions import AIServiceError
from services.gemini import GeminiClient, ImageInput


def client_returning(**kwargs):
    client = GeminiClient(api_key=None, model_name="gemini-test")
    sdk = MagicMock()
    sdk.aio.models.generate_content = AsyncMock(**kwargs)
    client._client = sdk
    return client, sdk.aio.models.generate_content


@pytest.mark.asyncio
async def test_missing_api_key():
    client = GeminiClient(api_key=None, model_name="gemini-test")
    with pytest.raises(AIServiceError, match="GOOGLE_API_KEY"):
        await client.generate("prompt")


@pytest.mark.asyncio
async def test_returns_text():
    client, generate = client_returning(return_value=MagicMock(text='{"tips": []}'))

    assert await client.generate("prompt") == '{"tips": []}'
    assert generate.call_args.kwargs["model"] == "gemini-test"
    assert generate.call_args.kwargs["contents"] == ["prompt"]


@pytest.mark.asyncio
async def test_image_is_attached():
    client, generate = client_returning(return_value=MagicMock(text="{}"))

    await client.generate("what is this?", ImageInput(data=b"\x89PNG", mime_type="image/png"))

    assert len(generate.call_args.kwargs["contents"]) == 2


@pytest.mark.asyncio
@pytest.mark.parametrize("text", [None, "", "   "])
async def test_empty_response(text):
    client, _ = client_returning(return_value=MagicMock(text=text))
    with pytest.raises(AIServiceError, match="empty"):
        await client.generate("prompt")


@pytest.mark.asyncio
async def test_transport_error_wrapped():
    client, _ = client_returning(side_effect=ConnectionError("reset by peer"))
    with pytest.raises(AIServiceError, match="reset by peer"):
        await client.generate("prompt")
