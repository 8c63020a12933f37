from unittest.mock import MagicMock, patch

import httpx
import pytest

from docextract.llm.exceptions import LLMTransportError, LLMUnavailableError
from docextract.llm.ollama_client_adapter import OllamaClientAdapter


def _make_response(payload: object) -> MagicMock:
    response = MagicMock()
    response.json.return_value = payload
    response.raise_for_status.return_value = None
    return response


def _make_adapter(mock_client: MagicMock, **kwargs: object) -> OllamaClientAdapter:
    with patch(
        "docextract.llm.ollama_client_adapter.httpx.Client",
        return_value=mock_client,
    ):
        return OllamaClientAdapter(
            base_url="http://localhost:11434",
            model="qwen3-vl:2b",
            timeout_seconds=300,
            **kwargs,  # type: ignore[arg-type]
        )


class TestInfer:
    def test_returns_response_field(self) -> None:
        mock_client = MagicMock()
        mock_client.post.return_value = _make_response({"response": '{"a": 1}'})
        adapter = _make_adapter(mock_client)
        assert adapter.infer("prompt") == '{"a": 1}'

    def test_prefers_thinking_field(self) -> None:
        mock_client = MagicMock()
        mock_client.post.return_value = _make_response(
            {"thinking": '{"from": "thinking"}', "response": '{"from": "response"}'}
        )
        adapter = _make_adapter(mock_client)
        assert adapter.infer("prompt") == '{"from": "thinking"}'

    def test_falls_back_when_first_field_empty(self) -> None:
        mock_client = MagicMock()
        mock_client.post.return_value = _make_response({"thinking": "", "response": "{}"})
        adapter = _make_adapter(mock_client)
        assert adapter.infer("prompt") == "{}"

    def test_respects_configured_field_order(self) -> None:
        mock_client = MagicMock()
        mock_client.post.return_value = _make_response(
            {"thinking": "reasoning", "response": '{"ok": true}'}
        )
        adapter = _make_adapter(mock_client, response_fields=["response", "thinking"])
        assert adapter.infer("prompt") == '{"ok": true}'

    def test_sends_generate_request(self, png_base64: str) -> None:
        mock_client = MagicMock()
        mock_client.post.return_value = _make_response({"response": "{}"})
        adapter = _make_adapter(mock_client)
        adapter.infer("extract this", [png_base64])
        path = mock_client.post.call_args.args[0]
        body = mock_client.post.call_args.kwargs["json"]
        assert path == "/api/generate"
        assert body["model"] == "qwen3-vl:2b"
        assert body["prompt"] == "extract this"
        assert body["stream"] is False
        assert body["format"] == "json"
        assert body["images"] == [png_base64]

    def test_omits_images_when_none(self) -> None:
        mock_client = MagicMock()
        mock_client.post.return_value = _make_response({"response": "{}"})
        adapter = _make_adapter(mock_client)
        adapter.infer("prompt")
        assert "images" not in mock_client.post.call_args.kwargs["json"]

    def test_rejects_multiple_images(self) -> None:
        adapter = _make_adapter(MagicMock())
        with pytest.raises(ValueError, match="one image"):
            adapter.infer("prompt", ["a", "b"])


class TestInferErrors:
    def test_raises_unavailable_when_no_field(self) -> None:
        mock_client = MagicMock()
        mock_client.post.return_value = _make_response({"done": True})
        adapter = _make_adapter(mock_client)
        with pytest.raises(LLMUnavailableError, match="No 'thinking' or 'response'"):
            adapter.infer("prompt")

    def test_raises_unavailable_on_non_json_body(self) -> None:
        mock_client = MagicMock()
        response = _make_response(None)
        response.json.side_effect = ValueError("Expecting value")
        mock_client.post.return_value = response
        adapter = _make_adapter(mock_client)
        with pytest.raises(LLMUnavailableError, match="non-JSON"):
            adapter.infer("prompt")

    def test_raises_transport_error_on_timeout(self) -> None:
        mock_client = MagicMock()
        mock_client.post.side_effect = httpx.ReadTimeout("timed out")
        adapter = _make_adapter(mock_client)
        with pytest.raises(LLMTransportError, match="timed out"):
            adapter.infer("prompt")

    def test_raises_transport_error_on_connect_failure(self) -> None:
        mock_client = MagicMock()
        mock_client.post.side_effect = httpx.ConnectError("connection refused")
        adapter = _make_adapter(mock_client)
        with pytest.raises(LLMTransportError, match="network error"):
            adapter.infer("prompt")

    def test_raises_transport_error_on_http_status(self) -> None:
        mock_client = MagicMock()
        response = _make_response({})
        error_response = MagicMock()
        error_response.status_code = 500
        response.raise_for_status.side_effect = httpx.HTTPStatusError(
            "server error", request=MagicMock(), response=error_response
        )
        mock_client.post.return_value = response
        adapter = _make_adapter(mock_client)
        with pytest.raises(LLMTransportError, match="HTTP 500"):
            adapter.infer("prompt")


class TestHealthAndModels:
    def test_health_check_true(self) -> None:
        mock_client = MagicMock()
        mock_client.get.return_value = _make_response({"models": []})
        adapter = _make_adapter(mock_client)
        assert adapter.health_check() is True
        mock_client.get.assert_called_once_with("/api/tags")

    def test_health_check_false_on_error(self) -> None:
        mock_client = MagicMock()
        mock_client.get.side_effect = httpx.ConnectError("down")
        adapter = _make_adapter(mock_client)
        assert adapter.health_check() is False

    def test_list_models(self) -> None:
        mock_client = MagicMock()
        mock_client.get.return_value = _make_response(
            {"models": [{"name": "qwen3-vl:2b"}, {"name": "llava:7b"}]}
        )
        adapter = _make_adapter(mock_client)
        assert adapter.list_models() == ["qwen3-vl:2b", "llava:7b"]

    def test_list_models_empty_on_error(self) -> None:
        mock_client = MagicMock()
        mock_client.get.side_effect = httpx.ConnectError("down")
        adapter = _make_adapter(mock_client)
        assert adapter.list_models() == []

    def test_list_models_empty_when_key_missing(self) -> None:
        mock_client = MagicMock()
        mock_client.get.return_value = _make_response({})
        adapter = _make_adapter(mock_client)
        assert adapter.list_models() == []
