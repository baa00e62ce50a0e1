"""Tests for classifying HTTP responses into results and errors."""

import json

import pytest

from openai_wire.errors import APIError, DecodeError, OpenAIWireError
from openai_wire.models import ChatResult, Model, ModelsResult
from openai_wire.responses import is_event_stream, parse_api_error, parse_response

MODELS_BODY = json.dumps(
    {
        "data": [{"id": "gpt-4", "object": "model", "owned_by": "openai"}],
        "object": "list",
    }
).encode()


class TestParseResponse:
    def test_success(self):
        result = parse_response(ModelsResult, 200, MODELS_BODY)
        assert result.data[0].id is Model.GPT4

    def test_success_with_undecodable_body(self):
        with pytest.raises(DecodeError) as exc_info:
            parse_response(ModelsResult, 200, b"<html>gateway</html>")
        assert exc_info.value.path == "$"

    def test_success_with_wrong_schema(self):
        with pytest.raises(DecodeError) as exc_info:
            parse_response(ChatResult, 200, MODELS_BODY)
        assert exc_info.value.path == "$.id"

    def test_api_error_schema(self):
        body = {
            "error": {
                "message": "Incorrect API key provided: sk-abc.",
                "type": "invalid_request_error",
                "param": None,
                "code": "invalid_api_key",
            }
        }

        with pytest.raises(APIError) as exc_info:
            parse_response(ChatResult, 401, json.dumps(body))

        error = exc_info.value
        assert error.status_code == 401
        assert error.message == "Incorrect API key provided: sk-abc."
        assert error.type == "invalid_request_error"
        assert error.code == "invalid_api_key"
        assert error.param is None
        assert "HTTP 401" in str(error)

    def test_api_error_unparseable_body(self):
        with pytest.raises(APIError) as exc_info:
            parse_response(ChatResult, 502, b"<html>Bad Gateway</html>")

        error = exc_info.value
        assert error.status_code == 502
        assert error.message is None
        assert error.type is None
        assert error.body == "<html>Bad Gateway</html>"

    def test_api_error_json_without_error_schema(self):
        error = parse_api_error(500, b'{"detail": "boom"}')
        assert error.status_code == 500
        assert error.message is None
        assert error.body == '{"detail": "boom"}'

    def test_api_error_empty_body(self):
        error = parse_api_error(503, b"")
        assert error.status_code == 503
        assert error.body == ""

    def test_numeric_error_code_is_stringified(self):
        error = parse_api_error(429, '{"error": {"message": "slow down", "code": 429}}')
        assert error.code == "429"
        assert error.message == "slow down"

    def test_non_string_param_keeps_error_fields(self):
        body = {"error": {"message": "m", "type": "t", "code": "c", "param": 3}}

        error = parse_api_error(400, json.dumps(body))

        assert error.message == "m"
        assert error.type == "t"
        assert error.code == "c"
        assert error.param == "3"

    def test_event_stream_body_is_not_a_document(self):
        body = b'data: {"id": "x"}\n\ndata: [DONE]\n\n'
        with pytest.raises(DecodeError) as exc_info:
            parse_response(ChatResult, 200, body)
        assert exc_info.value.path == "$"
        assert exc_info.value.expected == "JSON document"

    @pytest.mark.parametrize("status", [200, 400, 404, 500])
    def test_classification_is_total(self, status):
        try:
            parse_response(ChatResult, status, b"garbage")
        except OpenAIWireError as exc:
            assert isinstance(exc, (APIError, DecodeError))
        else:
            pytest.fail("garbage body must not decode")


@pytest.mark.parametrize(
    "content_type,expected",
    [
        ("text/event-stream", True),
        ("text/event-stream; charset=utf-8", True),
        ("Text/Event-Stream", True),
        ("application/json", False),
        ("", False),
        (None, False),
    ],
)
def test_is_event_stream(content_type, expected):
    assert is_event_stream(content_type) is expected
