import base64
from unittest.mock import Mock, patch

import pytest
import requests

from labelscan import config
from labelscan.domain.errors import (
    NoCredentialConfigured,
    ProviderHTTPError,
    ProviderMalformedResponse,
)
from labelscan.infrastructure.vision.google_vision_client import GoogleVisionClient


def make_response(status_code=200, json_data=None, json_error=None, reason="OK"):
    response = Mock(spec=requests.Response)
    response.status_code = status_code
    response.ok = status_code < 400
    response.reason = reason
    if json_error:
        response.json.side_effect = json_error
    else:
        response.json.return_value = json_data
    return response


def make_client(response=None, post_error=None):
    session = Mock(spec=requests.Session)
    if post_error:
        session.post.side_effect = post_error
    else:
        session.post.return_value = response
    return GoogleVisionClient(api_key="test-key", api_url="https://vision.test/annotate", timeout=5, session=session)


class TestGoogleVisionClient:
    def test_not_configured(self):
        client = GoogleVisionClient(session=Mock(spec=requests.Session))

        assert client.is_configured is False
        with pytest.raises(NoCredentialConfigured):
            client.annotate(b"png")
        client.session.post.assert_not_called()

    def test_reads_key_from_config(self, monkeypatch):
        monkeypatch.setattr(config, "GOOGLE_VISION_API_KEY", "from-env")

        assert GoogleVisionClient().api_key == "from-env"

    def test_build_request(self):
        body = make_client().build_request(b"\x89PNG")

        request = body["requests"][0]
        assert base64.b64decode(request["image"]["content"]) == b"\x89PNG"
        assert request["features"] == [
            {"type": "TEXT_DETECTION", "maxResults": 1},
            {"type": "LABEL_DETECTION", "maxResults": 10},
            {"type": "LOGO_DETECTION", "maxResults": 5},
        ]

    def test_annotate(self):
        annotation = {"fullTextAnnotation": {"text": "Ingredients: water"}}
        client = make_client(make_response(json_data={"responses": [annotation]}))

        assert client.annotate(b"png") == annotation
        args, kwargs = client.session.post.call_args
        assert args[0] == "https://vision.test/annotate"
        assert kwargs["params"] == {"key": "test-key"}
        assert kwargs["timeout"] == 5

    def test_http_error_status(self):
        client = make_client(make_response(status_code=403, reason="Forbidden"))

        with pytest.raises(ProviderHTTPError, match="403 Forbidden") as exc_info:
            client.annotate(b"png")
        assert exc_info.value.status_code == 403

    def test_transport_error(self):
        client = make_client(post_error=requests.Timeout("timed out"))

        with pytest.raises(ProviderHTTPError, match="timed out"):
            client.annotate(b"png")

    def test_non_json_body(self):
        client = make_client(make_response(json_error=ValueError("Expecting value")))

        with pytest.raises(ProviderMalformedResponse):
            client.annotate(b"png")

    @pytest.mark.parametrize("body", [{}, {"responses": []}, {"responses": ["x"]}, []])
    def test_missing_responses(self, body):
        client = make_client(make_response(json_data=body))

        with pytest.raises(ProviderMalformedResponse, match="No response"):
            client.annotate(b"png")

    def test_error_in_response(self):
        body = {"responses": [{"error": {"code": 3, "message": "Bad image data."}}]}
        client = make_client(make_response(json_data=body))

        with pytest.raises(ProviderHTTPError, match="Bad image data"):
            client.annotate(b"png")


class TestClientSession:
    def test_close_releases_its_own_session(self):
        with patch("labelscan.infrastructure.vision.google_vision_client.requests.Session") as session_cls:
            client = GoogleVisionClient(api_key="k")

        client.close()

        session_cls.return_value.close.assert_called_once_with()

    def test_close_leaves_a_shared_session_open(self):
        session = Mock(spec=requests.Session)

        GoogleVisionClient(api_key="k", session=session).close()

        session.close.assert_not_called()
