import io
import json
import logging
import urllib.request
from urllib.error import HTTPError

import pytest
import requests

import resourceful as rf
from resourceful import http


def test_send_with_unknown_client():
    class MyClass(object):
        pass

    with pytest.raises(TypeError, match="MyClass"):
        rf.send(MyClass(), http.Request("foo"))


class TestSendWithUrllib:
    def test_ok(self, mocker):
        opener = urllib.request.build_opener()
        raw = mocker.Mock(**{"getcode.return_value": 200,
                             "read.return_value": b'{"a": 1}'})
        raw.headers = {"Content-Type": "application/json"}
        open_ = mocker.patch.object(opener, "open", return_value=raw)

        response = rf.send(opener, http.Request(
            "https://api.test/foo",
            params={"skip": 5},
            headers={"Accept": "application/json"},
        ))

        assert response == http.Response(
            200, b'{"a": 1}', headers={"Content-Type": "application/json"})
        sent = open_.call_args[0][0]
        assert sent.full_url == "https://api.test/foo?skip=5"
        assert sent.get_method() == "GET"
        assert sent.get_header("Accept") == "application/json"

    def test_http_error_status(self, mocker):
        opener = urllib.request.build_opener()
        error = HTTPError("https://api.test/foo", 404, "Not Found",
                          {}, io.BytesIO(b"nope"))
        mocker.patch.object(opener, "open", side_effect=error)

        response = rf.send(opener, http.Request("https://api.test/foo"))

        assert response == http.Response(404, b"nope", headers={})


def test_requests_send(mocker):
    session = requests.Session()
    raw = mocker.Mock(status_code=200, content=b"{}", headers={"a": "b"})
    request = mocker.patch.object(session, "request", return_value=raw)

    response = rf.send(session, http.Request("https://api.test/foo",
                                             params={"x": 1}))

    assert response == http.Response(200, b"{}", headers={"a": "b"})
    request.assert_called_once_with(
        "GET", "https://api.test/foo", params={"x": 1}, headers={})


class TestClient:

    def test_defaults(self):
        client = rf.Client()
        assert isinstance(client.http, requests.Session)
        assert client.config == rf.DEFAULT_CONFIGURATION
        assert client.default_locale == "en-US"

    def test_options(self):
        config = rf.Configuration(api_url="https://other.test/")
        client = rf.Client(config=config, default_locale="nl-NL",
                           http=object())
        assert client.config.api_url == "https://other.test/"
        assert client.default_locale == "nl-NL"
        assert config.default_locale == "en-US"
        assert "other.test" in repr(client)

    def test_request(self, mock_http):
        client = rf.Client("token", http=mock_http,
                           api_url="https://api.test/",
                           default_headers={"X-Version": "1"})
        mock_http.add_json("https://api.test/spaces/s1", {"name": "bla"},
                           locale="de")

        assert client.request("spaces/s1", {"locale": "de"}) == {
            "name": "bla"}

        sent, = mock_http.requests
        assert sent.method == "GET"
        assert sent.headers == {
            "Authorization": "Bearer token",
            "X-Version": "1",
            "User-Agent": "resourceful",
        }

    def test_no_token(self, mock_http):
        client = rf.Client(http=mock_http, api_url="https://api.test/")
        mock_http.add_json("https://api.test/spaces", [])
        assert client.request("spaces") == []
        assert "Authorization" not in mock_http.requests[0].headers

    def test_not_found(self, mock_http):
        client = rf.Client(http=mock_http, api_url="https://api.test/")
        mock_http.add_json("https://api.test/spaces/nope",
                           {"sys": {"id": "NotFound"}}, status_code=404)
        with pytest.raises(rf.NotFound) as exc_info:
            client.request("spaces/nope")
        assert exc_info.value.status_code == 404
        assert exc_info.value.request.url == "https://api.test/spaces/nope"

    def test_error_status(self, mock_http):
        client = rf.Client(http=mock_http, api_url="https://api.test/")
        mock_http.add_json("https://api.test/spaces", {}, status_code=500)
        with pytest.raises(rf.TransportError) as exc_info:
            client.request("spaces")
        assert not isinstance(exc_info.value, rf.NotFound)
        assert exc_info.value.status_code == 500

    def test_invalid_json(self, mock_http):
        client = rf.Client(http=mock_http, api_url="https://api.test/")
        mock_http.responses["https://api.test/spaces", ()] = http.Response(
            200, b"<html>")
        with pytest.raises(rf.TransportError, match="JSON"):
            client.request("spaces")

    def test_logs_requests(self, mock_http, caplog):
        client = rf.Client("secret", http=mock_http,
                           api_url="https://api.test/")
        mock_http.add_json("https://api.test/spaces", json.loads("{}"))
        with caplog.at_level(logging.DEBUG, logger="resourceful"):
            client.request("spaces")
        assert "https://api.test/spaces" in caplog.text
        assert "secret" not in caplog.text


def test_transport_error_without_response():
    error = rf.TransportError("connection reset")
    assert error.status_code is None
    assert isinstance(error, rf.Error)
