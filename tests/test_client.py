import pytest
import requests
import responses

from bloodhound.client import BloodhoundClient, ClientConfig


def test_custom_headers_are_sent():
    config = ClientConfig(headers={"User-Agent": "Mozilla/5.0", "X-Test": "yes"})
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, "http://localhost:5555/login", body="<html></html>")
        with BloodhoundClient(config) as client:
            response = client.get("http://localhost:5555/login")
        assert response.status_code == 200
        assert response.text == "<html></html>"
        assert response.request.headers["User-Agent"] == "Mozilla/5.0"
        assert response.request.headers["X-Test"] == "yes"
        sent = rsps.calls[0].request.headers
        assert sent["User-Agent"] == "Mozilla/5.0"
        assert sent["X-Test"] == "yes"


def test_response_is_returned_unchanged():
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, "http://localhost:5555/missing", body="gone", status=404)
        with BloodhoundClient(ClientConfig()) as client:
            response = client.get("http://localhost:5555/missing")
    assert response.status_code == 404
    assert response.text == "gone"


def test_request_with_proxy_configured():
    config = ClientConfig(proxy="http://localhost:8080")
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, "http://localhost:5555/search", body="results")
        with BloodhoundClient(config) as client:
            response = client.get("http://localhost:5555/search")
    assert response.text == "results"


def test_connection_failure_raises():
    with responses.RequestsMock():
        with BloodhoundClient(ClientConfig()) as client:
            with pytest.raises(requests.ConnectionError):
                client.get("http://localhost:5555/unreachable")


def test_invalid_url_raises():
    with BloodhoundClient(ClientConfig()) as client:
        with pytest.raises(requests.RequestException):
            client.get("not a url")