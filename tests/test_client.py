"""Tests clients HTTP — mapping statut → erreur typée, AuthContext."""
from unittest.mock import MagicMock

import pytest
import requests

from page_builder import create_component
from src.client import AuthContext, CartClient, PagesClient
from src.errors import (
    BuilderError, NotFoundError, TransientIOError, UnauthorizedError, UpstreamError, ValidationError,
)


def _resp(status=200, payload=None, content=b"x"):
    r = MagicMock()
    r.status_code = status
    r.content = content
    if isinstance(payload, Exception):
        r.json.side_effect = payload
    else:
        r.json.return_value = payload
    r.text = "plain error body"
    return r


def _session(*responses):
    http = MagicMock(spec=requests.Session)
    http.request.side_effect = list(responses)
    return http


PAGE = {"id": "p1", "name": "Home", "components": []}


@pytest.mark.parametrize("status,error", [
    (401, UnauthorizedError),
    (404, NotFoundError),
    (400, ValidationError),
    (422, ValidationError),
    (502, UpstreamError),
    (503, TransientIOError),
    (500, TransientIOError),
])
def test_status_mapping(status, error):
    client = PagesClient("http://api", session=_session(_resp(status, {"detail": "nope"})))
    with pytest.raises(error) as exc:
        client.get("p1")
    assert exc.value.detail == "nope"


def test_unmapped_4xx_is_builder_error():
    client = PagesClient("http://api", session=_session(_resp(409, ValueError("no json"))))
    with pytest.raises(BuilderError) as exc:
        client.get("p1")
    assert type(exc.value) is BuilderError
    assert exc.value.detail == "plain error body"


def test_validation_fields_forwarded():
    fields = [{"loc": ["name"], "msg": "required"}]
    client = PagesClient("http://api", session=_session(_resp(422, {"detail": "bad", "fields": fields})))
    with pytest.raises(ValidationError) as exc:
        client.create("")
    assert exc.value.fields == fields


@pytest.mark.parametrize("exc", [
    requests.ConnectionError("refused"),
    requests.Timeout("slow"),
    requests.exceptions.ChunkedEncodingError("truncated body"),
    requests.exceptions.TooManyRedirects("loop"),
])
def test_network_errors_are_transient(exc):
    http = MagicMock(spec=requests.Session)
    http.request.side_effect = exc
    with pytest.raises(TransientIOError):
        PagesClient("http://api", session=http).list()


def test_pages_client_create_sends_wire_components():
    http = _session(_resp(200, PAGE))
    comp = create_component("text", 0)
    page = PagesClient("http://api/", session=http).create("Home", [comp])
    method, url = http.request.call_args.args
    assert (method, url) == ("POST", "http://api/api/pages")
    assert http.request.call_args.kwargs["json"]["components"] == [comp.to_wire()]
    assert page.id == "p1"


def test_pages_client_update_sends_only_given_fields():
    http = _session(_resp(200, PAGE))
    PagesClient("http://api", session=http).update("p1", name="Home")
    assert http.request.call_args.kwargs["json"] == {"name": "Home"}


def test_delete_empty_body():
    http = _session(_resp(200, content=b""))
    assert PagesClient("http://api", session=http).delete("p1") is None


def test_cart_client_routes():
    http = _session(_resp(200, {"id": "c1"}), _resp(200, {"id": "c1"}))
    client = CartClient("http://api", session=http)
    client.create({"items": []})
    client.update("c1", {"items": []})
    calls = [c.args for c in http.request.call_args_list]
    assert calls == [("POST", "http://api/api/cart"), ("PUT", "http://api/api/cart/c1")]


def test_base_url_from_env(monkeypatch):
    monkeypatch.setenv("API_BASE_URL", "http://shop.example/")
    assert CartClient(session=MagicMock()).base_url == "http://shop.example"


class TestAuthContext:
    def test_login_then_refresh(self):
        http = _session(
            _resp(200, {"success": True, "email": "admin@jakiglobal.com"}),
            _resp(200, {"authenticated": True, "email": "admin@jakiglobal.com"}),
        )
        auth = AuthContext("http://api", session=http)
        assert auth.login("admin@jakiglobal.com", "changeme")
        assert auth.refresh()
        assert auth.email == "admin@jakiglobal.com"

    def test_failed_login(self):
        auth = AuthContext("http://api", session=_session(_resp(401, {"detail": "Invalid credentials"})))
        with pytest.raises(UnauthorizedError):
            auth.login("x", "y")
        assert not auth.authenticated

    def test_logout(self):
        http = _session(_resp(200, {"success": True}), _resp(200, {"success": True}))
        auth = AuthContext("http://api", session=http)
        auth.login("a", "b")
        auth.logout()
        assert not auth.authenticated
        assert auth.email is None

    def test_child_clients_share_session(self):
        http = MagicMock(spec=requests.Session)
        auth = AuthContext("http://api", session=http)
        assert auth.pages().http is http
        assert auth.cart().http is http
