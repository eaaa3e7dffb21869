"""
Tests for the ceph-mgr restful connection, with the HTTP session stubbed.
"""
import pytest
import requests

from stormgr.ceph.restful import RestfulConnection, RestfulConnectionFactory
from stormgr.errors import CommandFailedError, ConnectionFailedError, MalformedStateError


class FakeResponse:
    def __init__(self, status_code=200, payload=None, invalid_json=False):
        self.status_code = status_code
        self.payload = payload
        self.invalid_json = invalid_json

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error", response=self)

    def json(self):
        if self.invalid_json:
            raise ValueError("not json")
        return self.payload


@pytest.fixture
def conn():
    connection = RestfulConnection("https://mgr.example:8003/", "admin", "secret")
    yield connection
    connection.shutdown()


def _stub_post(monkeypatch, conn, response=None, error=None):
    calls = []

    def post(url, **kwargs):
        calls.append((url, kwargs))
        if error is not None:
            raise error
        return response

    monkeypatch.setattr(conn.session, "post", post)
    return calls


def test_mon_command_returns_output_and_status(monkeypatch, conn):
    calls = _stub_post(monkeypatch, conn, FakeResponse(payload={
        "has_failed": False,
        "finished": [{"outb": '{"quorum":[0]}', "outs": "ok"}],
    }))

    buffer, info = conn.mon_command(b'{"prefix": "mon_status", "format": "json"}')

    assert buffer == b'{"quorum":[0]}'
    assert info == "ok"
    url, kwargs = calls[0]
    assert url == "https://mgr.example:8003/request"
    assert kwargs["params"] == {"wait": 1}
    assert kwargs["json"] == {"prefix": "mon_status", "format": "json"}


def test_failed_command_carries_status(monkeypatch, conn):
    _stub_post(monkeypatch, conn, FakeResponse(payload={
        "has_failed": True,
        "failed": [{"outs": "Error EEXIST: pool exists"}],
    }))

    with pytest.raises(CommandFailedError) as excinfo:
        conn.mon_command(b'{"prefix": "osd pool create", "pool": "p1"}')
    assert excinfo.value.status == "Error EEXIST: pool exists"


def test_http_error_is_command_failure(monkeypatch, conn):
    _stub_post(monkeypatch, conn, FakeResponse(status_code=403))

    with pytest.raises(CommandFailedError):
        conn.mon_command(b'{"prefix": "mon_status"}')


def test_transport_error_is_connection_failure(monkeypatch, conn):
    _stub_post(monkeypatch, conn, error=requests.ConnectionError("refused"))

    with pytest.raises(ConnectionFailedError):
        conn.mon_command(b'{"prefix": "mon_status"}')


def test_invalid_json_reply_is_malformed(monkeypatch, conn):
    _stub_post(monkeypatch, conn, FakeResponse(invalid_json=True))

    with pytest.raises(MalformedStateError):
        conn.mon_command(b'{"prefix": "mon_status"}')


def test_connect_failure(monkeypatch, conn):
    def get(url, **kwargs):
        raise requests.Timeout("timed out")

    monkeypatch.setattr(conn.session, "get", get)

    with pytest.raises(ConnectionFailedError):
        conn.connect()


def test_factory_uses_requested_user():
    factory = RestfulConnectionFactory("http://mgr:8003", "key", verify=False, timeout=5)

    conn = factory.new_conn_with_cluster_and_user("ceph", "client1")

    assert conn.user == "client1"
    assert conn.session.auth == ("client1", "key")
    assert conn.verify is False
    conn.shutdown()


@pytest.mark.parametrize("payload", [
    ["not", "an", "object"],
    {"has_failed": False, "finished": []},
    {"has_failed": False, "finished": ["outb"]},
])
def test_unexpected_reply_shapes_are_malformed(monkeypatch, conn, payload):
    _stub_post(monkeypatch, conn, FakeResponse(payload=payload))

    with pytest.raises(MalformedStateError):
        conn.mon_command(b'{"prefix": "mon_status"}')


def test_failed_entry_without_details(monkeypatch, conn):
    _stub_post(monkeypatch, conn, FakeResponse(payload={"has_failed": True, "failed": ["boom"]}))

    with pytest.raises(CommandFailedError) as excinfo:
        conn.mon_command(b'{"prefix": "mon_status"}')
    assert excinfo.value.status == ""


def test_requests_json_decode_error_is_malformed(monkeypatch, conn):
    class HtmlResponse(FakeResponse):
        def json(self):
            raise requests.JSONDecodeError("Expecting value", "<html>", 0)

    _stub_post(monkeypatch, conn, HtmlResponse())

    with pytest.raises(MalformedStateError):
        conn.mon_command(b'{"prefix": "mon_status"}')
