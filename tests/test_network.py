import ipaddress
import threading
from http import HTTPStatus
from urllib.parse import parse_qs
from wsgiref.simple_server import WSGIRequestHandler, WSGIServer

import pytest

from vultrapi.network import Network, NetworkAPI
from vultrapi.transport import Transport, VultrError


class _Silent(WSGIRequestHandler):
    def log_request(self, *args, **kwargs):
        return None


class _Stub:
    """WSGI app answering every request with one fixed reply."""

    def __init__(self, status, body):
        self.status = f"{status} {HTTPStatus(status).phrase}"
        self.payload = body.encode()
        self.requests = []

    def __call__(self, environ, start_response):
        length = int(environ.get("CONTENT_LENGTH") or 0)
        sent = environ["wsgi.input"].read(length).decode()
        self.requests.append((environ["REQUEST_METHOD"], environ["PATH_INFO"], sent))
        start_response(self.status, [("Content-Type", "application/json")])
        return [self.payload]


@pytest.fixture
def serve():
    live = []

    def start(status, body):
        stub = _Stub(status, body)
        server = WSGIServer(("127.0.0.1", 0), _Silent)
        server.set_app(stub)
        threading.Thread(target=server.serve_forever, daemon=True).start()
        live.append(server)
        return f"http://127.0.0.1:{server.server_port}/", stub.requests

    yield start
    for server in live:
        server.shutdown()
        server.server_close()


def _networks(address):
    return NetworkAPI(Transport("placeholder", address))


@pytest.mark.parametrize(
    "call",
    [
        lambda nets: nets.list(),
        lambda nets: nets.create(1, "test", ipaddress.ip_network("192.0.2.1/24", strict=False)),
        lambda nets: nets.delete("id-1"),
    ],
    ids=["list", "create", "delete"],
)
def test_error(serve, call):
    address, _ = serve(406, "{error}")
    with pytest.raises(VultrError) as info:
        call(NetworkAPI(Transport("placeholder", address)))
    assert str(info.value) == "{error}"
    assert info.value.status == 406


def test_list_empty(serve):
    address, _ = serve(200, "[]")
    assert _networks(address).list() == []


def test_list_ok(serve):
    address, _ = serve(200, """{
    "net539626f0798d7": {"DCID": "1", "NETWORKID": "net539626f0798d7", "date_created": "2017-08-25 12:23:45",
        "description": "test1", "v4_subnet": "10.99.0.0", "v4_subnet_mask": 24},
    "net53962b0f2341f": {"DCID": "1", "NETWORKID": "net53962b0f2341f", "date_created": "2014-06-09 17:45:51",
        "description": "vultr", "v4_subnet": "0.0.0.0", "v4_subnet_mask": 0}
}""")
    assert _networks(address).list() == [
        Network("net539626f0798d7", 1, "test1", "10.99.0.0", 24, "2017-08-25 12:23:45"),
        Network("net53962b0f2341f", 1, "vultr", "0.0.0.0", 0, "2014-06-09 17:45:51"),
    ]


def test_create_no_network(serve):
    address, _ = serve(200, "[]")
    assert _networks(address).create(1, "test", "192.0.2.1/24").id == ""


def test_create_ok(serve):
    address, requests = serve(200, '{"NETWORKID": "net59a0526477dd3"}')
    net = _networks(address).create(1, "test", "192.0.2.1/24")
    assert net == Network("net59a0526477dd3", 1, "test", "192.0.2.0", 24, "")
    method, path, body = requests[0]
    assert (method, path) == ("POST", "/network/create")
    assert parse_qs(body) == {
        "DCID": ["1"],
        "description": ["test"],
        "v4_subnet": ["192.0.2.0"],
        "v4_subnet_mask": ["24"],
    }


def test_create_without_subnet_sends_no_range(serve):
    address, requests = serve(200, '{"NETWORKID": "net1"}')
    net = _networks(address).create(2, "plain", None)
    assert (net.v4_subnet, net.v4_subnet_mask, net.region_id) == ("", 0, 2)
    assert parse_qs(requests[0][2]) == {"DCID": ["2"], "description": ["plain"]}


def test_create_invalid_subnet():
    networks = NetworkAPI(Transport("placeholder", "http://127.0.0.1:9/"))
    with pytest.raises(VultrError) as info:
        networks.create(1, "test", "not-a-network")
    assert str(info.value) == "Invalid network"


def test_delete_ok(serve):
    address, requests = serve(200, "{no-response?!}")
    assert _networks(address).delete("id-1") is None
    assert requests[0][1] == "/network/destroy"
    assert parse_qs(requests[0][2]) == {"NETWORKID": ["id-1"]}