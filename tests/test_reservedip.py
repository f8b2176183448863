import threading
from http import HTTPStatus
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from urllib.parse import parse_qs

import pytest

from vultrapi.reservedip import ReservedIP, ReservedIPAPI
from vultrapi.transport import Transport, VultrError


class _Canned(BaseHTTPRequestHandler):
    def _respond(self):
        incoming = self.rfile.read(int(self.headers.get("Content-Length", "0")))
        self.server.log.append((self.command, self.path, incoming.decode()))
        status, body = self.server.canned
        head = f"HTTP/1.0 {status} {HTTPStatus(status).phrase}\r\nContent-Length: {len(body)}\r\n\r\n"
        self.wfile.write(head.encode() + body)
        self.close_connection = True

    do_GET = do_POST = _respond

    def log_message(self, fmt, *args):
        return None


@pytest.fixture
def serve():
    active = []

    def start(status, body):
        server = ThreadingHTTPServer(("127.0.0.1", 0), _Canned)
        server.canned = (status, body.encode())
        server.log = []
        threading.Thread(target=server.serve_forever, daemon=True).start()
        active.append(server)
        return f"http://127.0.0.1:{server.server_port}/", server.log

    yield start
    for server in active:
        server.shutdown()
        server.server_close()


def _reserved(address):
    return ReservedIPAPI(Transport("placeholder", address))


LIST_BODY = """{
      "9":{"SUBID":9,"DCID":5,"ip_type":"v6","subnet":"subnet2",
           "subnet_size":16,"label":"beta","attached_SUBID":123},
      "4":{"SUBID":4,"DCID":5,"ip_type":"v4","subnet":"subnet1",
           "subnet_size":8,"label":"alpha","attached_SUBID":false}
      }"""

FAILING = {
    "list": lambda r: r.list(),
    "create": lambda r: r.create(1, "ip", ""),
    "destroy": lambda r: r.destroy("subid"),
    "attach": lambda r: r.attach("ip", "subid"),
    "convert": lambda r: r.convert("subid", "ip"),
    "detach": lambda r: r.detach("subid", "ip"),
}


@pytest.mark.parametrize("call", list(FAILING.values()), ids=list(FAILING))
def test_fail(serve, call):
    address, _ = serve(406, "")
    with pytest.raises(VultrError) as info:
        call(ReservedIPAPI(Transport("placeholder", address)))
    assert info.value.status == 406


def test_list_error_status_with_empty_object(serve):
    address, _ = serve(406, "{}")
    with pytest.raises(VultrError) as info:
        _reserved(address).list()
    assert str(info.value) == "{}"


def test_list_ok(serve):
    address, _ = serve(200, LIST_BODY)
    assert _reserved(address).list() == [
        ReservedIP("4", 5, "v4", "subnet1", 8, "alpha", ""),
        ReservedIP("9", 5, "v6", "subnet2", 16, "beta", "123"),
    ]


def test_get_found(serve):
    address, _ = serve(200, LIST_BODY)
    ip = _reserved(address).get("9")
    assert (ip.id, ip.label, ip.attached_to) == ("9", "beta", "123")


def test_get_not_found(serve):
    address, _ = serve(200, LIST_BODY)
    with pytest.raises(VultrError) as info:
        _reserved(address).get("7")
    assert str(info.value) == "IP with ID 7 not found"


@pytest.mark.parametrize(
    "reply, args, form",
    [
        ('{"SUBID":4711}', (1, "ip", ""), {"DCID": ["1"], "ip_type": ["ip"]}),
        ('{"SUBID":"4711"}', (2, "v4", "web"), {"DCID": ["2"], "ip_type": ["v4"], "label": ["web"]}),
    ],
)
def test_create_ok(serve, reply, args, form):
    address, log = serve(200, reply)
    assert _reserved(address).create(*args) == "4711"
    assert log[0][1] == "/reservedip/create"
    assert parse_qs(log[0][2]) == form


def test_convert_ok(serve):
    address, log = serve(200, '{"SUBID":4711}')
    assert _reserved(address).convert("subid", "ip") == "4711"
    assert parse_qs(log[0][2]) == {"SUBID": ["subid"], "ip_address": ["ip"]}


@pytest.mark.parametrize(
    "call, path, form",
    [
        (lambda r: r.destroy("subid"), "/reservedip/destroy", {"SUBID": ["subid"]}),
        (lambda r: r.attach("ip", "subid"), "/reservedip/attach",
         {"ip_address": ["ip"], "attach_SUBID": ["subid"]}),
        (lambda r: r.detach("subid", "ip"), "/reservedip/detach",
         {"ip_address": ["ip"], "detach_SUBID": ["subid"]}),
    ],
    ids=["destroy", "attach", "detach"],
)
def test_action_ok(serve, call, path, form):
    address, log = serve(200, "")
    assert call(_reserved(address)) is None
    assert log[0][1] == path
    assert parse_qs(log[0][2]) == form


@pytest.mark.parametrize(
    "raw, expected",
    [(4711.0, "4711"), ("4711", "4711"), ("0", ""), (0, ""), (None, ""), ("12.5", "12.5")],
)
def test_from_dict_normalises_subid(raw, expected):
    assert ReservedIP.from_dict({"SUBID": raw}).id == expected


@pytest.mark.parametrize("raw", [False, "false", "0", 0, None])
def test_from_dict_unattached_values(raw):
    assert ReservedIP.from_dict({"attached_SUBID": raw}).attached_to == ""


@pytest.mark.parametrize("data", [{"SUBID": "abc"}, {"DCID": "x1"}])
def test_from_dict_rejects_bad_numbers(data):
    with pytest.raises(VultrError):
        ReservedIP.from_dict(data)