"""Reserved IP addresses."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Mapping

from .firewall import _number, _records, _text
from .transport import Transport, VultrError


def _numeric_id(data: Mapping[str, Any], key: str, empties: frozenset[str]) -> str:
    """Normalise an identifier that may arrive as a JSON number or a string."""
    value = data.get(key)
    if value is None:
        return ""
    if isinstance(value, bool):
        text = "true" if value else "false"
    elif isinstance(value, int):
        return "" if value == 0 else str(value)
    elif isinstance(value, float):
        if value == 0:
            return ""
        number = value
        text = ""
    else:
        text = str(value)
    if text:
        if text in empties:
            return ""
        try:
            number = float(text)
        except ValueError as exc:
            raise VultrError(f"invalid identifier for {key}: {value!r}") from exc
    elif not isinstance(value, float):
        return ""
    if number.is_integer():
        return str(int(number))
    return format(Decimal(repr(number)), "f")


_ID_EMPTY = frozenset({"0"})
_ATTACHED_EMPTY = frozenset({"0", "false"})


@dataclass
class ReservedIP:
    id: str = ""
    region_id: int = 0
    ip_type: str = ""
    subnet: str = ""
    subnet_size: int = 0
    label: str = ""
    attached_to: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ReservedIP":
        """Build a reserved IP; identifiers may be numbers, strings or false."""
        return cls(
            id=_numeric_id(data, "SUBID", _ID_EMPTY),
            region_id=_number(data, "DCID"),
            ip_type=_text(data, "ip_type"),
            subnet=_text(data, "subnet"),
            subnet_size=_number(data, "subnet_size"),
            label=_text(data, "label"),
            attached_to=_numeric_id(data, "attached_SUBID", _ATTACHED_EMPTY),
        )


class ReservedIPAPI:
    """Manage reserved IPs and their attachment to virtual machines."""

    def __init__(self, transport: Transport) -> None:
        self.transport = transport

    def list(self) -> list[ReservedIP]:
        ips = [ReservedIP.from_dict(item) for item in _records(self.transport.get("reservedip/list"))]
        return sorted(ips, key=lambda ip: (ip.label.lower(), ip.ip_type, ip.subnet))

    def get(self, ip_id: str) -> ReservedIP:
        payload = self.transport.get("reservedip/list")
        if isinstance(payload, dict) and ip_id in payload:
            return ReservedIP.from_dict(payload[ip_id])
        raise VultrError(f"IP with ID {ip_id} not found")

    def create(self, region_id: int, ip_type: str, label: str = "") -> str:
        values = {"DCID": str(region_id), "ip_type": ip_type}
        if label:
            values["label"] = label
        result = self.transport.post("reservedip/create", values)
        return ReservedIP.from_dict(result if isinstance(result, dict) else {}).id

    def destroy(self, ip_id: str) -> None:
        self.transport.post("reservedip/destroy", {"SUBID": ip_id})

    def attach(self, ip: str, server_id: str) -> None:
        self.transport.post("reservedip/attach", {"ip_address": ip, "attach_SUBID": server_id})

    def detach(self, server_id: str, ip: str) -> None:
        self.transport.post("reservedip/detach", {"ip_address": ip, "detach_SUBID": server_id})

    def convert(self, server_id: str, ip: str) -> str:
        """Turn a machine's existing address into a reserved IP and return its ID."""
        result = self.transport.post("reservedip/convert", {"SUBID": server_id, "ip_address": ip})
        return ReservedIP.from_dict(result if isinstance(result, dict) else {}).id