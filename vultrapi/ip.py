"""IPv4 and IPv6 addresses of virtual machines and their reverse DNS."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Mapping, TypeVar

from .transport import Transport

T = TypeVar("T")


def _text(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    return "" if value is None else str(value)


def _flatten(payload: Any, build: Callable[[Mapping[str, Any]], T]) -> list[T]:
    if not isinstance(payload, dict):
        return []
    return [build(item) for items in payload.values() if isinstance(items, list) for item in items]


@dataclass
class IPv4:
    ip: str = ""
    netmask: str = ""
    gateway: str = ""
    mac: str = ""
    type: str = ""
    reverse_dns: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "IPv4":
        return cls(
            ip=_text(data, "ip"),
            netmask=_text(data, "netmask"),
            gateway=_text(data, "gateway"),
            mac=_text(data, "mac_address"),
            type=_text(data, "type"),
            reverse_dns=_text(data, "reverse"),
        )


@dataclass
class IPv6:
    ip: str = ""
    network: str = ""
    network_size: str = ""
    type: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "IPv6":
        return cls(
            ip=_text(data, "ip"),
            network=_text(data, "network"),
            network_size=_text(data, "network_size"),
            type=_text(data, "type"),
        )


@dataclass
class ReverseDNSIPv6:
    ip: str = ""
    reverse_dns: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ReverseDNSIPv6":
        return cls(ip=_text(data, "ip"), reverse_dns=_text(data, "reverse"))


class IPAPI:
    """Address management for virtual machines."""

    def __init__(self, transport: Transport) -> None:
        self.transport = transport

    def list_ipv4(self, server_id: str) -> list[IPv4]:
        payload = self.transport.get(f"server/list_ipv4?SUBID={server_id}&public_network=yes")
        return sorted(_flatten(payload, IPv4.from_dict), key=lambda a: (a.type, a.ip))

    def create_ipv4(self, server_id: str, reboot: bool) -> None:
        self.transport.post(
            "server/create_ipv4",
            {"SUBID": server_id, "reboot": "true" if reboot else "false"},
        )

    def delete_ipv4(self, server_id: str, ip: str) -> None:
        self.transport.post("server/destroy_ipv4", {"SUBID": server_id, "ip": ip})

    def list_ipv6(self, server_id: str) -> list[IPv6]:
        payload = self.transport.get(f"server/list_ipv6?SUBID={server_id}")
        return sorted(_flatten(payload, IPv6.from_dict), key=lambda a: (a.type, a.ip))

    def list_ipv6_reverse_dns(self, server_id: str) -> list[ReverseDNSIPv6]:
        payload = self.transport.get(f"server/reverse_list_ipv6?SUBID={server_id}")
        return sorted(_flatten(payload, ReverseDNSIPv6.from_dict), key=lambda a: a.ip)

    def delete_ipv6_reverse_dns(self, server_id: str, ip: str) -> None:
        self.transport.post("server/reverse_delete_ipv6", {"SUBID": server_id, "ip": ip})

    def set_ipv6_reverse_dns(self, server_id: str, ip: str, entry: str) -> None:
        self.transport.post("server/reverse_set_ipv6", {"SUBID": server_id, "ip": ip, "entry": entry})

    def default_ipv4_reverse_dns(self, server_id: str, ip: str) -> None:
        self.transport.post("server/reverse_default_ipv4", {"SUBID": server_id, "ip": ip})

    def set_ipv4_reverse_dns(self, server_id: str, ip: str, entry: str) -> None:
        self.transport.post("server/reverse_set_ipv4", {"SUBID": server_id, "ip": ip, "entry": entry})