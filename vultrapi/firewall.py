"""Firewall groups and rules."""

from __future__ import annotations

import ipaddress
from dataclasses import dataclass, field
from typing import Any, Mapping, Union

from .transport import Transport, VultrError

IPNetwork = Union[ipaddress.IPv4Network, ipaddress.IPv6Network]


def _text(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    return "" if value is None else str(value)


def _number(data: Mapping[str, Any], key: str) -> int:
    value = data.get(key)
    if value is None or value == "":
        return 0
    if isinstance(value, bool):
        raise VultrError(f"invalid integer for {key}: {value!r}")
    if isinstance(value, float):
        if value.is_integer():
            return int(value)
        raise VultrError(f"invalid integer for {key}: {value!r}")
    try:
        return int(str(value), 10)
    except ValueError as exc:
        raise VultrError(f"invalid integer for {key}: {value!r}") from exc


def _records(payload: Any) -> list[Any]:
    return list(payload.values()) if isinstance(payload, dict) else []


@dataclass
class FirewallGroup:
    id: str = ""
    description: str = ""
    created: str = ""
    modified: str = ""
    instance_count: int = 0
    rule_count: int = 0
    max_rule_count: int = 0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "FirewallGroup":
        return cls(
            id=_text(data, "FIREWALLGROUPID"),
            description=_text(data, "description"),
            created=_text(data, "date_created"),
            modified=_text(data, "date_modified"),
            instance_count=_number(data, "instance_count"),
            rule_count=_number(data, "rule_count"),
            max_rule_count=_number(data, "max_rule_count"),
        )


@dataclass
class FirewallRule:
    rule_number: int = 0
    action: str = ""
    protocol: str = ""
    port: str = ""
    network: IPNetwork = field(default_factory=lambda: ipaddress.ip_network("0.0.0.0/0"))
    notes: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "FirewallRule":
        """Build a rule; number fields may arrive as JSON numbers or strings."""
        rule_number = _number(data, "rulenumber")
        subnet_size = _number(data, "subnet_size")
        subnet = _text(data, "subnet")
        if subnet:
            try:
                network = ipaddress.ip_network(f"{subnet}/{subnet_size}", strict=False)
            except ValueError as exc:
                raise VultrError("Failed to parse subnet from Vultr API") from exc
        else:
            # Replies such as the one to rule creation carry no subnet at all.
            network = ipaddress.ip_network("0.0.0.0/0")
        return cls(
            rule_number=rule_number,
            action=_text(data, "action"),
            protocol=_text(data, "protocol"),
            port=_text(data, "port"),
            network=network,
            notes=_text(data, "notes"),
        )


class FirewallAPI:
    """Operations on firewall groups and their rules."""

    def __init__(self, transport: Transport) -> None:
        self.transport = transport

    def list_groups(self) -> list[FirewallGroup]:
        groups = [FirewallGroup.from_dict(g) for g in _records(self.transport.get("firewall/group_list"))]
        return sorted(groups, key=lambda g: g.description.lower())

    def get_group(self, group_id: str) -> FirewallGroup:
        for group in self.list_groups():
            if group.id == group_id:
                return group
        raise VultrError(f"Firewall group with ID {group_id} not found")

    def create_group(self, description: str = "") -> str:
        values = {"description": description} if description else {}
        result = self.transport.post("firewall/group_create", values)
        return FirewallGroup.from_dict(result if isinstance(result, dict) else {}).id

    def delete_group(self, group_id: str) -> None:
        self.transport.post("firewall/group_delete", {"FIREWALLGROUPID": group_id})

    def set_group_description(self, group_id: str, description: str) -> None:
        self.transport.post(
            "firewall/group_set_description",
            {"FIREWALLGROUPID": group_id, "description": description},
        )

    def list_rules(self, group_id: str) -> list[FirewallRule]:
        merged: dict[str, Any] = {}
        for ip_type in ("v4", "v6"):
            payload = self.transport.get(
                f"firewall/rule_list?direction=in&FIREWALLGROUPID={group_id}&ip_type={ip_type}"
            )
            if isinstance(payload, dict):
                merged.update(payload)
        rules = [FirewallRule.from_dict(r) for r in merged.values()]
        return sorted(rules, key=lambda r: r.rule_number)

    def create_rule(self, group_id: str, protocol: str, port: str, network: Any, notes: str = "") -> int:
        """Create an inbound rule; ``protocol`` is one of icmp, tcp, udp, gre."""
        try:
            net = ipaddress.ip_network(network, strict=False)
        except (TypeError, ValueError) as exc:
            raise VultrError("Invalid network") from exc
        values = {
            "FIREWALLGROUPID": group_id,
            "direction": "in",
            "protocol": protocol,
            "ip_type": "v4" if net.version == 4 else "v6",
            "subnet": str(net.network_address),
            "subnet_size": str(net.prefixlen),
        }
        if port:
            values["port"] = port
        if notes:
            values["notes"] = notes
        result = self.transport.post("firewall/rule_create", values)
        return FirewallRule.from_dict(result if isinstance(result, dict) else {}).rule_number

    def delete_rule(self, rule_number: int, group_id: str) -> None:
        self.transport.post(
            "firewall/rule_delete",
            {"FIREWALLGROUPID": group_id, "rulenumber": str(rule_number)},
        )