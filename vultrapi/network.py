"""Private networks on the account."""

from __future__ import annotations

import dataclasses
import ipaddress
from dataclasses import dataclass
from typing import Any, Mapping

from .firewall import _number, _records, _text
from .transport import Transport, VultrError


@dataclass
class Network:
    id: str = ""
    region_id: int = 0
    description: str = ""
    v4_subnet: str = ""
    v4_subnet_mask: int = 0
    created: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Network":
        return cls(
            id=_text(data, "NETWORKID"),
            region_id=_number(data, "DCID"),
            description=_text(data, "description"),
            v4_subnet=_text(data, "v4_subnet"),
            v4_subnet_mask=_number(data, "v4_subnet_mask"),
            created=_text(data, "date_created"),
        )


def _ipv4_range(subnet: Any) -> tuple[str, int]:
    """Address and prefix length of an IPv4 subnet; empty for anything else."""
    if subnet is None:
        return "", 0
    try:
        parsed = ipaddress.ip_network(subnet, strict=False)
    except (TypeError, ValueError) as exc:
        raise VultrError("Invalid network") from exc
    if parsed.version != 4:
        return "", 0
    return str(parsed.network_address), parsed.prefixlen


class NetworkAPI:
    """Create, list and delete private networks."""

    def __init__(self, transport: Transport) -> None:
        self.transport = transport

    def list(self) -> list[Network]:
        found = map(Network.from_dict, _records(self.transport.get("network/list")))
        return sorted(found, key=lambda net: (net.description.lower(), net.created))

    def create(self, region_id: int, description: str, subnet: Any = None) -> Network:
        """Create a network; an IPv4 ``subnet`` sets its address range."""
        address, mask = _ipv4_range(subnet)
        form = {"DCID": str(region_id), "description": description}
        if address:
            form |= {"v4_subnet": address, "v4_subnet_mask": str(mask)}
        reply = self.transport.post("network/create", form)
        made = Network.from_dict(reply) if isinstance(reply, dict) else Network()
        return dataclasses.replace(
            made,
            region_id=region_id,
            description=description,
            v4_subnet=address,
            v4_subnet_mask=mask,
        )

    def delete(self, network_id: str) -> None:
        self.transport.post("network/destroy", {"NETWORKID": network_id})