"""Read-only catalogues: ISO images, operating systems, plans and regions."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from .firewall import _number, _records, _text
from .transport import Transport, VultrError


def _flag(data: Mapping[str, Any], key: str) -> bool:
    value = data.get(key)
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).strip().lower() in ("true", "1", "yes")


def _loose_float(text: str) -> float:
    try:
        return float(text.strip())
    except ValueError:
        return 0.0


def _loose_int(text: str) -> int:
    try:
        return int(text.strip(), 10)
    except ValueError:
        return 0


@dataclass
class ISO:
    id: int = 0
    created: str = ""
    filename: str = ""
    size: int = 0
    md5sum: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ISO":
        return cls(
            id=_number(data, "ISOID"),
            created=_text(data, "date_created"),
            filename=_text(data, "filename"),
            size=_number(data, "size"),
            md5sum=_text(data, "md5sum"),
        )


@dataclass
class OperatingSystem:
    id: int = 0
    name: str = ""
    arch: str = ""
    family: str = ""
    windows: bool = False
    surcharge: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "OperatingSystem":
        return cls(
            id=_number(data, "OSID"),
            name=_text(data, "name"),
            arch=_text(data, "arch"),
            family=_text(data, "family"),
            windows=_flag(data, "windows"),
            surcharge=_text(data, "surcharge"),
        )


@dataclass
class Plan:
    id: int = 0
    name: str = ""
    vcpus: int = 0
    ram: str = ""
    disk: str = ""
    bandwidth: str = ""
    price: str = ""
    plan_type: str = ""
    windows: bool = False
    regions: list[int] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Plan":
        locations = data.get("available_locations") or []
        try:
            regions = [int(region) for region in locations]
        except (TypeError, ValueError) as exc:
            raise VultrError(f"invalid available_locations: {locations!r}") from exc
        return cls(
            id=_number(data, "VPSPLANID"),
            name=_text(data, "name"),
            vcpus=_number(data, "vcpu_count"),
            ram=_text(data, "ram"),
            disk=_text(data, "disk"),
            bandwidth=_text(data, "bandwidth"),
            price=_text(data, "price_per_month"),
            plan_type=_text(data, "plan_type"),
            windows=_flag(data, "windows"),
            regions=regions,
        )

    def _sort_key(self) -> tuple[float, int, int, int]:
        return (
            _loose_float(self.price),
            self.vcpus,
            _loose_int(self.ram),
            _loose_int(self.disk),
        )


@dataclass
class Region:
    id: int = 0
    name: str = ""
    country: str = ""
    continent: str = ""
    state: str = ""
    ddos: bool = False
    block_storage: bool = False
    code: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Region":
        return cls(
            id=_number(data, "DCID"),
            name=_text(data, "name"),
            country=_text(data, "country"),
            continent=_text(data, "continent"),
            state=_text(data, "state"),
            ddos=_flag(data, "ddos_protection"),
            block_storage=_flag(data, "block_storage"),
            code=_text(data, "regioncode"),
        )


class CatalogAPI:
    """Lists of what can be deployed and where."""

    def __init__(self, transport: Transport) -> None:
        self.transport = transport

    def list_isos(self) -> list[ISO]:
        isos = [ISO.from_dict(item) for item in _records(self.transport.get("iso/list"))]
        return sorted(isos, key=lambda iso: (iso.filename.lower(), iso.created))

    def list_os(self) -> list[OperatingSystem]:
        systems = [OperatingSystem.from_dict(item) for item in _records(self.transport.get("os/list"))]
        return sorted(systems, key=lambda system: system.name.lower())

    def list_plans(self) -> list[Plan]:
        """Plans ordered by price, then vCPUs, RAM and disk."""
        plans = [Plan.from_dict(item) for item in _records(self.transport.get("plans/list"))]
        return sorted(plans, key=Plan._sort_key)

    def list_plans_for_region(self, region_id: int) -> list[int]:
        payload = self.transport.get(f"regions/availability?DCID={region_id}")
        if not isinstance(payload, list):
            return []
        try:
            return [int(plan_id) for plan_id in payload]
        except (TypeError, ValueError) as exc:
            raise VultrError(f"invalid plan list: {payload!r}") from exc

    def list_regions(self) -> list[Region]:
        regions = [Region.from_dict(item) for item in _records(self.transport.get("regions/list"))]
        return sorted(regions, key=lambda region: (region.continent, region.name))