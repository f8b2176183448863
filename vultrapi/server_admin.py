"""Administration of existing virtual machines: OS, ISO, firewall, backups, networks and plans."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from .catalog import OperatingSystem, _flag
from .firewall import _number, _records, _text
from .transport import Transport, VultrError

NO_FIREWALL_GROUP = "0"


@dataclass
class ISOStatus:
    state: str = ""
    iso_id: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ISOStatus":
        return cls(state=_text(data, "state"), iso_id=_text(data, "ISOID"))


@dataclass
class AppInfo:
    info: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AppInfo":
        return cls(info=_text(data, "app_info"))


@dataclass
class PrivateNetwork:
    id: str = ""
    mac_address: str = ""
    ip_address: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PrivateNetwork":
        return cls(
            id=_text(data, "NETWORKID"),
            mac_address=_text(data, "mac_address"),
            ip_address=_text(data, "ip_address"),
        )


@dataclass
class BackupSchedule:
    """A scheduled backup of a server."""

    cron_type: str = ""
    next_scheduled_time_utc: str = ""
    hour: int = 0
    dow: int = 0
    dom: int = 0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "BackupSchedule":
        return cls(
            cron_type=_text(data, "cron_type"),
            next_scheduled_time_utc=_text(data, "next_scheduled_time_utc"),
            hour=_number(data, "hour"),
            dow=_number(data, "dow"),
            dom=_number(data, "dom"),
        )


@dataclass
class BackupScheduleResponse(BackupSchedule):
    """A server's backup schedule together with whether backups are enabled."""

    enabled: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "BackupScheduleResponse":
        schedule = BackupSchedule.from_dict(data)
        return cls(
            cron_type=schedule.cron_type,
            next_scheduled_time_utc=schedule.next_scheduled_time_utc,
            hour=schedule.hour,
            dow=schedule.dow,
            dom=schedule.dom,
            enabled=_flag(data, "enabled"),
        )


def _int_list(payload: Any) -> list[int]:
    if not isinstance(payload, list):
        return []
    try:
        return [int(item) for item in payload]
    except (TypeError, ValueError) as exc:
        raise VultrError(f"invalid plan list: {payload!r}") from exc


class ServerAdminAPI:
    """Operations that change or inspect an existing virtual machine."""

    def __init__(self, transport: Transport) -> None:
        self.transport = transport

    def change_os(self, server_id: str, os_id: int) -> None:
        self.transport.post("server/os_change", {"SUBID": server_id, "OSID": str(os_id)})

    def list_os(self, server_id: str) -> list[OperatingSystem]:
        """Operating systems the server can be changed to, ordered by name."""
        payload = self.transport.get(f"server/os_change_list?SUBID={server_id}")
        systems = [OperatingSystem.from_dict(item) for item in _records(payload)]
        return sorted(systems, key=lambda system: system.name.lower())

    def attach_iso(self, server_id: str, iso_id: int) -> None:
        self.transport.post("server/iso_attach", {"SUBID": server_id, "ISOID": str(iso_id)})

    def detach_iso(self, server_id: str) -> None:
        self.transport.post("server/iso_detach", {"SUBID": server_id})

    def iso_status(self, server_id: str) -> ISOStatus:
        payload = self.transport.get(f"server/iso_status?SUBID={server_id}")
        return ISOStatus.from_dict(payload) if isinstance(payload, dict) else ISOStatus()

    def restore_backup(self, server_id: str, backup_id: str) -> None:
        self.transport.post("server/restore_backup", {"SUBID": server_id, "BACKUPID": backup_id})

    def restore_snapshot(self, server_id: str, snapshot_id: str) -> None:
        self.transport.post(
            "server/restore_snapshot", {"SUBID": server_id, "SNAPSHOTID": snapshot_id}
        )

    def set_firewall_group(self, server_id: str, group_id: str) -> None:
        self.transport.post(
            "server/firewall_group_set", {"SUBID": server_id, "FIREWALLGROUPID": group_id}
        )

    def unset_firewall_group(self, server_id: str) -> None:
        self.set_firewall_group(server_id, NO_FIREWALL_GROUP)

    def bandwidth(self, server_id: str) -> list[dict[str, str]]:
        """Daily traffic as dicts with date, incoming and (when reported) outgoing bytes."""
        payload = self.transport.get(f"server/bandwidth?SUBID={server_id}")
        if not isinstance(payload, dict):
            return []
        rows: list[dict[str, str]] = [
            {"date": str(entry[0]), "incoming": str(entry[1])}
            for entry in payload.get("incoming_bytes") or []
        ]
        for entry in payload.get("outgoing_bytes") or []:
            date = str(entry[0])
            match = next((row for row in rows if row["date"] == date), None)
            if match is not None:
                match["outgoing"] = str(entry[1])
        return rows

    def change_application(self, server_id: str, app_id: str) -> None:
        self.transport.post("server/app_change", {"SUBID": server_id, "APPID": app_id})

    def application_info(self, server_id: str) -> AppInfo:
        payload = self.transport.get(f"server/get_app_info?SUBID={server_id}")
        return AppInfo.from_dict(payload) if isinstance(payload, dict) else AppInfo()

    def list_private_networks(self, server_id: str) -> list[PrivateNetwork]:
        payload = self.transport.get(f"server/private_networks?SUBID={server_id}")
        networks = [PrivateNetwork.from_dict(item) for item in _records(payload)]
        return sorted(networks, key=lambda n: n.mac_address.lower())

    def disable_private_network(self, server_id: str, network_id: str) -> None:
        self.transport.post(
            "server/private_network_disable", {"SUBID": server_id, "NETWORKID": network_id}
        )

    def enable_private_network(self, server_id: str, network_id: str = "") -> None:
        """Enable private networking; ``network_id`` picks one of several in the region."""
        values = {"SUBID": server_id}
        if network_id:
            values["NETWORKID"] = network_id
        self.transport.post("server/private_network_enable", values)

    def get_backup_schedule(self, server_id: str) -> BackupScheduleResponse:
        result = self.transport.post("server/backup_get_schedule", {"SUBID": server_id})
        if not isinstance(result, dict):
            return BackupScheduleResponse()
        return BackupScheduleResponse.from_dict(result)

    def set_backup_schedule(self, server_id: str, schedule: BackupSchedule) -> None:
        self.transport.post(
            "server/backup_set_schedule",
            {
                "SUBID": server_id,
                "cron_type": schedule.cron_type,
                "hour": str(schedule.hour),
                "dow": str(schedule.dow),
                "dom": str(schedule.dom),
            },
        )

    def change_plan(self, server_id: str, plan_id: int) -> None:
        self.transport.post("server/upgrade_plan", {"SUBID": server_id, "VPSPLANID": str(plan_id)})

    def list_upgrade_plans(self, server_id: str) -> list[int]:
        """Plan IDs the server can be upgraded to; empty when none are available."""
        return _int_list(self.transport.get(f"server/upgrade_plan_list?SUBID={server_id}"))