"""Client library for the Vultr v1 cloud API: firewalls, addresses, networks, catalogs and server administration."""

__version__ = "0.1.0"

__all__ = [
    "catalog",
    "firewall",
    "ip",
    "network",
    "reservedip",
    "server_admin",
    "transport",
]