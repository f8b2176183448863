# vultrapi

A small Python client for the Vultr v1 HTTP API. It uses only the Python
standard library and needs Python 3.10 or later.

It covers:

- firewall groups and their inbound rules (`vultrapi.firewall.FirewallAPI`)
- IPv4 and IPv6 addresses of a server and their reverse DNS entries
  (`vultrapi.ip.IPAPI`)
- reserved IPs, including attach, detach and convert
  (`vultrapi.reservedip.ReservedIPAPI`)
- private networks (`vultrapi.network.NetworkAPI`)
- the catalogs of ISO images, operating systems, plans and regions
  (`vultrapi.catalog.CatalogAPI`)
- administration of an existing server: OS and application changes, ISO
  attach and detach, firewall group membership, bandwidth history, private
  networks, backup schedules and plan upgrades
  (`vultrapi.server_admin.ServerAdminAPI`)

## The transport

Every API class is built from a `vultrapi.transport.Transport`, which holds the
API key and the base URL (`https://api.vultr.com/v1/` unless another is given):

```python
from vultrapi.transport import Transport

transport = Transport(api_key="placeholder")
```

`Transport.get(path)` returns the decoded JSON reply. `Transport.post(path, values)`
sends `values` as a form and returns the decoded reply, or `None` when the reply
is empty or not JSON. A different `base_url` lets the API classes talk to a
test server.

## Errors

Every failure raises `vultrapi.transport.VultrError`:

- a reply with a status other than 200: the message is the body the API sent
  back (or `HTTP status <code>` if it was empty), and `status` holds the code;
- a connection failure, or a GET reply that is not valid JSON;
- a record the package cannot read, such as a non-numeric rule number or a bad
  subnet;
- a lookup that finds nothing, as in `FirewallAPI.get_group` and
  `ReservedIPAPI.get`.

## Usage

Listing calls return lists of dataclasses in a fixed order, and an empty list
when there are no results.

### Catalog

```python
from vultrapi.catalog import CatalogAPI

catalog = CatalogAPI(transport)
for region in catalog.list_regions():        # by continent, then name
    print(region.id, region.name, region.continent)

for plan in catalog.list_plans():            # by price, vCPUs, RAM, disk
    print(plan.id, plan.name, plan.price, plan.regions)

plan_ids = catalog.list_plans_for_region(1)
systems = catalog.list_os()                  # by name, ignoring case
isos = catalog.list_isos()                   # by filename, then creation date
```

### Firewalls

```python
import ipaddress
from vultrapi.firewall import FirewallAPI

firewall = FirewallAPI(transport)
group_id = firewall.create_group("web")
number = firewall.create_rule(group_id, "tcp", "443", ipaddress.ip_network("0.0.0.0/0"), "https")
for rule in firewall.list_rules(group_id):   # IPv4 and IPv6 rules, by rule number
    print(rule.rule_number, rule.protocol, rule.port, rule.network)
firewall.delete_rule(number, group_id)
```

`create_rule` accepts anything `ipaddress.ip_network` understands, such as
`"10.0.0.0/24"`, and picks the `v4` or `v6` rule type from it. A rule that comes
back without a subnet gets the network `0.0.0.0/0`.

### Addresses

```python
from vultrapi.ip import IPAPI
from vultrapi.reservedip import ReservedIPAPI

ips = IPAPI(transport)
for address in ips.list_ipv4("123456789"):   # by type, then address
    print(address.type, address.ip, address.reverse_dns)
ips.set_ipv4_reverse_dns("123456789", "192.0.2.10", "host1.example.com")

reserved = ReservedIPAPI(transport)
ip_id = reserved.create(1, "v4", label="frontend")
reserved.attach("192.0.2.20", "123456789")
```

### Private networks

```python
from vultrapi.network import NetworkAPI

networks = NetworkAPI(transport)
net = networks.create(1, "backend", "10.99.0.0/24")
print(net.id, net.v4_subnet, net.v4_subnet_mask)
```

A subnet is optional; an IPv6 subnet is ignored.

### Existing servers

```python
from vultrapi.server_admin import BackupSchedule, ServerAdminAPI

admin = ServerAdminAPI(transport)
admin.set_firewall_group("123456789", group_id)
for day in admin.bandwidth("123456789"):
    print(day["date"], day["incoming"], day.get("outgoing"))
admin.set_backup_schedule("123456789", BackupSchedule(cron_type="weekly", hour=8, dow=6))
print(admin.get_backup_schedule("123456789").enabled)
print(admin.list_upgrade_plans("123456789"))
```

## What this package does not do

There is no single client object bundling the API classes, and no command-line
program. The package cannot create, list, rename, start, stop, reboot,
reinstall or delete servers, and it does not manage startup scripts,
snapshots or SSH keys. `ServerAdminAPI` works only on servers whose IDs you
already have.

## Tests

The tests use pytest, which the `test` extra installs.