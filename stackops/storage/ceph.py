"""Ceph client settings: pools, users, OSD capabilities and monitor lists."""

from __future__ import annotations

import enum
import ipaddress
from dataclasses import dataclass, field
from typing import Mapping

__all__ = [
    "Defaults",
    "PoolSpec",
    "Backend",
    "NoDefaultPoolError",
    "get_pool",
    "get_rbd_user",
    "get_osd_caps",
    "validate_mons",
]


class Defaults(str, enum.Enum):
    """Default Ceph user and pool names."""

    USER = "openstack"
    CINDER_POOL = "volumes"
    CINDER_BACKUP_POOL = "backups"
    NOVA_POOL = "vms"
    GLANCE_POOL = "images"
    ERROR = ""


@dataclass
class PoolSpec:
    """A Ceph pool definition."""

    pool_name: str


@dataclass
class Backend:
    """Ceph client parameters."""

    cluster_fsid: str
    cluster_mon_hosts: str
    client_key: str
    user: str = ""
    pools: dict[str, PoolSpec] = field(default_factory=dict)


class NoDefaultPoolError(ValueError):
    """Raised when a service has no configured pool and no default one."""


_DEFAULT_POOLS = {
    "cinder": Defaults.CINDER_POOL,
    "backup": Defaults.CINDER_BACKUP_POOL,
    "nova": Defaults.NOVA_POOL,
    "glance": Defaults.GLANCE_POOL,
}


def get_pool(pools: Mapping[str, PoolSpec], service: str) -> str:
    """Return the pool configured for ``service``, or the service's default pool."""
    if service in pools:
        return pools[service].pool_name
    try:
        return _DEFAULT_POOLS[service].value
    except KeyError:
        raise NoDefaultPoolError("No default pool found") from None


def get_rbd_user(user: str) -> str:
    """Return ``user``, or the default Ceph user when it is empty."""
    return user or Defaults.USER.value


def get_osd_caps(pools: Mapping[str, PoolSpec]) -> str:
    """Return the OSD caps for the given pools, ordered by pool name."""
    # sorted so the result, and any hash over it, is stable
    names = sorted(pool.pool_name for pool in pools.values())
    caps = [f"profile rbd pool={name}" for name in names if name]
    if not caps:
        caps = [f"profile rbd pool={Defaults.CINDER_POOL.value}"]
    return ",".join(caps)


def _is_ip(text: str) -> bool:
    if "%" in text:
        return False
    try:
        ipaddress.ip_address(text)
    except ValueError:
        return False
    return True


def validate_mons(ip_list: str) -> bool:
    """Return True if every entry of the comma separated list is a valid IP address."""
    return all(_is_ip(ip.strip(" ")) for ip in ip_list.split(","))