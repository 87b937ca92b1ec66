"""Block storage service state checks."""

from __future__ import annotations

import logging

from stackops.openstack.client import OpenStack

__all__ = ["volume_service_check"]

_log = logging.getLogger(__name__)


def volume_service_check(client: OpenStack, service_name: str) -> bool:
    """Return True if a block storage service matching ``service_name`` is up and enabled."""
    _log.info("Checking %s service is running or not", service_name)
    services = client.list("/os-services", "services")
    return any(
        service_name in service.get("binary", "")
        and service.get("state") == "up"
        and service.get("status") == "enabled"
        for service in services
    )