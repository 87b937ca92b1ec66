"""Keystone services."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from stackops.openstack.client import OpenStack, OpenStackError

__all__ = [
    "SERVICE_NOT_FOUND",
    "Service",
    "ServiceNotFoundError",
    "create_service",
    "get_service",
    "update_service",
    "delete_service",
]

_log = logging.getLogger(__name__)

SERVICE_NOT_FOUND = "service not found in keystone"


@dataclass
class Service:
    """A service registered in the catalog."""

    name: str
    type: str
    description: str = ""
    enabled: bool = False


class ServiceNotFoundError(OpenStackError):
    """Raised when no service with the requested type and name exists."""

    def __init__(self, service_name: str) -> None:
        super().__init__(f"{service_name} {SERVICE_NOT_FOUND}")
        self.service_name = service_name


def _body(service: Service) -> dict[str, Any]:
    return {
        "service": {
            "type": service.type,
            "enabled": service.enabled,
            "name": service.name,
            "description": service.description,
        }
    }


def get_service(client: OpenStack, service_type: str, service_name: str) -> dict[str, Any]:
    """Return the first service of the type and name; raise ServiceNotFoundError if none."""
    found = client.list("/services", "services", {"type": service_type, "name": service_name})
    if not found:
        raise ServiceNotFoundError(service_name)
    return found[0]


def create_service(client: OpenStack, service: Service) -> str:
    """Return the ID of the service, creating it if it does not exist."""
    try:
        return get_service(client, service.type, service.name)["id"]
    except ServiceNotFoundError:
        pass
    created = client.post("/services", _body(service))["service"]
    _log.info("Service Created - Servicename %s, ID %s", service.name, created["id"])
    return created["id"]


def update_service(client: OpenStack, service: Service, service_id: str) -> None:
    """Update the type, state, name and description of the service with ``service_id``."""
    client.patch(f"/services/{service_id}", _body(service))


def delete_service(client: OpenStack, service_id: str) -> None:
    """Delete the service with ``service_id``; a service that is already gone is fine."""
    _log.info("Delete service with id %s", service_id)
    try:
        client.delete(f"/services/{service_id}")
    except OpenStackError as exc:
        if "Resource not found" not in str(exc):
            raise