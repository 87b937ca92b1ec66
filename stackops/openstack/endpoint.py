"""Keystone service endpoints."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from stackops.openstack.client import Availability, OpenStack, get_availability

__all__ = [
    "Endpoint",
    "create_endpoint",
    "get_endpoints",
    "delete_endpoint",
    "update_endpoint",
]

_log = logging.getLogger(__name__)


@dataclass
class Endpoint:
    """A service endpoint reached through one interface."""

    name: str
    service_id: str
    availability: Availability | str
    url: str


def _interface(endpoint: Endpoint) -> str:
    availability = endpoint.availability
    return availability.value if isinstance(availability, Availability) else str(availability)


def _body(client: OpenStack, endpoint: Endpoint) -> dict[str, Any]:
    body = {
        "interface": _interface(endpoint),
        "name": endpoint.name,
        "region": client.region,
        "service_id": endpoint.service_id,
        "url": endpoint.url,
    }
    return {key: value for key, value in body.items() if value}


def get_endpoints(
    client: OpenStack, service_id: str, endpoint_interface: str = ""
) -> list[dict[str, Any]]:
    """Return the endpoints of a service in the client's region, optionally of one interface."""
    endpoint_interface = getattr(endpoint_interface, "value", endpoint_interface)
    _log.info("Getting Endpoints for service %s %s", service_id, endpoint_interface)
    params = {"service_id": service_id, "region_id": client.region}
    if endpoint_interface:
        params["interface"] = get_availability(endpoint_interface).value
    found = client.list("/endpoints", "endpoints", params)
    _log.info("Getting Endpoint successfully")
    return found


def create_endpoint(client: OpenStack, endpoint: Endpoint) -> str:
    """Return the ID of the endpoint, creating it if the service has none on this interface."""
    existing = get_endpoints(client, endpoint.service_id, _interface(endpoint))
    if existing:
        return existing[0]["id"]
    created = client.post("/endpoints", {"endpoint": _body(client, endpoint)})
    return created["endpoint"]["id"]


def delete_endpoint(client: OpenStack, endpoint: Endpoint) -> None:
    """Delete every endpoint registered for the service on the endpoint's interface."""
    _log.info("Deleting Endpoint %s %s", endpoint.name, _interface(endpoint))
    for found in get_endpoints(client, endpoint.service_id, _interface(endpoint)):
        client.delete(f"/endpoints/{found['id']}")
        _log.info(
            "Deleted endpoint %s %s - %s",
            found.get("name", ""),
            found.get("interface", ""),
            found.get("url", ""),
        )


def update_endpoint(client: OpenStack, endpoint: Endpoint, endpoint_id: str) -> str:
    """Update the endpoint with ID ``endpoint_id`` and return its ID."""
    _log.info("Updating Endpoint %s %s", endpoint.name, _interface(endpoint))
    updated = client.patch(f"/endpoints/{endpoint_id}", {"endpoint": _body(client, endpoint)})
    _log.info("Updated Endpoint %s %s", endpoint.name, _interface(endpoint))
    return updated["endpoint"]["id"]