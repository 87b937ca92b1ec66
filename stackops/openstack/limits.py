"""Keystone project limits and registered (default) limits."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from stackops.openstack.client import OpenStack, OpenStackError

__all__ = [
    "Limit",
    "RegisteredLimit",
    "create_limit",
    "create_or_update_registered_limit",
    "delete_registered_limit",
    "get_registered_limit",
    "list_registered_limits_by_resource_name",
    "list_registered_limits_by_service_id",
]

_log = logging.getLogger(__name__)


@dataclass
class Limit:
    """An override limit for one resource of a service, in a project or domain."""

    service_id: str
    resource_name: str
    resource_limit: int
    region_id: str = ""
    domain_id: str = ""
    project_id: str = ""
    description: str = ""


@dataclass
class RegisteredLimit:
    """The default limit of one resource of a service, across all projects."""

    service_id: str
    resource_name: str
    default_limit: int = 0
    region_id: str = ""
    description: str = ""


def _without_empty(body: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in body.items() if value != ""}


def create_limit(client: OpenStack, limit: Limit) -> str:
    """Return the ID of the limit on ``limit.resource_name``, creating it if it does not exist."""
    found = client.list("/limits", "limits", {"resource_name": limit.resource_name})
    if len(found) == 1:
        return found[0]["id"]
    if found:
        raise OpenStackError(f'multiple limits named "{limit.resource_name}" found')

    body = _without_empty(
        {
            "resource_name": limit.resource_name,
            "description": limit.description,
            "resource_limit": limit.resource_limit,
            "service_id": limit.service_id,
            "project_id": limit.project_id,
            "domain_id": limit.domain_id,
            "region_id": limit.region_id,
        }
    )
    _log.info("Creating limit %s", limit.resource_name)
    created = client.post("/limits", {"limits": [body]})
    return created["limits"][0]["id"]


def create_or_update_registered_limit(client: OpenStack, limit: RegisteredLimit) -> str:
    """Create the registered limit, or update the default of the existing one; return its ID."""
    found = client.list(
        "/registered_limits", "registered_limits", {"resource_name": limit.resource_name}
    )
    if len(found) == 1:
        limit_id = found[0]["id"]
        _log.info("Updating registered limit %s", limit.resource_name)
        client.patch(
            f"/registered_limits/{limit_id}",
            {"registered_limit": {"default_limit": limit.default_limit}},
        )
        return limit_id
    if found:
        raise OpenStackError(f'multiple limits named "{limit.resource_name}" found')

    body = _without_empty(
        {
            "resource_name": limit.resource_name,
            "description": limit.description,
            "default_limit": limit.default_limit,
            "service_id": limit.service_id,
            "region_id": limit.region_id,
        }
    )
    _log.info("Creating registered limit %s", limit.resource_name)
    created = client.post("/registered_limits", {"registered_limits": [body]})
    return created["registered_limits"][0]["id"]


def delete_registered_limit(client: OpenStack, registered_limit_id: str) -> None:
    """Delete the registered limit with the given ID."""
    _log.info("Deleting registered limit %s", registered_limit_id)
    client.delete(f"/registered_limits/{registered_limit_id}")


def get_registered_limit(client: OpenStack, registered_limit_id: str) -> dict[str, Any]:
    """Return the registered limit with the given ID."""
    _log.info("Fetching registered limit %s", registered_limit_id)
    reply = client.get(f"/registered_limits/{registered_limit_id}")
    return reply["registered_limit"]


def list_registered_limits_by_resource_name(
    client: OpenStack, resource_name: str
) -> list[dict[str, Any]]:
    """Return all registered limits on the named resource."""
    _log.info("Fetching registered limit %s", resource_name)
    return client.list(
        "/registered_limits", "registered_limits", {"resource_name": resource_name}
    )


def list_registered_limits_by_service_id(
    client: OpenStack, service_id: str
) -> list[dict[str, Any]]:
    """Return all registered limits of the service with the given ID."""
    _log.info("Fetching registered limit for service %s", service_id)
    return client.list("/registered_limits", "registered_limits", {"service_id": service_id})