"""Keystone roles and role assignments."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from stackops.openstack.client import OpenStack, OpenStackError

__all__ = [
    "ROLE_NOT_FOUND",
    "Role",
    "RoleNotFoundError",
    "create_role",
    "get_role",
    "assign_user_role",
    "assign_user_domain_role",
]

_log = logging.getLogger(__name__)

ROLE_NOT_FOUND = "role not found in keystone"


@dataclass
class Role:
    """A role, identified by its name."""

    name: str


class RoleNotFoundError(OpenStackError):
    """Raised when no role with the requested name exists."""

    def __init__(self, role_name: str) -> None:
        super().__init__(f"{role_name} {ROLE_NOT_FOUND}")
        self.role_name = role_name


def get_role(client: OpenStack, role_name: str) -> dict[str, Any]:
    """Return the first role named ``role_name``; raise RoleNotFoundError if there is none."""
    found = client.list("/roles", "roles", {"name": role_name})
    if not found:
        raise RoleNotFoundError(role_name)
    return found[0]


def create_role(client: OpenStack, role_name: str) -> str:
    """Return the ID of the role named ``role_name``, creating it if it does not exist."""
    try:
        return get_role(client, role_name)["id"]
    except RoleNotFoundError:
        pass
    created = client.post("/roles", {"role": {"name": role_name}})["role"]
    _log.info("Role Created - Rolename %s, ID %s", created.get("name", ""), created["id"])
    return created["id"]


def _assign(
    client: OpenStack, role_name: str, user_id: str, scope: str, scope_id: str
) -> None:
    role = get_role(client, role_name)
    assignments = client.list(
        "/role_assignments",
        "role_assignments",
        {f"scope.{scope}.id": scope_id, "user.id": user_id, "role.id": role["id"]},
    )
    if assignments:
        return
    _log.info(
        "Assigning userID %s to role %s - %s", user_id, role.get("name", ""), role["id"]
    )
    client.put(f"/{scope}s/{scope_id}/users/{user_id}/roles/{role['id']}")


def assign_user_role(
    client: OpenStack, role_name: str, user_id: str, project_id: str
) -> None:
    """Grant the role to the user on the project unless it is already granted."""
    _assign(client, role_name, user_id, "project", project_id)


def assign_user_domain_role(
    client: OpenStack, role_name: str, user_id: str, domain_id: str
) -> None:
    """Grant the role to the user on the domain unless it is already granted."""
    _assign(client, role_name, user_id, "domain", domain_id)