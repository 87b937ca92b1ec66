"""Keystone users."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from stackops.openstack.client import OpenStack, OpenStackError

__all__ = [
    "USER_NOT_FOUND",
    "User",
    "UserNotFoundError",
    "create_user",
    "get_user",
    "delete_user",
]

_log = logging.getLogger(__name__)

USER_NOT_FOUND = "user not found in keystone"


@dataclass
class User:
    """A user with its password, default project and domain."""

    name: str
    password: str = ""
    project_id: str = ""
    domain_id: str = ""


class UserNotFoundError(OpenStackError):
    """Raised when no user with the requested name exists in the domain."""

    def __init__(self, user_name: str) -> None:
        super().__init__(f"{user_name} {USER_NOT_FOUND}")
        self.user_name = user_name


def get_user(client: OpenStack, user_name: str, domain_id: str) -> dict[str, Any]:
    """Return the single user named ``user_name`` in the domain.

    Raises UserNotFoundError if there is none and OpenStackError if there are several.
    """
    found = client.list("/users", "users", {"name": user_name, "domain_id": domain_id})
    if not found:
        raise UserNotFoundError(user_name)
    if len(found) > 1:
        raise OpenStackError(f'multiple users named "{user_name}" found')
    return found[0]


def create_user(client: OpenStack, user: User) -> str:
    """Return the ID of the user, creating it if it does not exist."""
    try:
        # an existing user keeps its password
        return get_user(client, user.name, user.domain_id)["id"]
    except UserNotFoundError:
        pass
    body: dict[str, Any] = {"name": user.name}
    if user.password:
        body["password"] = user.password
    if user.domain_id:
        body["domain_id"] = user.domain_id
    if user.project_id:
        body["default_project_id"] = user.project_id
    created = client.post("/users", {"user": body})["user"]
    _log.info("User Created - Username %s, ID %s", created.get("name", ""), created["id"])
    return created["id"]


def delete_user(client: OpenStack, user_name: str, domain_id: str) -> None:
    """Delete the user named ``user_name`` in the domain; a missing user is fine."""
    try:
        user = get_user(client, user_name, domain_id)
    except UserNotFoundError:
        user = None
    if user is not None:
        _log.info("Deleting user %s in %s", user.get("name", ""), user.get("domain_id", ""))
        client.delete(f"/users/{user['id']}")
    _log.info("Deleting user successfully")