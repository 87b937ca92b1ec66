"""Keystone projects."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from stackops.openstack.client import OpenStack, OpenStackError

__all__ = ["Project", "create_project"]

_log = logging.getLogger(__name__)


@dataclass
class Project:
    """Name, description and domain of a project."""

    name: str
    description: str = ""
    domain_id: str = ""


def create_project(client: OpenStack, project: Project) -> str:
    """Return the ID of the project, creating it in its domain if it does not exist."""
    found = client.list(
        "/projects", "projects", {"name": project.name, "domain_id": project.domain_id}
    )
    if len(found) == 1:
        return found[0]["id"]
    if found:
        raise OpenStackError(f'multiple projects named "{project.name}" found')

    body = {
        "name": project.name,
        "description": project.description,
        "domain_id": project.domain_id,
    }
    _log.info("Creating project %s in %s", project.name, project.domain_id)
    created = client.post("/projects", {"project": {k: v for k, v in body.items() if v}})
    return created["project"]["id"]