"""Keystone domains."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from stackops.openstack.client import OpenStack, OpenStackError

__all__ = ["Domain", "create_domain"]

_log = logging.getLogger(__name__)


@dataclass
class Domain:
    """Name and description used to create or look up a domain."""

    name: str
    description: str = ""


def create_domain(client: OpenStack, domain: Domain) -> str:
    """Return the ID of the domain named ``domain.name``, creating it if it does not exist."""
    found = client.list("/domains", "domains", {"name": domain.name})
    if len(found) == 1:
        return found[0]["id"]
    if found:
        raise OpenStackError(f'Multiple domains named "{domain.name}" found')

    body = {"name": domain.name}
    if domain.description:
        body["description"] = domain.description
    _log.info("Creating domain %s", domain.name)
    created = client.post("/domains", {"domain": body})
    return created["domain"]["id"]