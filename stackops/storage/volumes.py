"""Extra volumes and mounts that are propagated to services by policy."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable

__all__ = ["ExtraVolType", "PropagationType", "VolMounts", "can_propagate"]


class ExtraVolType(str):
    """A label that can optionally be attached to a :class:`VolMounts`."""


class PropagationType(str):
    """Service, group or instance that may receive an extra volume."""

    EVERYWHERE: PropagationType
    DBSYNC: PropagationType
    COMPUTE: PropagationType


# mount the volumes to every service
PropagationType.EVERYWHERE = PropagationType("All")
# the pod running the database sync
PropagationType.DBSYNC = PropagationType("DBSync")
# translated into an external data-plane propagation policy
PropagationType.COMPUTE = PropagationType("Compute")


def can_propagate(prop: str, services: Iterable[str]) -> bool:
    """Return True if a volume with policy ``prop`` goes to one of ``services``."""
    if prop == PropagationType.EVERYWHERE:
        return True
    return prop in services


@dataclass
class VolMounts:
    """Volumes and their mounts, with the policy saying which pods receive them."""

    volumes: list[Any] = field(default_factory=list)
    mounts: list[Any] = field(default_factory=list)
    propagation: list[str] = field(default_factory=list)
    extra_vol_type: str = ""

    def propagate(self, services: Iterable[str]) -> list[VolMounts]:
        """Return the volume sets that ``services`` should mount under this policy.

        Without a propagation policy the volumes are always mounted.
        """
        services = list(services)
        result: list[VolMounts] = []
        if not self.propagation:
            result.append(VolMounts(volumes=self.volumes, mounts=self.mounts))
        result.extend(
            VolMounts(volumes=self.volumes, mounts=self.mounts)
            for prop in self.propagation
            if can_propagate(prop, services)
        )
        return result