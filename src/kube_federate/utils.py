"""Naming helpers shared across the kube-federate package."""
from __future__ import annotations

from .resources.api_resource import APIResource

CORE_GROUP_LABEL = "core"
DEFAULT_VERSION_LABEL = "v1"


def group_qualified_name(resource: APIResource) -> str:
    """Return ``<plural>.<group>``, or the bare plural for the core group."""

    if not resource.group:
        return resource.name
    return f"{resource.name}.{resource.group}"


def resource_key(resource: APIResource) -> str:
    """Return ``<plural>.<group>/<version>`` for display.

    An empty group is rendered as ``core`` and an empty version as ``v1``.
    The resource itself is left untouched.
    """

    group = resource.group or CORE_GROUP_LABEL
    version = resource.version or DEFAULT_VERSION_LABEL
    return f"{resource.name}.{group}/{version}"
