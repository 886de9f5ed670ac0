"""API resource descriptors as advertised by cluster discovery."""
from __future__ import annotations

from typing import Any, List, Optional, Tuple

from pydantic import Field

from .base import ResourceModel


def parse_group_version(group_version: str) -> Tuple[str, str]:
    """Split a ``group/version`` string into its group and version parts.

    A bare version such as ``v1`` belongs to the core group, which is
    reported as an empty string. ``""`` and ``"/"`` parse to an empty
    group and version.
    """

    if not group_version or group_version == "/":
        return "", ""
    separators = group_version.count("/")
    if separators == 0:
        return "", group_version
    if separators == 1:
        group, version = group_version.split("/")
        return group, version
    raise ValueError(f"unexpected GroupVersion string: {group_version}")


class APIResource(ResourceModel):
    """A single resource type served by the cluster."""

    name: str
    singular_name: str = Field(default="", alias="singularName")
    kind: str
    namespaced: bool = False
    short_names: List[str] = Field(default_factory=list, alias="shortNames")
    verbs: List[str] = Field(default_factory=list)
    group: str = ""
    version: str = ""

    @classmethod
    def from_kube(cls, obj: Any) -> "APIResource":
        """Build a descriptor from a ``kubernetes.client.V1APIResource``."""

        return cls(
            name=obj.name,
            singular_name=obj.singular_name or "",
            kind=obj.kind,
            namespaced=bool(obj.namespaced),
            short_names=list(obj.short_names or []),
            verbs=list(obj.verbs or []),
            group=obj.group or "",
            version=obj.version or "",
        )

    def matches(self, key: str) -> bool:
        """Return True if ``key`` names this resource, ignoring case.

        The plural name, singular name and kind are tried before the short
        names. Blank fields never match.
        """

        lower_key = key.lower()
        for candidate in (self.name, self.singular_name, self.kind, *self.short_names):
            if candidate and lower_key == candidate.lower():
                return True
        return False

    def with_group_version(self, group: str, version: str) -> "APIResource":
        return self.model_copy(update={"group": group, "version": version})


class APIResourceList(ResourceModel):
    """Resources served under one ``group/version``."""

    group_version: str = Field(alias="groupVersion")
    resources: List[APIResource] = Field(default_factory=list)

    @classmethod
    def from_kube(cls, obj: Any) -> "APIResourceList":
        """Build a list from a ``kubernetes.client.V1APIResourceList``.

        Subresources such as ``pods/log`` are not resource types of their
        own and are dropped.
        """

        return cls(
            group_version=obj.group_version,
            resources=[
                APIResource.from_kube(item)
                for item in obj.resources or []
                if "/" not in item.name
            ],
        )

    def find(self, key: str) -> Optional[APIResource]:
        for resource in self.resources:
            if resource.matches(key):
                return resource
        return None
