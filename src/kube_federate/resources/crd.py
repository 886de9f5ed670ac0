"""CustomResourceDefinition builder."""
from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional

from pydantic import Field

from ..utils import group_qualified_name
from .api_resource import APIResource
from .base import ResourceDefinition, ResourceModel

CRD_API_VERSION = "apiextensions.k8s.io/v1beta1"
CRD_KIND = "CustomResourceDefinition"


class ResourceScope(str, Enum):
    CLUSTER = "Cluster"
    NAMESPACED = "Namespaced"


class CustomResourceDefinitionNames(ResourceModel):
    plural: str
    kind: str


class CustomResourceDefinitionSpec(ResourceModel):
    group: str
    version: str
    scope: ResourceScope
    names: CustomResourceDefinitionNames
    validation: Optional[Dict[str, Any]] = None


class CustomResourceDefinition(ResourceModel):
    """A CustomResourceDefinition registering a resource type."""

    api_version: str = Field(default=CRD_API_VERSION, alias="apiVersion")
    kind: str = CRD_KIND
    name: str
    spec: CustomResourceDefinitionSpec

    def to_resource(self) -> ResourceDefinition:
        # The validation schema is only omitted when absent; an empty one is kept.
        spec = self.spec.model_dump(mode="json", by_alias=True, exclude_none=True)
        return ResourceDefinition(
            api_version=self.api_version,
            kind=self.kind,
            metadata={"name": self.name},
            spec=spec,
        )


def crd_for_api_resource(
    resource: APIResource,
    validation: Optional[Dict[str, Any]] = None,
) -> CustomResourceDefinition:
    """Return a CRD describing ``resource``.

    ``resource`` must already carry its group and version, as returned by
    resource lookup. ``validation`` is attached verbatim.
    """

    scope = ResourceScope.NAMESPACED if resource.namespaced else ResourceScope.CLUSTER
    return CustomResourceDefinition(
        name=group_qualified_name(resource),
        spec=CustomResourceDefinitionSpec(
            group=resource.group,
            version=resource.version,
            scope=scope,
            names=CustomResourceDefinitionNames(plural=resource.name, kind=resource.kind),
            validation=validation,
        ),
    )
