"""Operations for resolving resource names against cluster discovery."""
from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional

from ..config import ClusterContext
from ..errors import DiscoveryError, NotFoundError
from ..kube import DiscoveryAPI
from ..resources.api_resource import APIResource, APIResourceList, parse_group_version
from ..resources.crd import CustomResourceDefinition, crd_for_api_resource
from ..utils import resource_key

_LOG = logging.getLogger(__name__)


def find_api_resource(resource_lists: Iterable[APIResourceList], key: str) -> APIResource:
    """Return the first resource named by ``key``.

    Lists and the resources within them are searched in the order given.
    When the same name is served by more than one group, the group listed
    first wins. The returned resource carries the group and version of the
    list it was found in.
    """

    for resource_list in resource_lists:
        resource = resource_list.find(key)
        if resource is None:
            continue
        try:
            group, version = parse_group_version(resource_list.group_version)
        except ValueError as exc:
            raise DiscoveryError(f"Error parsing GroupVersion: {exc}") from exc
        return resource.with_group_version(group, version)
    raise NotFoundError(key)


class ResourceOperations:
    """Helpers for looking up served resources and deriving CRDs from them."""

    def __init__(self, api: DiscoveryAPI, context: ClusterContext) -> None:
        self.api = api
        self.context = context

    def list_resources(self) -> List[APIResource]:
        """Return every preferred resource with its group and version attached."""

        resources: List[APIResource] = []
        for resource_list in self.api.server_preferred_resources():
            try:
                group, version = parse_group_version(resource_list.group_version)
            except ValueError as exc:
                raise DiscoveryError(f"Error parsing GroupVersion: {exc}") from exc
            resources.extend(item.with_group_version(group, version) for item in resource_list.resources)
        return resources

    def lookup(self, key: str) -> APIResource:
        """Resolve ``key`` to a single served resource."""

        resource = find_api_resource(self.api.server_preferred_resources(), key)
        _LOG.debug("Resolved %r to %s", key, resource_key(resource))
        return resource

    def crd_for(self, key: str, validation: Optional[Dict[str, Any]] = None) -> CustomResourceDefinition:
        """Resolve ``key`` and return a CRD for the matched resource."""

        resource = self.lookup(key)
        _LOG.debug("Generating CustomResourceDefinition for %s", resource_key(resource))
        return crd_for_api_resource(resource, validation)


def lookup_api_resource(context: ClusterContext, key: str) -> APIResource:
    """Resolve ``key`` against the cluster described by ``context``."""

    return ResourceOperations(DiscoveryAPI(context), context).lookup(key)
