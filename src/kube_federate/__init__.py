"""Resolve cluster API resources and derive CustomResourceDefinitions from them."""

from .config import ClusterContext  # noqa: F401
from .errors import DiscoveryError, FederateError, NotFoundError  # noqa: F401
from .kube import DiscoveryAPI  # noqa: F401
from .operations.lookup import ResourceOperations, find_api_resource, lookup_api_resource  # noqa: F401
from .resources.crd import crd_for_api_resource  # noqa: F401

__all__ = [
    "ClusterContext",
    "DiscoveryAPI",
    "DiscoveryError",
    "FederateError",
    "NotFoundError",
    "ResourceOperations",
    "crd_for_api_resource",
    "find_api_resource",
    "lookup_api_resource",
]
