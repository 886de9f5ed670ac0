"""Low-level Kubernetes discovery helpers for kube-federate."""
from __future__ import annotations

import logging
from typing import List

import urllib3
from kubernetes import client, config
from kubernetes.client import ApiException
from kubernetes.config.config_exception import ConfigException

from .config import ClusterContext
from .errors import DiscoveryError
from .resources.api_resource import APIResourceList


_LOG = logging.getLogger(__name__)


class DiscoveryAPI:
    """Wrapper around the Kubernetes API client exposing discovery queries."""

    def __init__(self, context: ClusterContext) -> None:
        self.context = context
        configuration = client.Configuration()
        try:
            config.load_kube_config(
                config_file=context.kubeconfig,
                context=context.context,
                client_configuration=configuration,
            )
        except (ConfigException, OSError) as exc:
            raise DiscoveryError(f"Error creating discovery client: {exc}") from exc
        # The connection pool reads verify_ssl when the ApiClient is created.
        configuration.verify_ssl = context.verify_ssl
        self.api_client = client.ApiClient(configuration)

    def server_preferred_resources(self) -> List[APIResourceList]:
        """Return the resources of every API group at its preferred version.

        The core group comes first, followed by the named groups in the
        order the server lists them.
        """

        try:
            return list(self._preferred_resource_lists())
        except (ApiException, urllib3.exceptions.HTTPError) as exc:
            raise DiscoveryError(f"Error listing api resources: {exc}") from exc

    def _preferred_resource_lists(self):
        core_versions = client.CoreApi(self.api_client).get_api_versions()
        if core_versions.versions:
            yield self._get_resource_list(f"/api/{core_versions.versions[0]}")

        group_list = client.ApisApi(self.api_client).get_api_versions()
        for group in group_list.groups or []:
            if group.preferred_version:
                preferred = group.preferred_version
            elif group.versions:
                preferred = group.versions[0]
            else:
                _LOG.warning("Skipping api group %s with no served versions", group.name)
                continue
            yield self._get_resource_list(f"/apis/{preferred.group_version}")

    def _get_resource_list(self, path: str) -> APIResourceList:
        _LOG.debug("Listing api resources at %s", path)
        resource_list = self.api_client.call_api(
            path,
            "GET",
            header_params={"Accept": "application/json"},
            response_type="V1APIResourceList",
            auth_settings=["BearerToken"],
            _return_http_data_only=True,
        )
        return APIResourceList.from_kube(resource_list)
