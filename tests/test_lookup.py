from unittest.mock import MagicMock

import pytest

from kube_federate.config import ClusterContext
from kube_federate.errors import DiscoveryError, NotFoundError
from kube_federate.operations.lookup import ResourceOperations, find_api_resource, lookup_api_resource
from kube_federate.resources.api_resource import APIResource, APIResourceList
from kube_federate.resources.crd import ResourceScope


def _resource_lists() -> list[APIResourceList]:
    return [
        APIResourceList(
            group_version="apps/v1",
            resources=[
                APIResource(
                    name="deployments",
                    singular_name="deployment",
                    kind="Deployment",
                    namespaced=True,
                    short_names=["deploy"],
                ),
            ],
        ),
        APIResourceList(
            group_version="/v1",
            resources=[
                APIResource(name="pods", singular_name="pod", kind="Pod", namespaced=True, short_names=["po"]),
                APIResource(name="nodes", singular_name="node", kind="Node", short_names=["no"]),
            ],
        ),
    ]


def _make_ops(resource_lists: list[APIResourceList]) -> ResourceOperations:
    api = MagicMock()
    api.server_preferred_resources.return_value = resource_lists
    return ResourceOperations(api, ClusterContext())


@pytest.mark.parametrize("key", ["pod", "POD", "Pod", "pods", "po"])
def test_lookup_matches_any_case(key: str) -> None:
    resource = find_api_resource(_resource_lists(), key)
    assert resource.name == "pods"
    assert resource.group == ""
    assert resource.version == "v1"


def test_lookup_falls_back_to_short_name() -> None:
    resource = find_api_resource(_resource_lists(), "deploy")
    assert resource.name == "deployments"
    assert resource.group == "apps"
    assert resource.version == "v1"


def test_lookup_not_found_names_key() -> None:
    with pytest.raises(NotFoundError) as excinfo:
        find_api_resource(_resource_lists(), "widgets")
    assert excinfo.value.key == "widgets"
    assert "widgets" in str(excinfo.value)


def test_lookup_overwrites_group_version_from_list() -> None:
    resource_lists = [
        APIResourceList(
            group_version="example.com/v1alpha1",
            resources=[APIResource(name="widgets", kind="Widget", group="stale", version="v9")],
        )
    ]
    resource = find_api_resource(resource_lists, "widget")
    assert (resource.group, resource.version) == ("example.com", "v1alpha1")


def test_lookup_does_not_mutate_discovered_resource() -> None:
    resource_lists = _resource_lists()
    find_api_resource(resource_lists, "deploy")
    assert resource_lists[0].resources[0].group == ""
    assert resource_lists[0].resources[0].version == ""


def test_lookup_first_listed_group_wins() -> None:
    resource_lists = [
        APIResourceList(
            group_version="metrics.k8s.io/v1beta1",
            resources=[APIResource(name="pods", kind="PodMetrics", namespaced=True)],
        ),
        APIResourceList(
            group_version="v1",
            resources=[APIResource(name="pods", singular_name="pod", kind="Pod", namespaced=True)],
        ),
    ]
    resource = find_api_resource(resource_lists, "pods")
    assert resource.kind == "PodMetrics"
    assert resource.group == "metrics.k8s.io"


def test_lookup_short_name_on_earlier_resource_wins() -> None:
    resource_lists = [
        APIResourceList(
            group_version="example.com/v1",
            resources=[APIResource(name="gadgets", kind="Gadget", short_names=["widget"])],
        ),
        APIResourceList(
            group_version="other.io/v1",
            resources=[APIResource(name="widgets", kind="Widget")],
        ),
    ]
    assert find_api_resource(resource_lists, "widget").name == "gadgets"


def test_lookup_blank_key_never_matches_blank_fields() -> None:
    resource_lists = [
        APIResourceList(group_version="v1", resources=[APIResource(name="bindings", kind="Binding")]),
    ]
    with pytest.raises(NotFoundError):
        find_api_resource(resource_lists, "")


def test_lookup_malformed_group_version_is_discovery_error() -> None:
    resource_lists = [
        APIResourceList(
            group_version="example.com/v1/extra",
            resources=[APIResource(name="widgets", kind="Widget")],
        )
    ]
    with pytest.raises(DiscoveryError):
        find_api_resource(resource_lists, "widgets")


def test_lookup_stops_before_malformed_later_list() -> None:
    resource_lists = _resource_lists() + [
        APIResourceList(group_version="a/b/c", resources=[APIResource(name="widgets", kind="Widget")]),
    ]
    assert find_api_resource(resource_lists, "pods").name == "pods"


def test_operations_lookup_queries_discovery_once() -> None:
    ops = _make_ops(_resource_lists())
    resource = ops.lookup("Deployment")
    assert resource.name == "deployments"
    ops.api.server_preferred_resources.assert_called_once_with()


def test_operations_propagates_discovery_error() -> None:
    ops = _make_ops([])
    ops.api.server_preferred_resources.side_effect = DiscoveryError("Error listing api resources: boom")
    with pytest.raises(DiscoveryError):
        ops.lookup("pods")


def test_operations_list_resources_attaches_group_version() -> None:
    resources = _make_ops(_resource_lists()).list_resources()
    assert [(item.name, item.group, item.version) for item in resources] == [
        ("deployments", "apps", "v1"),
        ("pods", "", "v1"),
        ("nodes", "", "v1"),
    ]


def test_resolve_then_build_crd() -> None:
    ops = _make_ops(_resource_lists())
    definition = ops.crd_for("deploy")
    body = definition.to_resource().to_dict()

    assert definition.name == "deployments.apps"
    assert definition.spec.scope is ResourceScope.NAMESPACED
    assert definition.spec.validation is None
    assert body["spec"] == {
        "group": "apps",
        "version": "v1",
        "scope": "Namespaced",
        "names": {"plural": "deployments", "kind": "Deployment"},
    }


def test_lookup_api_resource_builds_client_from_context(monkeypatch) -> None:
    api = MagicMock()
    api.server_preferred_resources.return_value = _resource_lists()
    contexts = []

    def _factory(context: ClusterContext) -> MagicMock:
        contexts.append(context)
        return api

    monkeypatch.setattr("kube_federate.operations.lookup.DiscoveryAPI", _factory)
    context = ClusterContext(context="kind-dev")

    assert lookup_api_resource(context, "po").name == "pods"
    assert contexts == [context]
