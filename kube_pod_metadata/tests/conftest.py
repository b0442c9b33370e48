from typing import Any

import pytest

from kube_pod_metadata.store import ObjectStore, meta_namespace_key


def make_pod(
    name: str = "web-7d4b9c-x2k4p",
    namespace: str = "default",
    node_name: str = "n1",
    pod_ip: str = "10.0.0.5",
    rs_name: str | None = "rs-abc",
    labels: dict[str, str] | None = None,
) -> dict[str, Any]:
    owners = []
    if rs_name:
        owners.append(
            {
                "apiVersion": "apps/v1",
                "kind": "ReplicaSet",
                "name": rs_name,
                "controller": True,
            }
        )
    return {
        "kind": "Pod",
        "metadata": {
            "name": name,
            "namespace": namespace,
            "uid": "pod-uid-1",
            "labels": labels if labels is not None else {"app": "web"},
            "ownerReferences": owners,
        },
        "spec": {"nodeName": node_name},
        "status": {"podIP": pod_ip, "phase": "Running"},
    }


def make_replicaset(
    name: str = "rs-abc",
    namespace: str = "default",
    owners: list[dict[str, Any]] | None = None,
) -> dict[str, Any]:
    if owners is None:
        owners = [{"kind": "Deployment", "name": "dep-1", "controller": True}]
    return {
        "kind": "ReplicaSet",
        "metadata": {
            "name": name,
            "namespace": namespace,
            "ownerReferences": owners,
        },
    }


def make_node(name: str = "n1", labels: dict[str, str] | None = None) -> dict[str, Any]:
    return {
        "kind": "Node",
        "metadata": {
            "name": name,
            "uid": "node-uid-1",
            "labels": labels if labels is not None else {"zone": "eu-1"},
        },
        "status": {
            "addresses": [
                {"type": "InternalIP", "address": "192.168.1.10"},
                {"type": "Hostname", "address": f"{name}.cluster.local"},
            ]
        },
    }


def make_namespace(name: str = "default") -> dict[str, Any]:
    return {
        "kind": "Namespace",
        "metadata": {
            "name": name,
            "uid": "ns-uid-1",
            "labels": {"team": "payments"},
        },
    }


class FakeReplicaSetClient:
    """
    Records lookups and serves ReplicaSets from a dict, raising on a miss.
    """

    def __init__(self, replicasets: dict[tuple[str, str], dict[str, Any]] | None = None):
        self.replicasets = replicasets or {}
        self.calls: list[tuple[str, str]] = []

    def get_replica_set(self, namespace: str, name: str) -> dict[str, Any]:
        self.calls.append((namespace, name))
        if (namespace, name) not in self.replicasets:
            raise LookupError(f"replicaset {namespace}/{name} not found")
        return self.replicasets[(namespace, name)]


@pytest.fixture
def pod() -> dict[str, Any]:
    return make_pod()


@pytest.fixture
def rs_client() -> FakeReplicaSetClient:
    return FakeReplicaSetClient({("default", "rs-abc"): make_replicaset()})


@pytest.fixture
def node_store() -> ObjectStore:
    store = ObjectStore()
    store.add(make_node())
    return store


@pytest.fixture
def namespace_store() -> ObjectStore:
    store = ObjectStore()
    store.add(make_namespace())
    return store


@pytest.fixture
def rs_store() -> ObjectStore:
    store = ObjectStore(key_func=meta_namespace_key)
    store.add(make_replicaset())
    return store
