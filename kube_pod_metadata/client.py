import logging
from typing import Any, Protocol

from kubernetes import client as k8s_client
from kubernetes import config as k8s_config

from kube_pod_metadata.store import ObjectStore

logger = logging.getLogger(__name__)


class ReplicaSetGetter(Protocol):
    """
    Fetches one ReplicaSet in its API dict shape. Raises on any failure.
    """

    def get_replica_set(self, namespace: str, name: str) -> dict[str, Any]: ...


class KubernetesClient:
    """
    Live lookups against the API server through the official client.
    """

    def __init__(self, apps_api: Any = None, api_client: Any = None):
        self.api_client = api_client or k8s_client.ApiClient()
        self.apps_api = apps_api or k8s_client.AppsV1Api(self.api_client)

    @classmethod
    def from_config(cls, kube_config: str = "") -> "KubernetesClient":
        """
        In-cluster config first, kubeconfig as the fallback.
        An explicit kube_config path skips the in-cluster attempt.
        """
        if kube_config:
            k8s_config.load_kube_config(config_file=kube_config)
            logger.info("Loaded kubeconfig from %s", kube_config)
            return cls()

        try:
            k8s_config.load_incluster_config()
            logger.info("Loaded in-cluster Kubernetes config")
        except k8s_config.ConfigException:
            k8s_config.load_kube_config()
            logger.info("Loaded kubeconfig")
        return cls()

    def get_replica_set(self, namespace: str, name: str) -> dict[str, Any]:
        rs = self.apps_api.read_namespaced_replica_set(name, namespace)
        data = self.api_client.sanitize_for_serialization(rs)
        data.setdefault("kind", "ReplicaSet")
        return data


class StoreClient:
    """
    Serves ReplicaSets from an ObjectStore keyed "<namespace>/<name>".
    """

    def __init__(self, replicasets: ObjectStore):
        self.replicasets = replicasets

    def get_replica_set(self, namespace: str, name: str) -> dict[str, Any]:
        key = f"{namespace}/{name}" if namespace else name
        obj, exists = self.replicasets.get_by_key(key)
        if not exists:
            raise LookupError(f"replicaset {key} not found")
        return obj
