import logging
from typing import Any, Optional

from kube_pod_metadata.client import ReplicaSetGetter
from kube_pod_metadata.config import (
    AddResourceMetadataConfig,
    Config,
    get_default_resource_metadata_config,
)
from kube_pod_metadata.document import deep_update, get_value, put
from kube_pod_metadata.metagen import MetaGen
from kube_pod_metadata.model import (
    as_str,
    get_namespace,
    get_owner_references,
    get_pod_ip,
    get_pod_node_name,
    is_controller_ref,
    is_kind,
)
from kube_pod_metadata.options import FieldOption, with_labels
from kube_pod_metadata.resource import ResourceMetadataGenerator
from kube_pod_metadata.store import get_cached

logger = logging.getLogger(__name__)


def _from_name(
    gen: Optional[MetaGen], name: str, *opts: FieldOption
) -> Optional[dict[str, Any]]:
    """
    Cross-reference lookup on a sibling generator; failures read as absence.
    """
    if gen is None:
        return None
    try:
        meta = gen.generate_from_name(name, *opts)
    except Exception as e:
        logger.debug("Metadata lookup for %r failed: %s", name, e)
        return None
    return meta if isinstance(meta, dict) else None


class PodMetadataGenerator:
    """
    Builds the enrichment document for a Pod: its own fields, the Deployment
    behind its ReplicaSet, and the metadata of its Node and Namespace.

    Holds only read-only references, so one instance can serve concurrent
    callers. Every lookup is best effort: a missing collaborator or a failed
    lookup drops the affected fields and nothing else.
    """

    def __init__(
        self,
        cfg: Config,
        pods: Any,
        client: Optional[ReplicaSetGetter],
        node: Optional[MetaGen],
        namespace: Optional[MetaGen],
        add_resource_metadata: Optional[AddResourceMetadataConfig] = None,
    ):
        if add_resource_metadata is None:
            add_resource_metadata = get_default_resource_metadata_config()

        self.resource = ResourceMetadataGenerator(cfg)
        self.store = pods
        self.client = client
        self.node = node
        self.namespace = namespace
        self.add_resource_metadata = add_resource_metadata

    def generate(self, obj: Any, *opts: FieldOption) -> dict[str, Any]:
        """
        Metadata in the form:
        {
            "kubernetes": {...},        # generate_k8s()
            "some.ecs.field": "...",    # generate_ecs(), wins on conflicts
        }
        """
        ecs_fields = self.generate_ecs(obj)
        meta: dict[str, Any] = {"kubernetes": self.generate_k8s(obj, *opts)}
        deep_update(meta, ecs_fields)
        return meta

    def generate_ecs(self, obj: Any) -> dict[str, Any]:
        return self.resource.generate_ecs(obj)

    def generate_k8s(self, obj: Any, *opts: FieldOption) -> Optional[dict[str, Any]]:
        if not is_kind(obj, "Pod"):
            return None

        out = self.resource.generate_k8s("pod", obj, *opts)
        if out is None:
            return None

        namespace = get_namespace(obj)
        node_name = get_pod_node_name(obj)

        # Pod -> ReplicaSet -> Deployment
        if self.add_resource_metadata.deployment:
            rs_name = get_value(out, "replicaset.name")
            if isinstance(rs_name, str):
                dep = self._get_rs_deployment(rs_name, namespace)
                if dep:
                    put(out, "deployment.name", dep)

        node_meta = _from_name(self.node, node_name, with_labels("node"))
        if node_meta:
            put(out, "node", node_meta.get("node"))
        else:
            put(out, "node.name", node_name)

        ns_meta = _from_name(self.namespace, namespace)
        if ns_meta:
            deep_update(out, ns_meta)

        pod_ip = get_pod_ip(obj)
        if pod_ip:
            put(out, "pod.ip", pod_ip)

        return out

    def generate_from_name(
        self, name: str, *opts: FieldOption
    ) -> Optional[dict[str, Any]]:
        pod = get_cached(self.store, name, "Pod")
        if pod is None:
            return None
        return self.generate_k8s(pod, *opts)

    def _fetch_replica_set(self, rs_name: str, namespace: str) -> Optional[dict[str, Any]]:
        if self.client is None:
            return None
        try:
            return self.client.get_replica_set(namespace, rs_name)
        except Exception as e:
            logger.debug("Failed to get replicaset %s/%s: %s", namespace, rs_name, e)
            return None

    def _get_rs_deployment(self, rs_name: str, namespace: str) -> str:
        """
        Name of the Deployment controlling the given ReplicaSet, or "".
        """
        rs = self._fetch_replica_set(rs_name, namespace)
        if not isinstance(rs, dict):
            return ""

        for ref in get_owner_references(rs):
            if is_controller_ref(ref) and ref.get("kind") == "Deployment":
                return as_str(ref.get("name"))
        return ""
