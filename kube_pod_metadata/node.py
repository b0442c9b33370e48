from typing import Any, Optional

from kube_pod_metadata.config import Config
from kube_pod_metadata.document import deep_update, put
from kube_pod_metadata.model import as_dict, as_str, is_kind
from kube_pod_metadata.options import FieldOption
from kube_pod_metadata.resource import ResourceMetadataGenerator
from kube_pod_metadata.store import get_cached


def _node_hostname(node: dict[str, Any]) -> str:
    addresses = as_dict(node.get("status")).get("addresses")
    if not isinstance(addresses, list):
        return ""
    for addr in addresses:
        if not isinstance(addr, dict) or addr.get("type") != "Hostname":
            continue
        hostname = as_str(addr.get("address"))
        if hostname:
            return hostname
    return ""


class NodeMetadataGenerator:
    """
    Metadata for Node resources, looked up by node name.
    """

    def __init__(self, cfg: Config, nodes: Any):
        self.resource = ResourceMetadataGenerator(cfg)
        self.store = nodes

    def generate(self, obj: Any, *opts: FieldOption) -> dict[str, Any]:
        meta: dict[str, Any] = {"kubernetes": self.generate_k8s(obj, *opts)}
        deep_update(meta, self.generate_ecs(obj))
        return meta

    def generate_ecs(self, obj: Any) -> dict[str, Any]:
        return self.resource.generate_ecs(obj)

    def generate_k8s(self, obj: Any, *opts: FieldOption) -> Optional[dict[str, Any]]:
        if not is_kind(obj, "Node"):
            return None

        meta = self.resource.generate_k8s("node", obj, *opts)
        if meta is None:
            return None

        hostname = _node_hostname(obj)
        if hostname:
            put(meta, "node.hostname", hostname)

        return meta

    def generate_from_name(
        self, name: str, *opts: FieldOption
    ) -> Optional[dict[str, Any]]:
        node = get_cached(self.store, name, "Node")
        if node is None:
            return None
        return self.generate_k8s(node, *opts)
