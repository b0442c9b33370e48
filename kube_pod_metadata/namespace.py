from typing import Any, Optional

from kube_pod_metadata.config import Config
from kube_pod_metadata.document import deep_update, put
from kube_pod_metadata.model import is_kind
from kube_pod_metadata.options import FieldOption
from kube_pod_metadata.resource import ResourceMetadataGenerator
from kube_pod_metadata.store import get_cached


def flatten_metadata(meta: dict[str, Any]) -> dict[str, Any]:
    """
    Turn {"namespace": {"name": n, "uid": u}, "labels": {...}} into
    {"namespace": n, "namespace_uid": u, "namespace_labels": {...}}.
    """
    out: dict[str, Any] = {}

    fields = meta.get("namespace")
    if not isinstance(fields, dict):
        return out

    for key, value in fields.items():
        if key == "name":
            out["namespace"] = value
        else:
            out[f"namespace_{key}"] = value

    for key in ("labels", "annotations"):
        values = meta.get(key)
        if isinstance(values, dict):
            for k, v in values.items():
                put(out, f"namespace_{key}.{k}", v)

    return out


class NamespaceMetadataGenerator:
    """
    Metadata for Namespace resources. Fields are flattened so they merge
    cleanly into the document of any namespaced object.
    """

    def __init__(self, cfg: Config, namespaces: Any):
        self.resource = ResourceMetadataGenerator(cfg)
        self.store = namespaces

    def generate(self, obj: Any, *opts: FieldOption) -> dict[str, Any]:
        meta: dict[str, Any] = {"kubernetes": self.generate_k8s(obj, *opts)}
        deep_update(meta, self.generate_ecs(obj))
        return meta

    def generate_ecs(self, obj: Any) -> dict[str, Any]:
        return self.resource.generate_ecs(obj)

    def generate_k8s(self, obj: Any, *opts: FieldOption) -> Optional[dict[str, Any]]:
        if not is_kind(obj, "Namespace"):
            return None

        meta = self.resource.generate_k8s("namespace", obj, *opts)
        if meta is None:
            return None

        return flatten_metadata(meta)

    def generate_from_name(
        self, name: str, *opts: FieldOption
    ) -> Optional[dict[str, Any]]:
        namespace = get_cached(self.store, name, "Namespace")
        if namespace is None:
            return None
        return self.generate_k8s(namespace, *opts)
