from typing import Any, Optional

from kube_pod_metadata.config import Config
from kube_pod_metadata.document import (
    dedot,
    deep_update,
    delete,
    get_value,
    put,
    safe_put,
)
from kube_pod_metadata.model import (
    as_str,
    get_metadata,
    get_owner_references,
    is_controller_ref,
)
from kube_pod_metadata.options import FieldOption, apply_options

# Controller kinds recorded as "<kind>.name" on the owned object
CONTROLLER_KINDS = {
    "Deployment",
    "ReplicaSet",
    "StatefulSet",
    "DaemonSet",
    "Job",
    "CronJob",
}


def generate_map_subset(
    source: dict[str, Any] | None,
    keys: list[str] | None,
    use_dedot: bool,
) -> dict[str, Any]:
    """
    Pick `keys` from `source` (all of them when keys is None).
    Dotted keys are either dedotted or expanded into nested dicts.
    """
    out: dict[str, Any] = {}
    if not isinstance(source, dict) or not source:
        return out

    selected = source.keys() if keys is None else [k for k in keys if k in source]
    for key in selected:
        if not isinstance(key, str):
            continue
        value = source[key]
        if use_dedot:
            out[dedot(key)] = value
        else:
            safe_put(out, key, value)
    return out


def exclude_label(labels: dict[str, Any], label: str, use_dedot: bool) -> None:
    """
    Drop one label. Without dedot, a label that also prefixes longer labels
    lives under "<label>.value" and only that value is removed.
    """
    if use_dedot:
        delete(labels, dedot(label))
    elif isinstance(get_value(labels, label), dict):
        delete(labels, f"{label}.value")
    else:
        delete(labels, label)


class ResourceMetadataGenerator:
    """
    Generic metadata shared by every Kubernetes resource kind.
    """

    def __init__(self, cfg: Config):
        self.config = cfg

    def generate(self, kind: str, obj: Any, *opts: FieldOption) -> dict[str, Any]:
        meta: dict[str, Any] = {"kubernetes": self.generate_k8s(kind, obj, *opts)}
        deep_update(meta, self.generate_ecs(obj))
        return meta

    def generate_ecs(self, obj: Any) -> dict[str, Any]:
        ecs: dict[str, Any] = {}
        if self.config.cluster_url:
            put(ecs, "orchestrator.cluster.url", self.config.cluster_url)
        if self.config.cluster_name:
            put(ecs, "orchestrator.cluster.name", self.config.cluster_name)
        return ecs

    def generate_k8s(
        self, kind: str, obj: Any, *opts: FieldOption
    ) -> Optional[dict[str, Any]]:
        if not isinstance(obj, dict):
            return None

        metadata = get_metadata(obj)
        cfg = self.config

        labels = generate_map_subset(
            metadata.get("labels"),
            cfg.include_labels or None,
            cfg.labels_dedot,
        )
        for label in cfg.exclude_labels:
            exclude_label(labels, label, cfg.labels_dedot)

        annotations = generate_map_subset(
            metadata.get("annotations"),
            cfg.include_annotations,
            cfg.annotations_dedot,
        )

        kind = kind.lower()
        meta: dict[str, Any] = {
            kind: {
                "name": as_str(metadata.get("name")),
                "uid": as_str(metadata.get("uid")),
            }
        }

        namespace = as_str(metadata.get("namespace"))
        if namespace:
            meta["namespace"] = namespace

        for ref in get_owner_references(obj):
            if is_controller_ref(ref) and ref.get("kind") in CONTROLLER_KINDS:
                owner = f"{ref['kind'].lower()}.name"
                safe_put(meta, owner, as_str(ref.get("name")))

        if labels:
            meta["labels"] = labels
        if annotations:
            meta["annotations"] = annotations

        apply_options(meta, opts)

        return meta
