import json
from typing import Any

# ----------------------------
# Parsing utilities
# ----------------------------


def load_json(path: str) -> dict[str, Any]:
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def is_kind(obj: Any, kind: str) -> bool:
    return isinstance(obj, dict) and obj.get("kind") == kind


def as_dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def as_str(value: Any) -> str:
    return value if isinstance(value, str) else ""


def get_metadata(obj: dict[str, Any]) -> dict[str, Any]:
    return as_dict(as_dict(obj).get("metadata"))


def get_name(obj: dict[str, Any]) -> str:
    return as_str(get_metadata(obj).get("name"))


def get_namespace(obj: dict[str, Any]) -> str:
    return as_str(get_metadata(obj).get("namespace"))


def get_owner_references(obj: dict[str, Any]) -> list[dict[str, Any]]:
    refs = get_metadata(obj).get("ownerReferences")
    if not isinstance(refs, list):
        return []
    return [r for r in refs if isinstance(r, dict)]


def is_controller_ref(ref: dict[str, Any]) -> bool:
    # Only an explicit true marks a controller; a missing flag does not.
    return ref.get("controller") is True


def get_pod_node_name(pod: dict[str, Any]) -> str:
    return as_str(as_dict(pod.get("spec")).get("nodeName"))


def get_pod_ip(pod: dict[str, Any]) -> str:
    return as_str(as_dict(pod.get("status")).get("podIP"))
