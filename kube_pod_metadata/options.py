from collections.abc import Callable
from typing import Any

from kube_pod_metadata.document import safe_put

# A field option mutates the vendor document once base fields are in place.
FieldOption = Callable[[dict[str, Any]], None]


def with_fields(key: str, value: Any) -> FieldOption:
    def apply(meta: dict[str, Any]) -> None:
        safe_put(meta, key, value)

    return apply


def with_labels(kind: str) -> FieldOption:
    """
    Copy the resource labels under "<kind>.labels".
    """

    def apply(meta: dict[str, Any]) -> None:
        labels = meta.get("labels")
        if labels:
            safe_put(meta, f"{kind.lower()}.labels", labels)

    return apply


def with_annotations(kind: str) -> FieldOption:
    def apply(meta: dict[str, Any]) -> None:
        annotations = meta.get("annotations")
        if annotations:
            safe_put(meta, f"{kind.lower()}.annotations", annotations)

    return apply


def apply_options(meta: dict[str, Any], opts: tuple[FieldOption, ...]) -> None:
    for opt in opts:
        opt(meta)
