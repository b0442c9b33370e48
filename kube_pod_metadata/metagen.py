from typing import Any, Optional, Protocol, runtime_checkable

from kube_pod_metadata.options import FieldOption


@runtime_checkable
class MetaGen(Protocol):
    """
    Capability shared by every enrichment source (Pod, Node, Namespace).

    generate()          -> {"kubernetes": {...}, <normalized fields>}
    generate_ecs()      -> normalized fields only
    generate_k8s()      -> vendor fields, or None for an unsupported object
    generate_from_name()-> vendor fields for a cached object, or None
    """

    def generate(self, obj: Any, *opts: FieldOption) -> dict[str, Any]: ...

    def generate_ecs(self, obj: Any) -> dict[str, Any]: ...

    def generate_k8s(
        self, obj: Any, *opts: FieldOption
    ) -> Optional[dict[str, Any]]: ...

    def generate_from_name(
        self, name: str, *opts: FieldOption
    ) -> Optional[dict[str, Any]]: ...
