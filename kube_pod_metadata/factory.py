from typing import Any, Optional

from kube_pod_metadata.client import ReplicaSetGetter
from kube_pod_metadata.config import (
    AddResourceMetadataConfig,
    Config,
    get_default_resource_metadata_config,
)
from kube_pod_metadata.namespace import NamespaceMetadataGenerator
from kube_pod_metadata.node import NodeMetadataGenerator
from kube_pod_metadata.pod import PodMetadataGenerator


def get_pod_metagen(
    cfg: Config,
    pods: Any,
    nodes: Any,
    namespaces: Any,
    client: Optional[ReplicaSetGetter],
    add_resource_metadata: Optional[AddResourceMetadataConfig] = None,
) -> PodMetadataGenerator:
    """
    Wire a PodMetadataGenerator with Node and Namespace generators.
    An axis whose store is None gets no generator.
    """
    if add_resource_metadata is None:
        add_resource_metadata = get_default_resource_metadata_config()

    node_gen = None
    if nodes is not None:
        node_gen = NodeMetadataGenerator(add_resource_metadata.node, nodes)

    namespace_gen = None
    if namespaces is not None:
        namespace_gen = NamespaceMetadataGenerator(
            add_resource_metadata.namespace, namespaces
        )

    return PodMetadataGenerator(
        cfg,
        pods,
        client,
        node_gen,
        namespace_gen,
        add_resource_metadata,
    )
