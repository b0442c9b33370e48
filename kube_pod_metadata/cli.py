import argparse
import logging
import sys

import yaml
from kubernetes.config import ConfigException

from kube_pod_metadata.client import KubernetesClient, StoreClient
from kube_pod_metadata.config import (
    Config,
    ConfigError,
    get_default_resource_metadata_config,
    load_config,
)
from kube_pod_metadata.factory import get_pod_metagen
from kube_pod_metadata.model import is_kind, load_json
from kube_pod_metadata.output import output_result
from kube_pod_metadata.store import ObjectStore, meta_namespace_key

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Enrich a Kubernetes Pod with workload, node and namespace metadata"
    )

    parser.add_argument("--pod", required=True, help="Path to Pod JSON")
    parser.add_argument("--node", help="Path to Node JSON")
    parser.add_argument("--namespace", help="Path to Namespace JSON")
    parser.add_argument(
        "--replicaset",
        action="append",
        default=[],
        help="Path to ReplicaSet JSON (repeatable)",
    )
    parser.add_argument("--config", help="Path to metadata config YAML")

    parser.add_argument("--kubeconfig", help="Resolve Deployments against a live cluster")
    parser.add_argument(
        "--in-cluster",
        action="store_true",
        help="Resolve Deployments using the in-cluster service account",
    )

    parser.add_argument(
        "--format",
        choices=["json", "yaml"],
        default="json",
        help="Output format (json, yaml)",
    )
    parser.add_argument("--verbose", action="store_true")

    return parser


def _single_store(path: str | None) -> ObjectStore | None:
    if not path:
        return None
    store = ObjectStore()
    store.add(load_json(path))
    return store


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.config:
            cfg, add_resource_metadata = load_config(args.config)
        else:
            cfg, add_resource_metadata = Config(), get_default_resource_metadata_config()
    except (OSError, ConfigError, yaml.YAMLError) as e:
        print(f"[ERROR] Invalid config: {e}", file=sys.stderr)
        return 1

    try:
        pod = load_json(args.pod)
        nodes = _single_store(args.node)
        namespaces = _single_store(args.namespace)
        replicasets = ObjectStore(key_func=meta_namespace_key)
        for path in args.replicaset:
            replicasets.add(load_json(path))
    except (OSError, ValueError, KeyError) as e:
        print(f"[ERROR] Could not load objects: {e}", file=sys.stderr)
        return 1

    if not is_kind(pod, "Pod"):
        print(f"[ERROR] {args.pod} is not a Pod", file=sys.stderr)
        return 1

    kube_config = args.kubeconfig or cfg.kube_config
    if kube_config or args.in_cluster:
        try:
            client = KubernetesClient.from_config(kube_config or "")
        except ConfigException as e:
            print(f"[ERROR] No Kubernetes config available: {e}", file=sys.stderr)
            return 1
    else:
        client = StoreClient(replicasets)
        logger.debug("Loaded %d replicaset(s) from files", len(replicasets))

    metagen = get_pod_metagen(
        cfg,
        None,
        nodes,
        namespaces,
        client,
        add_resource_metadata,
    )

    output_result(metagen.generate(pod), args.format)
    return 0


if __name__ == "__main__":
    sys.exit(main())
