from dataclasses import dataclass, field
from typing import Any

import yaml


class ConfigError(ValueError):
    """
    Raised when a metadata configuration file or mapping is invalid.
    """


_LIST_KEYS = ("include_labels", "exclude_labels", "include_annotations")
_BOOL_KEYS = {
    "labels.dedot": "labels_dedot",
    "annotations.dedot": "annotations_dedot",
}
_STR_KEYS = {
    "cluster.name": "cluster_name",
    "cluster.url": "cluster_url",
    "kube_config": "kube_config",
}


@dataclass(frozen=True)
class Config:
    include_labels: list[str] = field(default_factory=list)
    exclude_labels: list[str] = field(default_factory=list)
    include_annotations: list[str] = field(default_factory=list)
    labels_dedot: bool = True
    annotations_dedot: bool = True
    cluster_name: str = ""
    cluster_url: str = ""
    kube_config: str = ""

    @classmethod
    def from_dict(cls, raw: dict[str, Any] | None) -> "Config":
        """
        Build a Config from its YAML mapping.

        Dotted keys ("labels.dedot") and nested ones ("labels: {dedot: ...}")
        are both accepted.
        """
        if raw is None:
            return cls()
        if not isinstance(raw, dict):
            raise ConfigError("metadata config must be a mapping")

        flat = _flatten(raw)
        kwargs: dict[str, Any] = {}

        for key, value in flat.items():
            if key in _LIST_KEYS:
                if not isinstance(value, list) or not all(
                    isinstance(v, str) for v in value
                ):
                    raise ConfigError(f"'{key}' must be a list of strings")
                kwargs[key] = list(value)
            elif key in _BOOL_KEYS:
                if not isinstance(value, bool):
                    raise ConfigError(f"'{key}' must be a boolean")
                kwargs[_BOOL_KEYS[key]] = value
            elif key in _STR_KEYS:
                if not isinstance(value, str):
                    raise ConfigError(f"'{key}' must be a string")
                kwargs[_STR_KEYS[key]] = value
            else:
                raise ConfigError(f"unknown metadata config key '{key}'")

        return cls(**kwargs)


@dataclass(frozen=True)
class AddResourceMetadataConfig:
    node: Config = field(default_factory=Config)
    namespace: Config = field(default_factory=Config)
    deployment: bool = True

    @classmethod
    def from_dict(cls, raw: dict[str, Any] | None) -> "AddResourceMetadataConfig":
        if raw is None:
            return get_default_resource_metadata_config()
        if not isinstance(raw, dict):
            raise ConfigError("'add_resource_metadata' must be a mapping")

        unknown = set(raw) - {"node", "namespace", "deployment"}
        if unknown:
            raise ConfigError(
                f"'add_resource_metadata' has invalid keys: {sorted(unknown)}"
            )

        deployment = raw.get("deployment", True)
        if not isinstance(deployment, bool):
            raise ConfigError("'add_resource_metadata.deployment' must be a boolean")

        return cls(
            node=Config.from_dict(raw.get("node")),
            namespace=Config.from_dict(raw.get("namespace")),
            deployment=deployment,
        )


def get_default_resource_metadata_config() -> AddResourceMetadataConfig:
    return AddResourceMetadataConfig(
        node=Config(),
        namespace=Config(),
        deployment=True,
    )


def _flatten(raw: dict[str, Any], prefix: str = "") -> dict[str, Any]:
    out: dict[str, Any] = {}
    for key, value in raw.items():
        full = f"{prefix}{key}"
        if isinstance(value, dict):
            out.update(_flatten(value, f"{full}."))
        else:
            out[full] = value
    return out


def load_config(path: str) -> tuple[Config, AddResourceMetadataConfig]:
    """
    Load the metadata config and the add_resource_metadata section from YAML.
    """
    with open(path, encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    if not isinstance(raw, dict):
        raise ConfigError("YAML content must be a mapping")

    raw = dict(raw)
    resource_raw = raw.pop("add_resource_metadata", None)

    return Config.from_dict(raw), AddResourceMetadataConfig.from_dict(resource_raw)
