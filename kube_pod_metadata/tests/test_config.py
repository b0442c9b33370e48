import pytest

from kube_pod_metadata.config import (
    AddResourceMetadataConfig,
    Config,
    ConfigError,
    get_default_resource_metadata_config,
    load_config,
)
from kube_pod_metadata.pod import PodMetadataGenerator


class TestConfig:
    def test_defaults(self):
        cfg = Config.from_dict(None)
        assert cfg.include_labels == []
        assert cfg.labels_dedot is True
        assert cfg.annotations_dedot is True

    def test_dotted_and_nested_keys(self):
        dotted = Config.from_dict({"labels.dedot": False, "include_labels": ["app"]})
        nested = Config.from_dict({"labels": {"dedot": False}, "include_labels": ["app"]})
        assert dotted == nested
        assert dotted.labels_dedot is False

    def test_cluster_info(self):
        cfg = Config.from_dict({"cluster": {"name": "prod", "url": "https://k8s"}})
        assert cfg.cluster_name == "prod"
        assert cfg.cluster_url == "https://k8s"

    @pytest.mark.parametrize(
        "raw",
        [
            {"include_labels": "app"},
            {"labels.dedot": "yes"},
            {"unknown": 1},
            ["not", "a", "mapping"],
        ],
    )
    def test_invalid(self, raw):
        with pytest.raises(ConfigError):
            Config.from_dict(raw)


class TestAddResourceMetadataConfig:
    def test_default(self):
        cfg = get_default_resource_metadata_config()
        assert cfg.deployment is True
        assert cfg.node == Config()
        assert cfg.namespace == Config()

    def test_from_dict(self):
        cfg = AddResourceMetadataConfig.from_dict(
            {"deployment": False, "node": {"include_labels": ["zone"]}}
        )
        assert cfg.deployment is False
        assert cfg.node.include_labels == ["zone"]
        assert cfg.namespace == Config()

    def test_invalid_keys(self):
        with pytest.raises(ConfigError):
            AddResourceMetadataConfig.from_dict({"cronjob": True})
        with pytest.raises(ConfigError):
            AddResourceMetadataConfig.from_dict({"deployment": "false"})

    def test_generator_defaults_config(self):
        gen = PodMetadataGenerator(Config(), None, None, None, None, None)
        assert gen.add_resource_metadata == get_default_resource_metadata_config()


class TestLoadConfig:
    def test_load(self, tmp_path):
        path = tmp_path / "metadata.yaml"
        path.write_text(
            "include_labels: [app]\n"
            "labels.dedot: false\n"
            "add_resource_metadata:\n"
            "  deployment: false\n"
            "  namespace:\n"
            "    include_labels: [team]\n"
        )
        cfg, resource_cfg = load_config(str(path))

        assert cfg.include_labels == ["app"]
        assert cfg.labels_dedot is False
        assert resource_cfg.deployment is False
        assert resource_cfg.namespace.include_labels == ["team"]

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        cfg, resource_cfg = load_config(str(path))

        assert cfg == Config()
        assert resource_cfg == get_default_resource_metadata_config()

    def test_non_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigError):
            load_config(str(path))
