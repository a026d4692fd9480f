from pathlib import Path

import pytest

from esbundle.config import BundleConfig, ConnectionSettings, ManagerSettings
from esbundle.errors import ConfigurationError


def test_from_dict_builds_typed_settings(config):
    default = config.get_connections()["default"]
    assert default == ConnectionSettings(
        name="default",
        index_name="shop",
        hosts=("http://es1:9200", "http://es2:9200"),
        settings={"number_of_shards": 1},
    )
    assert config.get_connections()["blog"].auth == {"username": "elastic", "password": "secret"}

    blog = config.get_managers()["Blog"]
    assert blog == ManagerSettings(name="Blog", connection="blog", mappings=("blog",), debug=True)
    assert blog.key == "blog"

    assert config.host_modules == ("catalog", "reviews", "blog")
    assert config.logging_path == Path("/tmp/esbundle-test.log")
    assert config.strict_mappings is False


def test_manager_defaults():
    config = BundleConfig.from_dict({"managers": {"default": None}})

    assert config.get_managers()["default"] == ManagerSettings(
        name="default", connection="default", mappings=(), debug=False
    )


def test_hosts_default_from_env(monkeypatch):
    monkeypatch.setenv("ES_HOSTS", "http://a:9200, http://b:9200")

    config = BundleConfig.from_dict({"connections": {"default": {"index_name": "shop"}}})

    assert config.get_connections()["default"].hosts == ("http://a:9200", "http://b:9200")


def test_case_insensitive_duplicate_managers_are_rejected():
    with pytest.raises(ConfigurationError, match="collide"):
        BundleConfig.from_dict({"managers": {"Default": {}, "default": {}}})


def test_connection_requires_index_name():
    with pytest.raises(ConfigurationError, match="index_name"):
        BundleConfig.from_dict({"connections": {"default": {"hosts": ["http://a:9200"]}}})


def test_sections_must_be_mappings():
    with pytest.raises(ConfigurationError, match="managers"):
        BundleConfig.from_dict({"managers": ["default"]})


def test_manager_entry_must_be_a_mapping():
    data = {
        "connections": {"default": {"index_name": "shop"}},
        "managers": {"default": ["catalog"]},
    }

    with pytest.raises(ConfigurationError, match="Manager 'default' must be a mapping"):
        BundleConfig.from_dict(data)


def test_connection_entry_must_be_a_mapping():
    with pytest.raises(ConfigurationError, match="Connection 'default' must be a mapping"):
        BundleConfig.from_dict({"connections": {"default": ["shop"]}})


def test_from_yaml(tmp_path):
    path = tmp_path / "elasticsearch.yaml"
    path.write_text(
        """
strict_mappings: true
host_modules: [catalog]
connections:
  default:
    index_name: shop
managers:
  default:
    mappings: catalog
modules:
  catalog:
    types:
      product: {class: Product}
""",
        encoding="utf-8",
    )

    config = BundleConfig.from_yaml(path)

    assert config.strict_mappings is True
    assert config.host_modules == ("catalog",)
    assert config.get_managers()["default"].mappings == ("catalog",)
    assert config.modules["catalog"]["types"]["product"]["class"] == "Product"


def test_from_env_reads_config_path(tmp_path, monkeypatch):
    path = tmp_path / "es.yaml"
    path.write_text("connections:\n  default:\n    index_name: envshop\n", encoding="utf-8")
    monkeypatch.setenv("ES_BUNDLE_CONFIG", str(path))

    assert BundleConfig.from_env().get_connections()["default"].index_name == "envshop"


def test_invalid_yaml_is_a_configuration_error(tmp_path):
    path = tmp_path / "broken.yaml"
    path.write_text("managers: [unclosed\n", encoding="utf-8")

    with pytest.raises(ConfigurationError, match="Invalid YAML"):
        BundleConfig.from_yaml(path)
