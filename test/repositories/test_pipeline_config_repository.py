import os
import pytest

from release_images.errors import ConfigurationError
from release_images.repositories import PipelineConfigRepository

ASSETS_DIR = os.path.join(os.path.dirname(os.path.dirname(__file__)), "assets")


def test_load_components():
    config = PipelineConfigRepository(os.path.join(ASSETS_DIR, "components.yaml")).load()

    assert [c.name for c in config.components] == ["api", "queue", "ui"]
    assert config.components[0].dockerfile == "config/api.Dockerfile"
    assert config.components[1].image_var == "QUEUE_IMAGE"
    assert config.components[2].label == "UI"
    assert config.platform == "linux/amd64"
    assert config.cache_tag == "buildcache"
    assert config.tag == "latest"
    assert config.tag_with_version is False
    assert config.credential_ttl == 600


def test_defaults(tmp_path):
    config_file = tmp_path / "components.yaml"
    config_file.write_text(
        "components:\n"
        "  - name: api\n"
        "    label: API\n"
        "    dockerfile: config/api.Dockerfile\n"
        "    image_var: API_IMAGE\n"
    )
    config = PipelineConfigRepository(str(config_file)).load()
    assert config.context == "."
    assert config.platform == "linux/amd64"


def test_missing_file():
    with pytest.raises(ConfigurationError, match="not found"):
        PipelineConfigRepository("notexistingfile").load()


def test_invalid_schema(tmp_path):
    bad_file = tmp_path / "bad.yaml"
    bad_file.write_text("components:\n  - name: api\n")
    with pytest.raises(ConfigurationError, match="Invalid components.yaml structure"):
        PipelineConfigRepository(str(bad_file)).load()


def test_duplicate_names(tmp_path):
    bad_file = tmp_path / "dup.yaml"
    entry = "  - name: api\n    label: API\n    dockerfile: a\n    image_var: A\n"
    bad_file.write_text("components:\n" + entry + entry)
    with pytest.raises(ConfigurationError, match="Duplicate"):
        PipelineConfigRepository(str(bad_file)).load()
