import os
from ruamel.yaml import YAML
from release_images.errors import ConfigurationError
from release_images.models import PipelineConfig
from release_images.utils.yaml_loader import get_yaml_instance


class PipelineConfigRepository:
    def __init__(self, file_path: str):
        self.file_path: str = file_path
        self.yaml: YAML = get_yaml_instance()

    def load(self) -> PipelineConfig:
        if not os.path.isfile(self.file_path):
            raise ConfigurationError(f"Components file {self.file_path} not found")
        with open(self.file_path, "r") as f:
            data = self.yaml.load(f)
        try:
            config = PipelineConfig(**data)
        except Exception as e:
            raise ConfigurationError(f"Invalid components.yaml structure: {e}") from e

        names = [c.name for c in config.components]
        if len(names) != len(set(names)):
            raise ConfigurationError(f"Duplicate component names in {self.file_path}: {names}")
        return config
