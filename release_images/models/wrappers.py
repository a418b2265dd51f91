from pydantic.dataclasses import dataclass

from release_images.models.component import Component
from release_images.models.build_report import BuildReport

@dataclass(frozen=True)
class PipelineConfig:
    components: list[Component]
    platform: str = "linux/amd64"
    context: str = "."
    cache_tag: str = "buildcache"
    tag: str = "latest"
    tag_with_version: bool = False
    credential_ttl: int = 600

@dataclass(frozen=True)
class BuildReportsFile:
    reports: list[BuildReport]
