from .build_report import BuildReport
from .build_result import BuildResult
from .component import Component
from .registry_credential import RegistryCredential
from .run_context import RunContext
from .trigger_event import TriggerEvent
from .wrappers import PipelineConfig, BuildReportsFile

__all__ = [
    "BuildReport",
    "BuildResult",
    "Component",
    "RegistryCredential",
    "RunContext",
    "TriggerEvent",
    "PipelineConfig",
    "BuildReportsFile",
]
