from .build_report_repository import BuildReportRepository
from .pipeline_config_repository import PipelineConfigRepository

__all__ = [
    'BuildReportRepository',
    'PipelineConfigRepository'
]
