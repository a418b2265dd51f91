from dataclasses import dataclass
from datetime import datetime

from .build_result import BuildResult


@dataclass(frozen=True)
class BuildReport:
    run_id: str
    generated_at: datetime
    event: str
    version: str
    results: list[BuildResult]
