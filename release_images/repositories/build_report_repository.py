from dataclasses import asdict
import os
from pathlib import Path

from ruamel.yaml import YAML
from release_images.models import BuildReport, BuildReportsFile
from release_images.utils.yaml_loader import get_yaml_instance


class BuildReportRepository:
    def __init__(self, file_path: str, max_reports: int = 50):
        self.file_path: str = file_path
        self.max_reports: int = max_reports
        self.yaml: YAML = get_yaml_instance()

    def find_all(self) -> list[BuildReport]:
        if not os.path.isfile(path=Path(self.file_path)):
            return []
        with open(self.file_path, "r") as f:
            data = self.yaml.load(f)
            try:
                parsed = BuildReportsFile(**data)
                return parsed.reports
            except Exception as e:
                raise ValueError(f"Invalid build reports file: {e}") from e

    def find_by_id(self, run_id: str) -> BuildReport | None:
        return next((r for r in self.find_all() if r.run_id == run_id), None)

    def save(self, report: BuildReport) -> bool:
        reports = [r for r in self.find_all() if r.run_id != report.run_id]
        # newest first
        reports.insert(0, report)
        return self._write_reports(reports[: self.max_reports])

    def _write_reports(self, reports: list[BuildReport]) -> bool:
        try:
            with open(self.file_path, "w") as f:
                data = {"reports": [asdict(r) for r in reports]}
                self.yaml.dump(data, f)
            return True
        except Exception as e:
            raise Exception(f"Error writing build reports: {e}") from e
