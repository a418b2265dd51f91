import json
import logging
import os
import tempfile
from concurrent.futures import ThreadPoolExecutor
from dataclasses import asdict
from datetime import datetime
from typing_extensions import override

from release_images.errors import ConfigurationError, PipelineError
from release_images.models import BuildReport, BuildResult, Component, PipelineConfig, RunContext, TriggerEvent
from release_images.repositories import BuildReportRepository, PipelineConfigRepository
from release_images.services.image_build_service import ImageBuildService
from release_images.services.service import Service
from release_images.services.setup_service import SetupService
from release_images.services.trigger_service import TriggerService
from release_images.utils.logging import setup_logger


class PipelineService(Service):
    def __init__(
        self,
        components_file: str,
        reports_file: str,
        source: str,
        commit: str = "HEAD",
        event: TriggerEvent | None = None,
        release_tag: str | None = None,
        only: list[str] | None = None,
        dry_run: bool = False,
    ):
        self.config_repository: PipelineConfigRepository = PipelineConfigRepository(components_file)
        self.report_repository: BuildReportRepository = BuildReportRepository(reports_file)
        self.trigger: TriggerService = TriggerService()
        self.setup: SetupService = SetupService(source, dry_run)
        self.source: str = source
        self.commit: str = commit
        self.event: TriggerEvent | None = event
        self.release_tag: str | None = release_tag
        self.only: list[str] = only or []
        self.dry_run: bool = dry_run
        self.logger: logging.Logger = setup_logger("PipelineService")

    @override
    def run(self) -> None:
        event, commit = self.resolve_event()
        if not self.trigger.evaluate(event):
            self.logger.info("No jobs started")
            return

        config = self.config_repository.load()
        components = self.select_components(config.components)
        registry = os.environ.get("DO_REGISTRY")
        if not registry:
            raise ConfigurationError("DO_REGISTRY env var is mandatory")

        with tempfile.TemporaryDirectory(prefix="setup-") as workspace:
            context = self.setup.prepare(event, commit, os.path.join(workspace, "src"))

        results = self.build_all(config, registry, components, context)
        report = BuildReport(
            run_id=f"{context.version}-{datetime.now():%Y%m%d%H%M%S}",
            generated_at=datetime.now(),
            event=str(event),
            version=context.version,
            results=results,
        )

        if self.dry_run:
            print(json.dumps(asdict(report), default=str))
        elif self.report_repository.save(report):
            self.logger.info(f"Build report {report.run_id} has been saved successfully.")

        failed = [r.component for r in results if not r.succeeded]
        if failed:
            raise PipelineError(f"Image builds failed for: {', '.join(failed)}")

    def resolve_event(self) -> tuple[TriggerEvent, str]:
        if self.event:
            return self.event, self.commit
        if self.release_tag:
            repo = os.environ.get("GITHUB_REPOSITORY")
            if not repo:
                raise ConfigurationError("GITHUB_REPOSITORY env var is mandatory with a release tag")
            return self.trigger.event_for_release(repo, self.release_tag)
        return self.trigger.load_event(), self.commit

    def select_components(self, components: list[Component]) -> list[Component]:
        if not self.only:
            return components
        unknown = set(self.only) - {c.name for c in components}
        if unknown:
            raise ConfigurationError(f"Unknown components: {', '.join(sorted(unknown))}")
        return [c for c in components if c.name in self.only]

    def build_all(
        self, config: PipelineConfig, registry: str, components: list[Component], context: RunContext
    ) -> list[BuildResult]:
        builder = ImageBuildService(config, registry, self.source, self.dry_run)
        results: list[BuildResult] = []
        with ThreadPoolExecutor(max_workers=max(len(components), 1)) as executor:
            futures = [(c, executor.submit(builder.build, c, context)) for c in components]
            for component, future in futures:
                try:
                    results.append(future.result())
                except Exception as e:
                    self.logger.error(f"{component.label} job aborted: {e}")
                    results.append(BuildResult(component=component.name, image="", status="failed", error=str(e)))

        for result in results:
            if result.succeeded:
                self.logger.info(f"{result.component}: published {result.image} ({result.digest or 'digest unknown'})")
            else:
                self.logger.error(f"{result.component}: failed ({result.error})")
        return results
