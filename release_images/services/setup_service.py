import logging
import os

from release_images.clients.git_client import GitClient
from release_images.models import RunContext, TriggerEvent
from release_images.utils.logging import setup_logger


class SetupService:
    def __init__(self, source: str, dry_run: bool = False):
        self.source: str = source
        self.git: GitClient = GitClient(dry_run=dry_run)
        self.dry_run: bool = dry_run
        self.logger: logging.Logger = setup_logger("SetupService")

    def prepare(self, event: TriggerEvent, commit: str, workspace: str) -> RunContext:
        self.git.checkout(self.source, commit, workspace)
        path = self.source if self.dry_run else workspace
        ref = commit if self.dry_run else "HEAD"
        version = self.git.short_sha(path, ref)
        self.logger.info(f"Computed version {version} for {event}")
        self.publish_output("VERSION", version)
        return RunContext(event=event, commit=commit, version=version)

    def publish_output(self, name: str, value: str) -> None:
        output_file = os.environ.get("GITHUB_OUTPUT")
        if not output_file:
            return
        with open(output_file, "a") as f:
            f.write(f"{name}={value}\n")
