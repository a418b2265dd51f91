import logging
import os
import shutil
import tempfile

from release_images.clients.buildx_client import BuildxClient
from release_images.clients.doctl_client import DoctlClient
from release_images.clients.git_client import GitClient
from release_images.clients.registry_session import RegistrySession
from release_images.errors import ConfigurationError
from release_images.models import BuildResult, Component, PipelineConfig, RunContext
from release_images.utils.logging import setup_logger


class ImageBuildService:
    def __init__(self, config: PipelineConfig, registry: str, source: str, dry_run: bool = False):
        self.config: PipelineConfig = config
        self.registry: str = registry
        self.source: str = source
        self.git: GitClient = GitClient(dry_run=dry_run)
        self.buildx: BuildxClient = BuildxClient(dry_run=dry_run)
        self.dry_run: bool = dry_run
        self.logger: logging.Logger = setup_logger("ImageBuildService")

    def build(self, component: Component, context: RunContext) -> BuildResult:
        image = os.environ.get(component.image_var, "")
        workspace = tempfile.mkdtemp(prefix=f"{component.name}-")
        try:
            if not image:
                raise ConfigurationError(f"{component.image_var} is not set for component {component.name}")
            self.git.checkout(self.source, context.commit, workspace)
            session = self.login()
            builder = f"release-images-{os.path.basename(workspace)}"
            self.buildx.create_builder(builder)
            try:
                self.build_and_push(component, image, session, builder, workspace, context)
            finally:
                self.buildx.remove_builder(builder)
        except Exception as e:
            self.logger.error(f"{component.label} image build failed: {e}")
            return BuildResult(component=component.name, image=image, status="failed", error=str(e))
        finally:
            shutil.rmtree(workspace, ignore_errors=True)

        digest = self.report_digest(component, image, session)
        return BuildResult(component=component.name, image=image, status="successful", digest=digest)

    def login(self) -> RegistrySession:
        doctl = DoctlClient(self.registry, dry_run=self.dry_run)
        return RegistrySession.authenticate(doctl, ttl=self.config.credential_ttl)

    def tags(self, session: RegistrySession, image: str, context: RunContext) -> list[str]:
        tags = [session.reference(image, self.config.tag)]
        if self.config.tag_with_version:
            tags.append(session.reference(image, context.version))
        return tags

    def build_and_push(
        self,
        component: Component,
        image: str,
        session: RegistrySession,
        builder: str,
        workspace: str,
        context: RunContext,
    ) -> None:
        cache_ref = session.reference(image, self.config.cache_tag)
        if not self.dry_run and session.cache_missing(image, self.config.cache_tag):
            self.logger.info(f"No build cache at {cache_ref}, running a full build")
            cache_from = None
        else:
            cache_from = cache_ref

        tags = self.tags(session, image, context)
        session.check()
        self.logger.info(f"Building {component.label} image from {component.dockerfile} as {', '.join(tags)}")
        self.buildx.build_and_push(
            builder=builder,
            dockerfile=component.dockerfile,
            context=self.config.context,
            platform=self.config.platform,
            tags=tags,
            cache_from=cache_from,
            cache_to=cache_ref,
            cwd=workspace,
        )

    def report_digest(self, component: Component, image: str, session: RegistrySession) -> str | None:
        try:
            digest = session.digest(image, self.config.tag)
        except Exception as e:
            self.logger.warning(f"Failed to look up {component.label} image digest: {e}")
            return None
        if digest is None:
            self.logger.warning(f"No digest found for {image}:{self.config.tag}")
            return None
        self.logger.info(f"{component.label} image digest {self.config.tag} {digest}")
        return digest
