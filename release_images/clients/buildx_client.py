import logging
import subprocess

from release_images.errors import ImageBuildError

logger = logging.getLogger(__name__)


class BuildxClient:
    def __init__(self, dry_run: bool = False):
        self.dry_run: bool = dry_run

    def _run(self, cmd: list[str], cwd: str | None = None) -> int:
        if self.dry_run:
            logger.info(f"Dry run mode. Skipping: {' '.join(cmd)}")
            return 0
        return subprocess.run(cmd, check=False, cwd=cwd).returncode

    def create_builder(self, name: str) -> None:
        returncode = self._run(["docker", "buildx", "create", "--name", name, "--driver", "docker-container"])
        if returncode != 0:
            raise ImageBuildError(f"Failed to create builder {name}", returncode)

    def remove_builder(self, name: str) -> None:
        returncode = self._run(["docker", "buildx", "rm", name])
        if returncode != 0:
            logger.warning(f"Failed to remove builder {name} (code {returncode})")

    def build_and_push(
        self,
        builder: str,
        dockerfile: str,
        context: str,
        platform: str,
        tags: list[str],
        cache_from: str | None,
        cache_to: str | None,
        cwd: str | None = None,
    ) -> None:
        cmd = ["docker", "buildx", "build", "--builder", builder, "--file", dockerfile, "--platform", platform]
        for tag in tags:
            cmd += ["--tag", tag]
        if cache_from:
            cmd += ["--cache-from", f"type=registry,ref={cache_from}"]
        if cache_to:
            cmd += ["--cache-to", f"type=registry,ref={cache_to},mode=max"]
        cmd += ["--push", context]
        returncode = self._run(cmd, cwd=cwd)
        if returncode != 0:
            logger.error(f"docker buildx build failed with code {returncode}")
            raise ImageBuildError(f"Failed to build and push {', '.join(tags)}", returncode)
