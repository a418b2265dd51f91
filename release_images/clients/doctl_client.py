import logging
import os
import subprocess
from datetime import datetime

from release_images.errors import RegistryAuthError
from release_images.models import RegistryCredential

logger = logging.getLogger(__name__)


class DoctlClient:
    def __init__(self, registry: str, access_token: str | None = None, dry_run: bool = False):
        token = access_token or os.getenv("DO_REGISTRY_KEY")
        if not token:
            logger.error("DO_REGISTRY_KEY env var is mandatory")
            raise RegistryAuthError("Missing registry access token")
        self.token: str = token
        self.registry: str = registry
        self.dry_run: bool = dry_run

    def _env(self) -> dict[str, str]:
        env = dict(os.environ)
        env["DIGITALOCEAN_ACCESS_TOKEN"] = self.token
        return env

    def registry_login(self, expiry_seconds: int = 600) -> RegistryCredential:
        cmd = ["doctl", "registry", "login", "--expiry-seconds", str(expiry_seconds)]
        issued_at = datetime.now()
        if self.dry_run:
            logger.info(f"Dry run mode. Skipping: {' '.join(cmd)}")
        else:
            result = subprocess.run(cmd, check=False, env=self._env(), capture_output=True, text=True)
            if result.returncode != 0:
                logger.error(f"doctl login failed with code {result.returncode}: {result.stderr.strip()}")
                raise RegistryAuthError(f"Registry {self.registry} rejected the credential")
        return RegistryCredential(
            token=self.token,
            registry=self.registry,
            issued_at=issued_at,
            expiry_seconds=expiry_seconds,
        )

    def digest_list(self, repository: str) -> list[tuple[str, str]]:
        cmd = [
            "doctl", "registry", "repository", "digest-list", repository,
            "--format", "Tag,Digest", "--no-header",
        ]
        if self.dry_run:
            logger.info(f"Dry run mode. Skipping: {' '.join(cmd)}")
            return []
        result = subprocess.run(cmd, check=False, env=self._env(), capture_output=True, text=True)
        if result.returncode != 0:
            raise RuntimeError(f"doctl digest-list failed for {repository}: {result.stderr.strip()}")
        entries = []
        for line in result.stdout.splitlines():
            fields = line.split()
            if len(fields) == 2:
                entries.append((fields[0], fields[1]))
        return entries
