import logging
from datetime import datetime
from typing import Callable

from release_images.clients.doctl_client import DoctlClient
from release_images.clients.image_registry_client import ImageRegistryClient
from release_images.errors import CredentialExpiredError
from release_images.models import RegistryCredential

logger = logging.getLogger(__name__)


class RegistrySession:
    """Registry operations bound to a single time-limited credential.

    Every operation checks the credential first; once it has expired the
    session refuses to act and a new login is required.
    """

    def __init__(
        self,
        credential: RegistryCredential,
        doctl: DoctlClient,
        registry: ImageRegistryClient,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.credential: RegistryCredential = credential
        self.doctl: DoctlClient = doctl
        self.registry: ImageRegistryClient = registry
        self.clock: Callable[[], datetime] = clock

    @classmethod
    def authenticate(cls, doctl: DoctlClient, ttl: int = 600, clock: Callable[[], datetime] = datetime.now) -> "RegistrySession":
        credential = doctl.registry_login(expiry_seconds=ttl)
        registry = ImageRegistryClient(credential.registry, token=credential.token)
        logger.info(f"Logged in to {credential.registry} until {credential.expires_at.isoformat(timespec='seconds')}")
        return cls(credential, doctl, registry, clock)

    def check(self) -> None:
        if self.credential.is_expired(self.clock()):
            raise CredentialExpiredError(
                f"Credential for {self.credential.registry} expired at {self.credential.expires_at.isoformat(timespec='seconds')}"
            )

    def reference(self, image: str, tag: str) -> str:
        return f"{self.credential.registry}/{image}:{tag}"

    def cache_missing(self, image: str, tag: str) -> bool:
        self.check()
        return self.registry.missing(image, tag)

    def digest(self, image: str, tag: str) -> str | None:
        self.check()
        return next((d for t, d in self.doctl.digest_list(image) if t == tag), None)
