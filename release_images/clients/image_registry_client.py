import requests
import logging

logger = logging.getLogger(__name__)

MANIFEST_TYPES = ", ".join([
    "application/vnd.oci.image.index.v1+json",
    "application/vnd.oci.image.manifest.v1+json",
    "application/vnd.docker.distribution.manifest.list.v2+json",
    "application/vnd.docker.distribution.manifest.v2+json",
])


class ImageRegistryClient:
    def __init__(self, registry: str, token: str | None = None):
        host, _, namespace = registry.partition("/")
        self.registry_url: str = f"https://{host}"
        self.namespace: str = namespace
        self.auth: tuple[str, str] | None = (token, token) if token else None

    def _manifest_url(self, image: str, tag: str) -> str:
        path = f"{self.namespace}/{image}" if self.namespace else image
        return f"{self.registry_url}/v2/{path}/manifests/{tag}"

    def missing(self, image: str, tag: str) -> bool:
        """Return True only when the registry answers 404 for the tag.

        Registries using token auth answer 401 with a Bearer challenge, so
        any status other than 404 (or a failed request) leaves the tag as
        possibly present.
        """
        url = self._manifest_url(image, tag)
        headers = {"Accept": MANIFEST_TYPES}
        try:
            response = requests.head(url=url, headers=headers, auth=self.auth, timeout=5)
        except Exception as e:
            logger.warning(f"Error checking image {image}:{tag} existence: {e}")
            return False
        if response.status_code not in (200, 404):
            logger.info(f"Registry answered {response.status_code} for {image}:{tag}, assuming it may exist")
        return response.status_code == 404
