import logging
import subprocess

from release_images.errors import SourceRetrievalError

logger = logging.getLogger(__name__)


class GitClient:
    def __init__(self, dry_run: bool = False):
        self.dry_run: bool = dry_run

    def checkout(self, source: str, commit: str, dest: str) -> None:
        for cmd in (
            ["git", "clone", "--quiet", source, dest],
            ["git", "-C", dest, "checkout", "--quiet", commit],
        ):
            if self.dry_run:
                logger.info(f"Dry run mode. Skipping: {' '.join(cmd)}")
                continue
            result = subprocess.run(cmd, check=False, capture_output=True, text=True)
            if result.returncode != 0:
                logger.error(f"git failed with code {result.returncode}: {result.stderr.strip()}")
                raise SourceRetrievalError(f"Failed to check out {commit} from {source}")

    def short_sha(self, path: str, ref: str = "HEAD", length: int = 7) -> str:
        cmd = ["git", "-C", path, "rev-parse", f"--short={length}", ref]
        result = subprocess.run(cmd, check=False, capture_output=True, text=True)
        if result.returncode != 0:
            raise SourceRetrievalError(f"Failed to resolve {ref} in {path}: {result.stderr.strip()}")
        return result.stdout.strip()
