from pydantic.dataclasses import dataclass

@dataclass(frozen=True)
class BuildResult:
    component: str
    image: str
    status: str  # can be either successful, failed or skipped
    digest: str | None = None
    error: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.status == "successful"
