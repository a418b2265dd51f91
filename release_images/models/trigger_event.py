from pydantic.dataclasses import dataclass

@dataclass(frozen=True)
class TriggerEvent:
    name: str
    action: str | None = None

    def __str__(self) -> str:
        return f"{self.name}/{self.action}" if self.action else self.name
