from pydantic.dataclasses import dataclass
from .trigger_event import TriggerEvent

@dataclass(frozen=True)
class RunContext:
    event: TriggerEvent
    commit: str
    version: str
