from pydantic.dataclasses import dataclass

@dataclass(frozen=True)
class Component:
    name: str
    label: str
    dockerfile: str
    image_var: str
