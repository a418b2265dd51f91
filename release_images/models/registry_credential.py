from dataclasses import dataclass, field
from datetime import datetime, timedelta


@dataclass(frozen=True)
class RegistryCredential:
    token: str = field(repr=False)
    registry: str
    issued_at: datetime
    expiry_seconds: int = 600

    @property
    def expires_at(self) -> datetime:
        return self.issued_at + timedelta(seconds=self.expiry_seconds)

    def is_expired(self, now: datetime | None = None) -> bool:
        return (now or datetime.now()) >= self.expires_at
