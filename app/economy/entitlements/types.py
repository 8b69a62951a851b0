from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(slots=True)
class EntitlementCheckResult:
    entitled: bool
    key: str
    since: datetime | None = None
    granted_key: str | None = None
    source_purchase_id: UUID | None = None

    def as_response(self) -> dict[str, object]:
        payload: dict[str, object] = {"entitled": self.entitled, "key": self.key}
        if self.entitled and self.since is not None:
            payload["since"] = self.since.isoformat()
        return payload
