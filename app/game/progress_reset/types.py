from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(slots=True)
class ProgressResetResult:
    user_id: str
    reset_from: str
    full_reset: bool
    deleted: dict[str, int] = field(default_factory=dict)
    xp: int = 0
    level: int = 1

    def as_response(self) -> dict[str, object]:
        return {"success": True, "deleted": dict(self.deleted)}
