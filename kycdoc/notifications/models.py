from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Protocol

from kycdoc.processor.models import ProcessingStage

EVENT_NAME = "kyc_update"


class Connection(Protocol):
    """A live client channel able to receive JSON messages."""

    async def send_json(self, data: Any) -> None: ...


@dataclass(frozen=True)
class StageEvent:
    """One stage transition for an owner's room."""

    owner_id: str
    stage: ProcessingStage
    message: str
    payload: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_message(self) -> dict[str, Any]:
        status = self.stage.value if self.stage.is_terminal else "processing"
        return {
            "event": EVENT_NAME,
            "status": status,
            "data": {"stage": self.stage.value, "message": self.message, **self.payload},
            "timestamp": self.timestamp.isoformat(),
        }
