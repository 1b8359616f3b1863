"""Per-owner publish/subscribe channel for processing progress.

Delivery is best-effort and at-most-once: there is no backlog, no replay,
and no acknowledgement. Events for one owner reach each connection in
publish order.
"""

import threading
from typing import Any

from kycdoc.logging.logger import Log
from kycdoc.notifications.models import Connection, StageEvent
from kycdoc.processor.models import ProcessingStage


class StatusNotifier:
    """Rooms keyed by owner id, each holding the connections subscribed to it."""

    def __init__(self) -> None:
        self._rooms: dict[str, dict[int, Connection]] = {}
        self._lock = threading.Lock()

    def subscribe(self, owner_id: str, connection: Connection) -> None:
        """Join a connection to an owner's room. Repeated calls are no-ops."""
        with self._lock:
            self._rooms.setdefault(owner_id, {})[id(connection)] = connection
        Log.info(f"Connection joined KYC room for owner {owner_id}")

    def unsubscribe(self, owner_id: str, connection: Connection) -> None:
        with self._lock:
            self._remove(owner_id, connection)

    def disconnect(self, connection: Connection) -> None:
        """Remove a connection from every room it joined."""
        with self._lock:
            for owner_id in list(self._rooms):
                self._remove(owner_id, connection)

    def subscriber_count(self, owner_id: str) -> int:
        with self._lock:
            return len(self._rooms.get(owner_id, {}))

    async def publish(
        self,
        owner_id: str,
        stage: ProcessingStage,
        message: str,
        payload: dict[str, Any] | None = None,
    ) -> int:
        """Send a stage event to the owner's current subscribers.

        Returns the number of connections the event was delivered to.
        A connection that fails to receive is dropped from the room.
        """
        with self._lock:
            connections = list(self._rooms.get(owner_id, {}).values())
        if not connections:
            Log.debug(f"No subscribers for owner {owner_id}, dropping {stage.value} event")
            return 0

        event = StageEvent(owner_id=owner_id, stage=stage, message=message, payload=payload or {})
        body = event.to_message()
        delivered = 0
        for connection in connections:
            try:
                await connection.send_json(body)
                delivered += 1
            except Exception as exc:
                Log.warning(f"Dropping connection for owner {owner_id} after send failure: {exc}")
                self.unsubscribe(owner_id, connection)
        return delivered

    def _remove(self, owner_id: str, connection: Connection) -> None:
        room = self._rooms.get(owner_id)
        if room is None:
            return
        room.pop(id(connection), None)
        if not room:
            del self._rooms[owner_id]
