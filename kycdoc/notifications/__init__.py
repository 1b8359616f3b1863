from kycdoc.notifications.models import Connection, StageEvent
from kycdoc.notifications.notifier import StatusNotifier

__all__ = ["Connection", "StageEvent", "StatusNotifier"]
