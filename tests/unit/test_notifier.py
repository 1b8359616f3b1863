from typing import Any

import pytest

from kycdoc.notifications.models import EVENT_NAME
from kycdoc.notifications.notifier import StatusNotifier
from kycdoc.processor.models import ProcessingStage


class RecordingConnection:
    def __init__(self) -> None:
        self.messages: list[dict[str, Any]] = []

    async def send_json(self, data: Any) -> None:
        self.messages.append(data)


class BrokenConnection:
    async def send_json(self, data: Any) -> None:
        raise RuntimeError("socket closed")


class TestStatusNotifierSubscriptions:
    def test_subscribe_is_idempotent(self) -> None:
        notifier = StatusNotifier()
        conn = RecordingConnection()
        notifier.subscribe("u1", conn)
        notifier.subscribe("u1", conn)
        assert notifier.subscriber_count("u1") == 1

    def test_unsubscribe_removes_connection(self) -> None:
        notifier = StatusNotifier()
        conn = RecordingConnection()
        notifier.subscribe("u1", conn)
        notifier.unsubscribe("u1", conn)
        assert notifier.subscriber_count("u1") == 0

    def test_disconnect_leaves_every_room(self) -> None:
        notifier = StatusNotifier()
        conn = RecordingConnection()
        notifier.subscribe("u1", conn)
        notifier.subscribe("u2", conn)
        notifier.disconnect(conn)
        assert notifier.subscriber_count("u1") == 0
        assert notifier.subscriber_count("u2") == 0


class TestStatusNotifierPublish:
    @pytest.mark.asyncio
    async def test_no_subscribers_drops_event(self) -> None:
        delivered = await StatusNotifier().publish("u1", ProcessingStage.UPLOADED, "hi")
        assert delivered == 0

    @pytest.mark.asyncio
    async def test_non_terminal_stage_reports_processing(self) -> None:
        notifier = StatusNotifier()
        conn = RecordingConnection()
        notifier.subscribe("u1", conn)

        delivered = await notifier.publish("u1", ProcessingStage.PARSING, "Parsing...")

        assert delivered == 1
        message = conn.messages[0]
        assert message["event"] == EVENT_NAME
        assert message["status"] == "processing"
        assert message["data"] == {"stage": "parsing", "message": "Parsing..."}
        assert "timestamp" in message

    @pytest.mark.asyncio
    async def test_terminal_stage_carries_payload(self) -> None:
        notifier = StatusNotifier()
        conn = RecordingConnection()
        notifier.subscribe("u1", conn)

        await notifier.publish("u1", ProcessingStage.VERIFIED, "done", {"submission_id": "s1"})

        message = conn.messages[0]
        assert message["status"] == "verified"
        assert message["data"]["submission_id"] == "s1"

    @pytest.mark.asyncio
    async def test_events_are_scoped_to_owner(self) -> None:
        notifier = StatusNotifier()
        mine, theirs = RecordingConnection(), RecordingConnection()
        notifier.subscribe("u1", mine)
        notifier.subscribe("u2", theirs)

        await notifier.publish("u1", ProcessingStage.UPLOADED, "hi")

        assert len(mine.messages) == 1
        assert theirs.messages == []

    @pytest.mark.asyncio
    async def test_events_arrive_in_publish_order(self) -> None:
        notifier = StatusNotifier()
        conn = RecordingConnection()
        notifier.subscribe("u1", conn)

        for stage in (ProcessingStage.UPLOADED, ProcessingStage.EXTRACTING, ProcessingStage.ERROR):
            await notifier.publish("u1", stage, stage.value)

        assert [m["data"]["stage"] for m in conn.messages] == ["uploaded", "extracting", "error"]

    @pytest.mark.asyncio
    async def test_failing_connection_is_dropped(self) -> None:
        notifier = StatusNotifier()
        good, broken = RecordingConnection(), BrokenConnection()
        notifier.subscribe("u1", good)
        notifier.subscribe("u1", broken)

        delivered = await notifier.publish("u1", ProcessingStage.UPLOADED, "hi")

        assert delivered == 1
        assert notifier.subscriber_count("u1") == 1
        assert len(good.messages) == 1

    @pytest.mark.asyncio
    async def test_double_subscribe_delivers_one_copy(self) -> None:
        notifier = StatusNotifier()
        conn = RecordingConnection()
        notifier.subscribe("u1", conn)
        notifier.subscribe("u1", conn)

        delivered = await notifier.publish("u1", ProcessingStage.PARSING, "Parsing...")

        assert delivered == 1
        assert len(conn.messages) == 1
