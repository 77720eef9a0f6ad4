import logging
from concurrent.futures import Future

from pawconnect.api.v1.routes.notifications import report_send_failure
from pawconnect.services.notifications import NotificationHub


def test_notify_reaches_every_channel_of_the_user():
    hub = NotificationHub()
    first, second, other = [], [], []
    hub.connect(1, first.append)
    hub.connect(1, second.append)
    hub.connect(2, other.append)

    hub.notify(1, {"type": "like"})

    assert first == second == [{"type": "like"}]
    assert other == []


def test_notify_user_skips_self_and_missing_recipient():
    hub = NotificationHub()
    received = []
    hub.connect(1, received.append)

    hub.notify_user(1, 1, "like", post_id=3)
    hub.notify_user(None, 1, "like", post_id=3)
    hub.notify_user(1, 2, "follow", pet_id=5)

    assert received == [{"type": "follow", "sender_id": 2, "pet_id": 5}]


def test_disconnect_and_unknown_users():
    hub = NotificationHub()
    received = []
    hub.connect(1, received.append)
    hub.disconnect(1, received.append)

    hub.notify(1, {"type": "like"})
    hub.notify(99, {"type": "like"})

    assert received == []
    assert not hub.is_connected(1)


def test_failing_channel_does_not_block_others():
    hub = NotificationHub()
    received = []

    def broken(payload):
        raise RuntimeError("socket closed")

    hub.connect(1, broken)
    hub.connect(1, received.append)
    hub.notify(1, {"type": "match"})

    assert received == [{"type": "match"}]


def test_failed_websocket_send_is_logged(caplog):
    future = Future()
    future.set_exception(RuntimeError("connection reset"))

    with caplog.at_level(logging.WARNING, logger="pawconnect.api.v1.routes.notifications"):
        report_send_failure(7, future)

    assert "Notification to user 7 dropped: connection reset" in caplog.text


def test_successful_websocket_send_logs_nothing(caplog):
    future = Future()
    future.set_result(None)

    with caplog.at_level(logging.WARNING, logger="pawconnect.api.v1.routes.notifications"):
        report_send_failure(7, future)

    assert caplog.records == []
