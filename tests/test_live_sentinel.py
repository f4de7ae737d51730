import pytest
from sentinel_listener import SentinelSession
from sentinel_listener.events import AckEvent, MessageKind, SessionState
from sentinel_listener.exceptions import SessionClosedError


@pytest.mark.onlysentinel
class TestLiveSentinel:
    def test_subscribe_and_unsubscribe(self, sentinel_url):
        with SentinelSession.from_url(sentinel_url, socket_timeout=5) as session:
            session.subscribe("+sdown", "-sdown")
            assert session.next_event() == AckEvent(
                kind=MessageKind.SUBSCRIBE, channel="+sdown", payload=1
            )
            assert session.next_event().payload == 2

            session.unsubscribe()
            counts = {session.next_event().payload for _ in range(2)}
            assert counts == {0, 1}
            assert session.state is SessionState.ENDED
            with pytest.raises(SessionClosedError):
                session.next_event()

    def test_pattern_subscription(self, sentinel_url):
        with SentinelSession.from_url(
            sentinel_url, psubscribe="*", socket_timeout=5
        ) as session:
            ack = session.next_event()
            assert ack.kind is MessageKind.PSUBSCRIBE
            assert ack.channel == "*"
            session.stop()
            events = list(session.listen())
            assert events[-1] == AckEvent(
                kind=MessageKind.PUNSUBSCRIBE, channel="*", payload=0
            )
