import logging
from typing import Iterator, Optional, Set

from redis.utils import str_if_bytes

from sentinel_listener.commands import CommandBuilder
from sentinel_listener.connection import Connection
from sentinel_listener.events import (
    AckEvent,
    Event,
    MessageKind,
    NotificationEvent,
    SessionState,
)
from sentinel_listener.exceptions import ProtocolError, SessionClosedError
from sentinel_listener.payload import parse_notification
from sentinel_listener.typing import ChannelsT, FrameT

logger = logging.getLogger(__name__)

# minimum number of fields per message kind, including the kind itself
_FRAME_LENGTHS = {
    MessageKind.SUBSCRIBE: 3,
    MessageKind.PSUBSCRIBE: 3,
    MessageKind.UNSUBSCRIBE: 3,
    MessageKind.PUNSUBSCRIBE: 3,
    MessageKind.MESSAGE: 3,
    MessageKind.PMESSAGE: 4,
}


class SentinelSession:
    """
    SentinelSession listens to the events a Redis Sentinel publishes.

    Subscribe to one or more Sentinel channels (or patterns), then call
    ``next_event()`` or iterate ``listen()``: every frame read from the
    connection becomes an :class:`~sentinel_listener.events.AckEvent` or a
    :class:`~sentinel_listener.events.NotificationEvent` with its payload
    already parsed.

    >>> from sentinel_listener import SentinelSession
    >>> session = SentinelSession.from_url("redis://localhost:26379")
    >>> session.psubscribe("*")
    >>> for event in session.listen():
    ...     print(event)

    The session ends once the server acknowledges an unsubscription that
    leaves no channel or pattern subscribed. ``next_event()`` must not be
    called after that and raises :class:`SessionClosedError`.

    A session owns its connection. Subscription calls and ``next_event()``
    must not be issued concurrently from different threads.
    """

    def __init__(
        self,
        connection,
        command_builder: Optional[CommandBuilder] = None,
        subscribe: Optional[ChannelsT] = None,
        psubscribe: Optional[ChannelsT] = None,
    ):
        self.connection = connection
        self.command_builder = command_builder or CommandBuilder()
        self.state = SessionState.ACTIVE
        self.subscription_count = 0
        self.channels: Set[str] = set()
        self.patterns: Set[str] = set()
        # set once a (p)subscribe command was written, whether or not the
        # server acknowledged it yet
        self._listening_channels = False
        self._listening_patterns = False

        if subscribe:
            self.subscribe(subscribe)
        if psubscribe:
            self.psubscribe(psubscribe)

    @classmethod
    def from_url(cls, url: str, **kwargs) -> "SentinelSession":
        """
        Return a session on a new connection configured from ``url``.

        ``subscribe`` and ``psubscribe`` are passed to the session, every
        other keyword argument configures the connection.
        """
        session_kwargs = {
            name: kwargs.pop(name)
            for name in ("command_builder", "subscribe", "psubscribe")
            if name in kwargs
        }
        return cls(Connection.from_url(url, **kwargs), **session_kwargs)

    def __repr__(self) -> str:
        return (
            f"<{type(self).__name__}(state={self.state.value}, "
            f"subscriptions={self.subscription_count}, "
            f"connection={self.connection!r})>"
        )

    def __enter__(self) -> "SentinelSession":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.disconnect()

    @property
    def is_active(self) -> bool:
        return self.state is SessionState.ACTIVE

    @property
    def subscribed(self) -> bool:
        "Indicates if there are subscriptions to any channels or patterns"
        return bool(self.channels or self.patterns)

    def execute_command(self, method: str, *args):
        "Build a pub/sub command and write it to the connection"
        command = self.command_builder.build(method, args)
        logger.debug("Writing %s %s", command.name, list(command.args))
        self.connection.write(command)

    def subscribe(self, *args: ChannelsT) -> None:
        "Subscribe to channels"
        self.execute_command("subscribe", *args)
        self._listening_channels = True

    def psubscribe(self, *args: ChannelsT) -> None:
        "Subscribe to channel patterns"
        self.execute_command("psubscribe", *args)
        self._listening_patterns = True

    def unsubscribe(self, *args: ChannelsT) -> None:
        """
        Unsubscribe from the supplied channels. If empty, unsubscribe from
        all channels
        """
        self.execute_command("unsubscribe", *args)

    def punsubscribe(self, *args: ChannelsT) -> None:
        """
        Unsubscribe from the supplied patterns. If empty, unsubscribe from
        all patterns.
        """
        self.execute_command("punsubscribe", *args)

    def next_event(self) -> Event:
        """
        Block until the connection yields a frame and return it as an event.

        Raises :class:`SessionClosedError` once the session has ended,
        :class:`ProtocolError` for frames that are not pub/sub replies and
        :class:`~sentinel_listener.exceptions.MalformedPayloadError` for
        notifications whose payload can't be parsed. Connection errors are
        raised as they are.
        """
        if self.state is SessionState.ENDED:
            raise SessionClosedError(
                "The session has no subscriptions left and can't be read from"
            )
        return self.handle_frame(self.connection.read())

    def handle_frame(self, frame: FrameT) -> Event:
        "Turn a single frame into an event, updating the subscription state"
        kind = self._message_kind(frame)
        if len(frame) < _FRAME_LENGTHS[kind]:
            raise ProtocolError(
                f"Received a truncated {kind.value} frame inside of a "
                f"pub/sub context: {frame!r}"
            )

        if kind.is_subscription:
            return self._handle_ack(kind, str_if_bytes(frame[1]), frame[2])
        if kind is MessageKind.PMESSAGE:
            return self._handle_message(
                str_if_bytes(frame[2]),
                str_if_bytes(frame[3]),
                pattern=str_if_bytes(frame[1]),
            )
        return self._handle_message(str_if_bytes(frame[1]), str_if_bytes(frame[2]))

    def _message_kind(self, frame: FrameT) -> MessageKind:
        try:
            return MessageKind(str_if_bytes(frame[0]))
        except (TypeError, ValueError, IndexError):
            tag = frame[0] if isinstance(frame, (list, tuple)) and frame else frame
            raise ProtocolError(
                f"Received an unknown message type {tag!r} inside of a "
                "pub/sub context"
            ) from None

    def _handle_ack(self, kind: MessageKind, channel: str, count) -> AckEvent:
        try:
            count = int(count)
        except (TypeError, ValueError):
            raise ProtocolError(
                f"Received a non-numeric subscription count {count!r} for "
                f"{kind.value} {channel!r}"
            ) from None

        names = self.patterns if kind.is_pattern else self.channels
        if kind in (MessageKind.SUBSCRIBE, MessageKind.PSUBSCRIBE):
            names.add(channel)
        else:
            names.discard(channel)

        self.subscription_count = count
        logger.debug("%s %r acknowledged, %d subscriptions", kind.value, channel, count)
        if count == 0:
            self.state = SessionState.ENDED
            logger.info("No subscriptions left, the session has ended")
        return AckEvent(kind=kind, channel=channel, payload=count)

    def _handle_message(
        self, channel: str, payload: str, pattern: Optional[str] = None
    ) -> NotificationEvent:
        return parse_notification(channel, payload, pattern=pattern)

    def listen(self) -> Iterator[Event]:
        """
        Yield events until the session ends. The acknowledgement that ends
        the session is the last event yielded.
        """
        while self.is_active:
            yield self.next_event()

    def stop(self, drop: bool = False) -> None:
        """
        Stop listening.

        By default the session unsubscribes from every channel and pattern;
        the server acknowledges each of them and the last acknowledgement
        ends the session, so ``listen()`` drains and stops on its own. With
        ``drop=True`` the connection is closed right away instead.
        """
        if drop:
            self.disconnect()
            return
        if not self.is_active:
            return
        if self._listening_channels:
            self.unsubscribe()
        if self._listening_patterns:
            self.punsubscribe()

    def disconnect(self) -> None:
        "Close the connection. The session state is left untouched."
        self.connection.disconnect()

    close = disconnect
