from sentinel_listener.commands import Command, CommandBuilder
from sentinel_listener.connection import Connection, UnixDomainSocketConnection
from sentinel_listener.events import (
    AckEvent,
    InstanceInfo,
    MasterInfo,
    MessageKind,
    NotificationEvent,
    NotificationKind,
    SentinelChannel,
    SessionState,
    SwitchMasterInfo,
)
from sentinel_listener.exceptions import (
    AuthenticationError,
    ClosedError,
    ConnectionError,
    DataError,
    InvalidResponse,
    MalformedPayloadError,
    ProtocolError,
    PubSubError,
    ResponseError,
    SentinelListenerError,
    SessionClosedError,
    TimeoutError,
)
from sentinel_listener.payload import (
    classify_channel,
    parse_instance_details,
    parse_notification,
    parse_switch_master,
)
from sentinel_listener.session import SentinelSession


def int_or_str(value):
    try:
        return int(value)
    except ValueError:
        return value


__version__ = "0.1.0"


VERSION = tuple(map(int_or_str, __version__.split(".")))

__all__ = [
    "AckEvent",
    "AuthenticationError",
    "ClosedError",
    "Command",
    "CommandBuilder",
    "Connection",
    "ConnectionError",
    "DataError",
    "InstanceInfo",
    "InvalidResponse",
    "MalformedPayloadError",
    "MasterInfo",
    "MessageKind",
    "NotificationEvent",
    "NotificationKind",
    "ProtocolError",
    "PubSubError",
    "ResponseError",
    "SentinelChannel",
    "SentinelListenerError",
    "SentinelSession",
    "SessionClosedError",
    "SessionState",
    "SwitchMasterInfo",
    "TimeoutError",
    "UnixDomainSocketConnection",
    "classify_channel",
    "parse_instance_details",
    "parse_notification",
    "parse_switch_master",
]
