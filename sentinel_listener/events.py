"""
Typed records produced while listening to a Redis Sentinel.

Every frame read by a :class:`~sentinel_listener.session.SentinelSession`
becomes exactly one of the two event types below:

* :class:`AckEvent` for subscribe/unsubscribe acknowledgements, carrying the
  subscription count reported by the server;
* :class:`NotificationEvent` for messages published by the Sentinel, with the
  payload already decoded into an :class:`InstanceInfo` or a
  :class:`SwitchMasterInfo` (or nothing at all for tilt mode markers).
"""

import enum
from dataclasses import dataclass
from typing import Optional, Tuple, Union


class MessageKind(enum.Enum):
    "The kind tag that opens every pub/sub frame"

    SUBSCRIBE = "subscribe"
    PSUBSCRIBE = "psubscribe"
    UNSUBSCRIBE = "unsubscribe"
    PUNSUBSCRIBE = "punsubscribe"
    MESSAGE = "message"
    PMESSAGE = "pmessage"

    @property
    def is_subscription(self) -> bool:
        return self in _SUBSCRIPTION_KINDS

    @property
    def is_pattern(self) -> bool:
        return self in _PATTERN_KINDS


_SUBSCRIPTION_KINDS = frozenset(
    (
        MessageKind.SUBSCRIBE,
        MessageKind.PSUBSCRIBE,
        MessageKind.UNSUBSCRIBE,
        MessageKind.PUNSUBSCRIBE,
    )
)
_PATTERN_KINDS = frozenset(
    (MessageKind.PSUBSCRIBE, MessageKind.PUNSUBSCRIBE, MessageKind.PMESSAGE)
)


class NotificationKind(enum.Enum):
    "Payload layout of a Sentinel notification, decided by its channel"

    TILT = "tilt"
    SWITCH_MASTER = "switch-master"
    INSTANCE_STATE = "instance-state"


class SessionState(enum.Enum):
    ACTIVE = "active"
    ENDED = "ended"


class SentinelChannel:
    """
    Channels a Sentinel publishes its events on.

    Provided for convenience when subscribing; any string works as a channel
    name and ``psubscribe("*")`` receives all of them.
    """

    RESET_MASTER = "+reset-master"
    SLAVE = "+slave"
    FAILOVER_STATE_RECONF_SLAVES = "+failover-state-reconf-slaves"
    FAILOVER_DETECTED = "+failover-detected"
    SLAVE_RECONF_SENT = "+slave-reconf-sent"
    SLAVE_RECONF_INPROG = "+slave-reconf-inprog"
    SLAVE_RECONF_DONE = "+slave-reconf-done"
    DUP_SENTINEL = "-dup-sentinel"
    SENTINEL = "+sentinel"
    SDOWN = "+sdown"
    SDOWN_CLEARED = "-sdown"
    ODOWN = "+odown"
    ODOWN_CLEARED = "-odown"
    FAILOVER_STATE_SELECT_SLAVE = "+failover-state-select-slave"
    SELECTED_SLAVE = "+selected-slave"
    FAILOVER_STATE_SEND_SLAVEOF_NOONE = "+failover-state-send-slaveof-noone"
    FAILOVER_END_FOR_TIMEOUT = "+failover-end-for-timeout"
    FAILOVER_END = "+failover-end"
    CONVERT_TO_SLAVE = "+convert-to-slave"
    SWITCH_MASTER = "switch-master"
    TILT = "+tilt"
    TILT_CLEARED = "-tilt"


@dataclass(frozen=True)
class MasterInfo:
    name: str
    host: str
    port: int

    @property
    def address(self) -> Tuple[str, int]:
        return self.host, self.port


@dataclass(frozen=True)
class InstanceInfo:
    """
    An instance described by a Sentinel notification.

    Attributes:
        type: role of the instance, e.g. ``master``, ``slave`` or ``sentinel``
        name: the instance name as known to the Sentinel
        host: address of the instance
        port: port of the instance
        master: the master the instance belongs to; only set when the
                instance is not itself a master
    """

    type: str
    name: str
    host: str
    port: int
    master: Optional[MasterInfo] = None

    @property
    def is_master(self) -> bool:
        return self.master is None

    @property
    def address(self) -> Tuple[str, int]:
        return self.host, self.port


@dataclass(frozen=True)
class SwitchMasterInfo:
    "A master of the monitored group was replaced after a failover"

    name: str
    old_host: str
    old_port: int
    new_host: str
    new_port: int

    @property
    def old_address(self) -> Tuple[str, int]:
        return self.old_host, self.old_port

    @property
    def new_address(self) -> Tuple[str, int]:
        return self.new_host, self.new_port


@dataclass(frozen=True)
class AckEvent:
    kind: MessageKind
    channel: str
    payload: int


@dataclass(frozen=True)
class NotificationEvent:
    """
    A message published by the Sentinel.

    ``kind`` is always :attr:`MessageKind.MESSAGE`, also for messages
    received through a pattern subscription; the matching pattern is kept in
    ``pattern`` in that case. ``instance`` is ``None`` for tilt mode markers.
    """

    channel: str
    notification: NotificationKind
    instance: Union[InstanceInfo, SwitchMasterInfo, None] = None
    pattern: Optional[str] = None
    kind: MessageKind = MessageKind.MESSAGE


Event = Union[AckEvent, NotificationEvent]
