"""
Parsing of the plain-text payloads a Redis Sentinel publishes.

Sentinel notifications come in two layouts. Most channels describe an
instance::

    <type> <name> <host> <port> [@ <master-name> <master-host> <master-port>]

where the trailing master description is only present when the instance is
not a master itself. ``switch-master`` announces a failover instead::

    <master-name> <old-host> <old-port> <new-host> <new-port>

The tilt mode markers ``+tilt`` and ``-tilt`` carry no structured payload.

Example:
    >>> from sentinel_listener.payload import parse_notification
    >>> event = parse_notification("+sdown", "master mymaster 127.0.0.1 6379")
    >>> event.instance.address
    ('127.0.0.1', 6379)
"""

from typing import Optional

from sentinel_listener.events import (
    InstanceInfo,
    MasterInfo,
    NotificationEvent,
    NotificationKind,
    SwitchMasterInfo,
)
from sentinel_listener.exceptions import MalformedPayloadError

MASTER_ROLE = "master"
MASTER_MARKER = "@"

_TILT_CHANNELS = frozenset(("+tilt", "-tilt"))
_SWITCH_MASTER_CHANNEL = "switch-master"


def classify_channel(channel: str) -> NotificationKind:
    "Decide which payload layout applies to messages on ``channel``"
    if channel in _TILT_CHANNELS:
        return NotificationKind.TILT
    if channel == _SWITCH_MASTER_CHANNEL:
        return NotificationKind.SWITCH_MASTER
    return NotificationKind.INSTANCE_STATE


def _parse_port(value: str, payload: str, channel: Optional[str]) -> int:
    # ASCII digits only
    if not (value.isascii() and value.isdigit()):
        raise MalformedPayloadError(
            f"Invalid port {value!r}", payload=payload, channel=channel
        )
    return int(value)


def parse_instance_details(
    payload: str, channel: Optional[str] = None
) -> InstanceInfo:
    """
    Parse an instance description into an :class:`InstanceInfo`.

    When the instance is not a master the payload must end with the
    description of its master, optionally introduced by ``@``. The port of
    the nested :class:`MasterInfo` is the instance's own port, which is what
    existing consumers of these events have always received.
    """
    fields = payload.split(" ", 4)
    if len(fields) < 4:
        raise MalformedPayloadError(
            "Expected at least 4 fields in instance details",
            payload=payload,
            channel=channel,
        )
    type_, name, host, port = fields[:4]
    port = _parse_port(port, payload, channel)

    if type_ == MASTER_ROLE:
        return InstanceInfo(type=type_, name=name, host=host, port=port)

    description = fields[4] if len(fields) == 5 else ""
    if description.startswith(MASTER_MARKER):
        description = description[len(MASTER_MARKER) :].lstrip(" ")
    master_fields = description.split(" ", 2)
    if len(master_fields) != 3 or not all(master_fields):
        raise MalformedPayloadError(
            f"Expected a '<name> <host> <port>' master description for {type_!r}",
            payload=payload,
            channel=channel,
        )
    master_name, master_host, master_port = master_fields
    _parse_port(master_port, payload, channel)
    # TODO: switch to the parsed master port once downstream consumers stop
    # relying on the instance port being repeated here.
    master = MasterInfo(name=master_name, host=master_host, port=port)
    return InstanceInfo(type=type_, name=name, host=host, port=port, master=master)


def parse_switch_master(
    payload: str, channel: Optional[str] = _SWITCH_MASTER_CHANNEL
) -> SwitchMasterInfo:
    "Parse a ``switch-master`` payload into a :class:`SwitchMasterInfo`"
    fields = payload.split(" ")
    if len(fields) != 5 or not all(fields):
        raise MalformedPayloadError(
            "Expected '<name> <old-host> <old-port> <new-host> <new-port>'",
            payload=payload,
            channel=channel,
        )
    name, old_host, old_port, new_host, new_port = fields
    return SwitchMasterInfo(
        name=name,
        old_host=old_host,
        old_port=_parse_port(old_port, payload, channel),
        new_host=new_host,
        new_port=_parse_port(new_port, payload, channel),
    )


def parse_notification(
    channel: str, payload: str, pattern: Optional[str] = None
) -> NotificationEvent:
    """
    Build the :class:`NotificationEvent` for a message received on
    ``channel``. Raises :class:`MalformedPayloadError` when the payload does
    not follow the layout the channel implies.
    """
    notification = classify_channel(channel)
    if notification is NotificationKind.TILT:
        instance = None
    elif notification is NotificationKind.SWITCH_MASTER:
        instance = parse_switch_master(payload, channel)
    else:
        instance = parse_instance_details(payload, channel)
    return NotificationEvent(
        channel=channel,
        notification=notification,
        instance=instance,
        pattern=pattern,
    )
