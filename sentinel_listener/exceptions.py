"Core exceptions raised by the Sentinel listener"


class SentinelListenerError(Exception):
    pass


class ConnectionError(SentinelListenerError):
    pass


class TimeoutError(ConnectionError):
    pass


class ClosedError(ConnectionError):
    "The connection was closed while (or before) reading from it"
    pass


class AuthenticationError(ConnectionError):
    pass


class InvalidResponse(SentinelListenerError):
    pass


class ResponseError(SentinelListenerError):
    pass


class NoPermissionError(ResponseError):
    pass


class DataError(SentinelListenerError):
    pass


class PubSubError(SentinelListenerError):
    pass


class ProtocolError(PubSubError):
    "A frame carried a message kind that has no meaning in a pub/sub context"
    pass


class SessionClosedError(PubSubError):
    """
    The session already received the acknowledgement that dropped its
    subscription count to zero, so no further events can be read from it.
    """
    pass


class MalformedPayloadError(DataError):
    """
    A notification payload does not follow the expected text layout.

    The raw ``payload`` and the ``channel`` it arrived on are kept on the
    exception so the caller can log or skip the offending event.
    """

    def __init__(self, message, payload=None, channel=None):
        super().__init__(message)
        self.payload = payload
        self.channel = channel

    def __str__(self):
        return f"{self.args[0]} (channel={self.channel!r}, payload={self.payload!r})"
