from dataclasses import dataclass
from typing import Iterator, Sequence, Tuple

from redis.commands.helpers import list_or_args

from sentinel_listener.exceptions import DataError
from sentinel_listener.typing import ChannelT


@dataclass(frozen=True)
class Command:
    "A command ready to be packed and written by a connection"

    name: str
    args: Tuple[ChannelT, ...] = ()

    def __iter__(self) -> Iterator[ChannelT]:
        yield self.name
        yield from self.args


class CommandBuilder:
    """
    Turns a pub/sub method name and its arguments into a :class:`Command`.

    Only the commands that are legal on a subscribed connection are known;
    anything else is rejected with a :class:`DataError` before it reaches the
    wire.
    """

    COMMANDS = {
        "subscribe": "SUBSCRIBE",
        "psubscribe": "PSUBSCRIBE",
        "unsubscribe": "UNSUBSCRIBE",
        "punsubscribe": "PUNSUBSCRIBE",
    }
    # subscribing to nothing is an error on the server side
    REQUIRE_ARGUMENTS = frozenset(("SUBSCRIBE", "PSUBSCRIBE"))

    def build(self, method: str, arguments: Sequence[ChannelT] = ()) -> Command:
        try:
            name = self.COMMANDS[method.lower()]
        except KeyError:
            raise DataError(
                f"Unsupported command inside a pub/sub context: {method!r}"
            ) from None
        if isinstance(arguments, (str, bytes)):
            arguments = [arguments]
        else:
            arguments = list(arguments)
        args = tuple(list_or_args(arguments[0], arguments[1:])) if arguments else ()
        if not args and name in self.REQUIRE_ARGUMENTS:
            raise DataError(f"{name} requires at least one channel or pattern")
        return Command(name, args)
