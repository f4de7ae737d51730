from typing import Iterable, List, Union

_StringLikeT = Union[bytes, str, memoryview]
ChannelT = _StringLikeT
ChannelsT = Union[ChannelT, Iterable[ChannelT]]
# a single deframed pub/sub reply: kind tag first, then names, payloads, counts
FrameT = List[Union[bytes, str, int]]
