"""Runtime support for generated packet definitions."""

from .errors import NoPacketInStateError as NoPacketInStateError
from .errors import PacketError as PacketError
from .errors import UnknownPacketIdError as UnknownPacketIdError
from .types import ClientState as ClientState
