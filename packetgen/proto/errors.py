"""Errors raised by generated packet dispatch code."""

from .types import ClientState


class PacketError(RuntimeError):
    """Raised when a packet cannot be dispatched."""

    def __init__(self, message: str, packet_id: int, state: ClientState) -> None:
        super().__init__(message)
        self.packet_id = packet_id
        self.state = state


class UnknownPacketIdError(PacketError):
    """No packet with the received id exists in the current state."""

    def __init__(self, packet_id: int, state: ClientState) -> None:
        super().__init__(f"No packet with id {packet_id} in state {state}", packet_id, state)


class NoPacketInStateError(PacketError):
    """The current state has no packets at all in this direction."""

    def __init__(self, packet_id: int, state: ClientState) -> None:
        super().__init__(f"No packet available in state {state}", packet_id, state)
