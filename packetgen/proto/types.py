"""Runtime types referenced by generated packet definitions."""

from enum import StrEnum, auto


class ClientState(StrEnum):
    """Connection phase, selects which packet ids are valid."""

    HANDSHAKE = auto()
    STATUS = auto()
    LOGIN = auto()
    PLAY = auto()
