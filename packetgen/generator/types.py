"""Type definitions for packet schemas and code generation."""

from dataclasses import dataclass, field
from enum import StrEnum, auto

from dataclasses_json import DataClassJsonMixin, config


class Phase(StrEnum):
    """Connection phase a packet belongs to.

    Declaration order is the dispatch order of the generated parser.
    """

    HANDSHAKE = auto()
    STATUS = auto()
    LOGIN = auto()
    PLAY = auto()


class Direction(StrEnum):
    """Which endpoint originates a packet."""

    CLIENTBOUND = auto()  # sent by the server
    SERVERBOUND = auto()  # sent by the client

    @property
    def label(self) -> str:
        return self.value.capitalize()

    @property
    def type_name(self) -> str:
        """Name of the generated dispatch union for this direction."""
        return f"{self.label}Packet"


class PacketKind(StrEnum):
    """How a packet is (de)serialized."""

    AUTOMATIC = auto()  # parse/to_wire_bytes derived from the field list
    MANUAL = auto()  # parse/to_wire_bytes hand-written in a mixin


@dataclass
class Field(DataClassJsonMixin):
    """Represents a member of a packet.

    read: codec routine suffix used instead of type, for both reading and writing
    getter_doc: accessor documentation, "getter" in schema documents
    """

    name: str
    type: str
    read: str | None = None
    getter_doc: str | None = field(default=None, metadata=config(field_name="getter"))

    @property
    def codec(self) -> str:
        return self.read if self.read is not None else self.type


@dataclass
class Packet(DataClassJsonMixin):
    """Represents a single packet definition."""

    name: str
    id: int
    fields: list[Field]
    automatic_serialize: bool = True

    @property
    def kind(self) -> PacketKind:
        return PacketKind.AUTOMATIC if self.automatic_serialize else PacketKind.MANUAL


@dataclass(frozen=True)
class PhasedPacket:
    """A packet with the phase it was declared under attached."""

    packet: Packet
    phase: Phase

    @property
    def name(self) -> str:
        return self.packet.name

    @property
    def id(self) -> int:
        return self.packet.id

    @property
    def fields(self) -> list[Field]:
        return self.packet.fields

    @property
    def kind(self) -> PacketKind:
        return self.packet.kind


@dataclass
class PacketSchema:
    """Represents a complete protocol: direction -> phase -> packets."""

    clientbound: dict[Phase, list[Packet]] = field(default_factory=dict)
    serverbound: dict[Phase, list[Packet]] = field(default_factory=dict)

    def phases(self, direction: Direction) -> dict[Phase, list[Packet]]:
        if direction == Direction.CLIENTBOUND:
            return self.clientbound
        return self.serverbound


def flatten(schema: PacketSchema, direction: Direction) -> list[PhasedPacket]:
    """Return every packet of a direction, in phase order then declaration order."""
    phases = schema.phases(direction)
    return [PhasedPacket(packet, phase) for phase in Phase for packet in phases.get(phase, [])]


def packets_in_phase(packets: list[PhasedPacket], phase: Phase) -> list[PhasedPacket]:
    return [p for p in packets if p.phase == phase]
