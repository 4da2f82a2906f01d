"""Packet schema loading and validation."""

import ast
import builtins
import json
import keyword
from collections.abc import Mapping
from os import PathLike
from typing import Any

from .fields import annotation
from .types import Direction, Field, Packet, PacketKind, PacketSchema, Phase

# Names the generated packet classes already use for their own members
RESERVED_FIELD_NAMES = frozenset(["cls", "PACKET_ID", "parse", "new", "new_raw", "to_wire_bytes"])

# Names the generated modules import or use as locals, a packet class would shadow them
RESERVED_PACKET_NAMES = frozenset(
    [
        "BinaryIO",
        "ClassVar",
        "ClientState",
        "NoPacketInStateError",
        "UnknownPacketIdError",
        "annotations",
        "dataclass",
        "cls",
        "packet_id",
        "r",
        "ret",
        "self",
        "state",
    ]
)

# Codec routines are imported under these prefixes
_CODEC_PREFIXES = ("read_", "write_")

_REQUIRED_PACKET_KEYS = ("name", "id", "fields")
_REQUIRED_FIELD_KEYS = ("name", "type")


class ValidationError(RuntimeError):
    """Raised when a packet schema is malformed."""


def _is_identifier(name: Any) -> bool:
    return isinstance(name, str) and name.isidentifier() and not keyword.iskeyword(name)


def _is_annotation(text: str) -> bool:
    # The annotation is pasted into parameter lists and return types as well as declarations
    try:
        ast.parse(f"def _(value: {text}) -> {text}: ...")
    except (SyntaxError, ValueError):
        return False
    return True


def _reserved_packet_name(name: str) -> bool:
    return (
        name in RESERVED_PACKET_NAMES
        or hasattr(builtins, name)
        or name.startswith(_CODEC_PREFIXES)
    )


def _parse_field(raw: Any, where: str) -> Field:
    if not isinstance(raw, Mapping):
        raise ValidationError(f"{where}: field must be an object")
    for key in _REQUIRED_FIELD_KEYS:
        if key not in raw:
            raise ValidationError(f"{where}: field is missing '{key}'")
    return Field.from_dict(dict(raw))


def _parse_packet(raw: Any, where: str) -> Packet:
    if not isinstance(raw, Mapping):
        raise ValidationError(f"{where}: packet must be an object")
    for key in _REQUIRED_PACKET_KEYS:
        if key not in raw:
            raise ValidationError(f"{where}: packet is missing '{key}'")

    packet_id = raw["id"]
    if isinstance(packet_id, bool) or not isinstance(packet_id, int) or packet_id < 0:
        raise ValidationError(f"{where}: id must be a non-negative integer, got {packet_id!r}")
    if not isinstance(raw["fields"], list):
        raise ValidationError(f"{where}: fields must be a list")
    automatic = raw.get("automatic_serialize", True)
    if not isinstance(automatic, bool):
        raise ValidationError(f"{where}: automatic_serialize must be a boolean")

    return Packet(
        name=raw["name"],
        id=packet_id,
        fields=[_parse_field(f, f"{where}.fields[{i}]") for i, f in enumerate(raw["fields"])],
        automatic_serialize=automatic,
    )


def _parse_direction(raw: Any, direction: Direction) -> dict[Phase, list[Packet]]:
    if not isinstance(raw, Mapping):
        raise ValidationError(f"{direction}: expected a mapping of phase to packets")

    phases: dict[Phase, list[Packet]] = {}
    for phase_name, packets in raw.items():
        try:
            phase = Phase(phase_name)
        except ValueError:
            known = ", ".join(p.value for p in Phase)
            raise ValidationError(
                f"{direction}: unknown phase '{phase_name}' (expected one of {known})"
            ) from None
        if not isinstance(packets, list):
            raise ValidationError(f"{direction}.{phase}: expected a list of packets")
        phases[phase] = [
            _parse_packet(p, f"{direction}.{phase}[{i}]") for i, p in enumerate(packets)
        ]
    return phases


def _validate_fields(packet: Packet, where: str) -> None:
    seen: set[str] = set()
    for field in packet.fields:
        if not _is_identifier(field.name):
            raise ValidationError(f"{where}: invalid field name {field.name!r}")
        if field.name in RESERVED_FIELD_NAMES:
            raise ValidationError(f"{where}: field name '{field.name}' is reserved")
        if field.name in seen:
            raise ValidationError(f"{where}: duplicate field '{field.name}'")
        seen.add(field.name)
        if not isinstance(field.type, str) or not field.type:
            raise ValidationError(f"{where}.{field.name}: type must be a non-empty string")
        if not _is_annotation(annotation(field)):
            raise ValidationError(
                f"{where}.{field.name}: type {field.type!r} is not a valid Python annotation"
            )
        if not isinstance(field.codec, str) or not field.codec.isidentifier():
            raise ValidationError(
                f"{where}.{field.name}: '{field.codec}' is not a valid codec routine name"
            )
        if field.getter_doc is not None and not isinstance(field.getter_doc, str):
            raise ValidationError(f"{where}.{field.name}: getter must be a string")

    for name in seen:
        if f"get_{name}" in seen:
            raise ValidationError(
                f"{where}: field 'get_{name}' clashes with the accessor of '{name}'"
            )


def validate(schema: PacketSchema) -> None:
    """Validate names and ids of a parsed schema."""
    for direction in Direction:
        names: dict[str, Phase] = {}
        for phase, packets in schema.phases(direction).items():
            ids: dict[int, str] = {}
            for i, packet in enumerate(packets):
                where = f"{direction}.{phase}[{i}] ({packet.name})"
                if not _is_identifier(packet.name):
                    raise ValidationError(f"{where}: invalid packet name {packet.name!r}")
                if packet.name == direction.type_name:
                    raise ValidationError(f"{where}: name clashes with the dispatch type")
                if _reserved_packet_name(packet.name):
                    raise ValidationError(f"{where}: packet name '{packet.name}' is reserved")
                if packet.name in names:
                    raise ValidationError(
                        f"{where}: duplicate name, already declared in phase {names[packet.name]}"
                    )
                # Ids only need to be unique per phase, dispatch keys on (phase, id)
                if packet.id in ids:
                    raise ValidationError(
                        f"{where}: duplicate id {packet.id} in phase {phase}"
                        f" (already used by {ids[packet.id]})"
                    )
                names[packet.name] = phase
                ids[packet.id] = packet.name
                _validate_fields(packet, where)

        manual = {
            packet.name
            for packets in schema.phases(direction).values()
            for packet in packets
            if packet.kind == PacketKind.MANUAL
        }
        for name, phase in names.items():
            if name.endswith("Codec") and name.removesuffix("Codec") in manual:
                raise ValidationError(
                    f"{direction}.{phase} ({name}): packet name '{name}' is reserved"
                    f" for the codec mixin of '{name.removesuffix('Codec')}'"
                )


def parse(document: Mapping[str, Any]) -> PacketSchema:
    """Build and validate a schema from a decoded schema document."""
    if not isinstance(document, Mapping):
        raise ValidationError("schema must be an object keyed by direction")

    for key in document:
        if key not in {d.value for d in Direction}:
            raise ValidationError(f"unknown direction '{key}'")

    schema = PacketSchema(
        clientbound=_parse_direction(document.get("clientbound", {}), Direction.CLIENTBOUND),
        serverbound=_parse_direction(document.get("serverbound", {}), Direction.SERVERBOUND),
    )
    validate(schema)
    return schema


def loads(text: str) -> PacketSchema:
    """Parse a JSON schema document."""
    try:
        document = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValidationError(f"schema is not valid JSON: {e}") from e
    return parse(document)


def load(path: str | PathLike[str]) -> PacketSchema:
    """Read and parse a JSON schema file."""
    with open(path, encoding="utf-8") as f:
        return loads(f.read())
