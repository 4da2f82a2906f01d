"""Python code generator for packet schemas."""

from jinja2 import Environment, PackageLoader

from . import fields as fragments
from .types import Direction, PacketKind, Phase, PhasedPacket, packets_in_phase

MAX_LINE = 100

RUNTIME_NAMES = ["ClientState", "NoPacketInStateError", "UnknownPacketIdError"]

env = Environment(
    loader=PackageLoader("packetgen.generator", "templates"),
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=True,
)

packets_template = env.get_template("packets.py.j2")
enum_template = env.get_template("enum.py.j2")


def _import_line(module: str, names: list[str]) -> str:
    """Generate a from-import, wrapping it when it gets too long."""
    names = sorted(names)
    line = f"from {module} import {', '.join(names)}"
    if len(line) <= MAX_LINE:
        return line
    body = "".join(f"    {name},\n" for name in names)
    return f"from {module} import (\n{body})"


def _call(callee: str, args: list[str], indent: str) -> str:
    """Generate a call with one argument per line."""
    if not args:
        return f"{callee}()"
    body = "".join(f"\n{indent}    {arg}," for arg in args)
    return f"{callee}({body}\n{indent})"


def _union(names: list[str], indent: str) -> str:
    if not names:
        return "object"
    line = " | ".join(names)
    if len(indent) + len(line) <= MAX_LINE - 10:
        return line
    body = "".join(f"\n{indent}    {'| ' if i else ''}{name}" for i, name in enumerate(names))
    return f"({body}\n{indent})"


def _docstring(text: str) -> str:
    """Flatten text so it is safe inside a one-line triple-quoted docstring."""
    text = " ".join(text.split())
    return text.replace("\\", "\\\\").replace('"', '\\"')


def _constructor_name(packet: PhasedPacket) -> str:
    # Manual packets keep "new" free for hand-written code
    return "new" if packet.kind == PacketKind.AUTOMATIC else "new_raw"


def _params(packet: PhasedPacket) -> str:
    params = fragments.fn_params(packet.fields)
    return f", {params}" if params else ""


def mixin_name(packet: PhasedPacket) -> str:
    """Name of the hand-written class providing parse/to_wire_bytes for a manual packet."""
    return f"{packet.name}Codec"


def render_packets(
    direction: Direction,
    packets: list[PhasedPacket],
    *,
    codec_import: str,
    manual_import: str,
) -> str:
    """Render the packet class definitions for one direction."""
    codecs: set[str] = set()
    mixins: list[str] = []
    for packet in packets:
        automatic = packet.kind == PacketKind.AUTOMATIC
        codecs |= fragments.codec_names(packet.fields, automatic=automatic)
        if not automatic:
            mixins.append(mixin_name(packet))

    imports: list[str] = []
    if codecs:
        imports.append(_import_line(codec_import, list(codecs)))
    if mixins:
        imports.append(_import_line(manual_import, mixins))

    return packets_template.render(
        direction=direction,
        packets=packets,
        imports=imports,
        PacketKind=PacketKind,
        mixin_name=mixin_name,
        constructor_name=_constructor_name,
        params=_params,
        declaration=fragments.declaration,
        annotation=fragments.annotation,
        read_args=lambda p: [fragments.read_expr(f) for f in p.fields],
        write_stmt=fragments.write_stmt,
        init_args=fragments.init_args,
        getter_doc=lambda f: _docstring(fragments.getter_doc(f)),
        call=_call,
    )


def render_enum(
    direction: Direction,
    packets: list[PhasedPacket],
    *,
    codec_import: str,
    runtime_import: str,
    packets_module: str,
) -> str:
    """Render the dispatch union and its lookups for one direction."""
    names = [p.name for p in packets]
    imports = [
        _import_line(codec_import, ["read_varint"]),
        _import_line(runtime_import, RUNTIME_NAMES),
    ]
    if names:
        imports.append(_import_line(packets_module, names))

    return enum_template.render(
        direction=direction,
        type_name=direction.type_name,
        packets=packets,
        phases=[(phase, packets_in_phase(packets, phase)) for phase in Phase],
        imports=imports,
        union=_union(names, "    "),
    )
