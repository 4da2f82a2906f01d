"""Generation driver: schema in, four Python modules out."""

import os
from dataclasses import dataclass
from importlib import resources
from os import PathLike
from pathlib import Path

from .python import render_enum, render_packets
from .types import Direction, PacketSchema, flatten

RUNTIME_FILES = [
    "__init__.py",
    "types.py",
    "errors.py",
]

BANNER = (
    "# This file is automatically generated by packetgen.\n"
    "# Do not manually edit this file, if you wish to make\n"
    "# changes here, then edit the packet schema and rerun packetgen.\n"
    "\n"
)


@dataclass(frozen=True)
class GeneratorOptions:
    """Import paths the generated modules are wired to.

    codec_import: module providing read_<type>/write_<type> routines and read_varint
    runtime_import: module providing ClientState and the dispatch errors
    manual_import: module providing <Name>Codec mixins for manually serialized packets
    """

    codec_import: str
    runtime_import: str = "packetgen.proto"
    manual_import: str = "manual_packets"


@dataclass(frozen=True)
class OutputPaths:
    """Where each generated artifact is written.

    A dispatch module imports its packet module relatively, so both files of a
    direction must sit in the same package.
    """

    clientbound_packets: Path
    serverbound_packets: Path
    clientbound_enum: Path
    serverbound_enum: Path

    @classmethod
    def in_directory(cls, directory: str | PathLike[str]) -> "OutputPaths":
        directory = Path(directory)
        return cls(
            clientbound_packets=directory / "clientbound_packets.py",
            serverbound_packets=directory / "serverbound_packets.py",
            clientbound_enum=directory / "clientbound_enum.py",
            serverbound_enum=directory / "serverbound_enum.py",
        )

    def packets(self, direction: Direction) -> Path:
        if direction == Direction.CLIENTBOUND:
            return self.clientbound_packets
        return self.serverbound_packets

    def enum(self, direction: Direction) -> Path:
        if direction == Direction.CLIENTBOUND:
            return self.clientbound_enum
        return self.serverbound_enum


@dataclass(frozen=True)
class GeneratedFiles:
    """Rendered artifacts, banner included."""

    clientbound_packets: str
    serverbound_packets: str
    clientbound_enum: str
    serverbound_enum: str

    def packets(self, direction: Direction) -> str:
        if direction == Direction.CLIENTBOUND:
            return self.clientbound_packets
        return self.serverbound_packets

    def enum(self, direction: Direction) -> str:
        if direction == Direction.CLIENTBOUND:
            return self.clientbound_enum
        return self.serverbound_enum


def render_all(
    schema: PacketSchema,
    options: GeneratorOptions,
    outputs: OutputPaths | None = None,
) -> GeneratedFiles:
    """Render all four artifacts without touching the filesystem."""
    rendered: dict[str, str] = {}
    for direction in Direction:
        packets = flatten(schema, direction)
        module = outputs.packets(direction).stem if outputs else f"{direction}_packets"
        rendered[f"{direction}_enum"] = BANNER + render_enum(
            direction,
            packets,
            codec_import=options.codec_import,
            runtime_import=options.runtime_import,
            packets_module=f".{module}",
        )
        rendered[f"{direction}_packets"] = BANNER + render_packets(
            direction,
            packets,
            codec_import=options.codec_import,
            manual_import=options.manual_import,
        )
    return GeneratedFiles(**rendered)


def write(files: GeneratedFiles, outputs: OutputPaths) -> None:
    """Write every artifact, replacing whatever was there before.

    Each artifact is staged next to its target first; the targets are only
    replaced once all four staged files are on disk.
    """
    staged: list[tuple[Path, Path]] = []
    try:
        for direction in Direction:
            for path, content in (
                (outputs.enum(direction), files.enum(direction)),
                (outputs.packets(direction), files.packets(direction)),
            ):
                path.parent.mkdir(parents=True, exist_ok=True)
                tmp = path.with_name(f".{path.name}.tmp")
                staged.append((tmp, path))
                tmp.write_text(content, encoding="utf-8")
    except OSError:
        for tmp, _ in staged:
            tmp.unlink(missing_ok=True)
        raise

    for tmp, path in staged:
        os.replace(tmp, path)


def generate(
    schema: PacketSchema, outputs: OutputPaths, options: GeneratorOptions
) -> GeneratedFiles:
    """Render and write all artifacts for a schema."""
    files = render_all(schema, options, outputs)
    write(files, outputs)
    return files


def runtime() -> dict[str, str]:
    """Return the runtime files as a dict of filename -> content."""
    result: dict[str, str] = {}
    for filename in RUNTIME_FILES:
        content = resources.files("packetgen.proto").joinpath(filename).read_text()
        result[filename] = content
    return result
