"""Command-line interface for packetgen code generation."""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from packetgen.generator import driver, schema
from packetgen.generator.types import Direction, PacketSchema, Phase, flatten


def _load_or_exit(input_file: str) -> PacketSchema:
    try:
        return schema.load(input_file)
    except schema.ValidationError as e:
        print(f"Invalid schema: {e}")
        sys.exit(1)


@click.group()
def cli() -> None:
    """Packet definition code generator."""


@cli.command()
@click.option("--input", "-i", "input_file", required=True, help="Input schema file (JSON)")
@click.option("--output", "-o", "output_dir", required=True, help="Output package directory")
@click.option(
    "--codec-import",
    "codec_import",
    required=True,
    help="Module providing the read_<type>/write_<type> routines",
)
@click.option(
    "--runtime-import",
    "runtime_import",
    default="packetgen.proto",
    show_default=True,
    help="Module providing ClientState and the dispatch errors",
)
@click.option(
    "--manual-import",
    "manual_import",
    default="manual_packets",
    show_default=True,
    help="Module providing <Name>Codec mixins for manually serialized packets",
)
def gen(
    input_file: str, output_dir: str, codec_import: str, runtime_import: str, manual_import: str
) -> None:
    """Generate packet definitions and dispatch enums from a schema."""
    proto = _load_or_exit(input_file)

    options = driver.GeneratorOptions(
        codec_import=codec_import,
        runtime_import=runtime_import,
        manual_import=manual_import,
    )
    driver.generate(proto, driver.OutputPaths.in_directory(output_dir), options)

    count = sum(len(flatten(proto, direction)) for direction in Direction)
    print(f"Generated {count} packets in {output_dir}")


@cli.command()
@click.option("--output", "-o", "output_path", default=".", help="Output directory")
@click.option("--name", default="packetgen_runtime", help="Runtime folder name")
def runtime(output_path: str, name: str) -> None:
    """Generate runtime support code."""
    runtime_dir = Path(output_path) / name
    runtime_dir.mkdir(parents=True, exist_ok=True)
    for filename, content in driver.runtime().items():
        (runtime_dir / filename).write_text(content)
    print(f"Generated runtime in {runtime_dir}")


@cli.command()
@click.option("--input", "-i", "input_file", required=True, help="Input schema file (JSON)")
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
def info(input_file: str, output_json: bool) -> None:
    """Display the packets of a schema by direction and phase."""
    proto = _load_or_exit(input_file)

    if output_json:
        _output_json(proto)
    else:
        _output_plain(proto)


def _output_json(proto: PacketSchema) -> None:
    """Output schema info as JSON."""
    data: dict = {}
    for direction in Direction:
        packets = flatten(proto, direction)
        data[direction.value] = {
            phase.value: [
                {
                    "id": p.id,
                    "name": p.name,
                    "fields": len(p.fields),
                    "serialize": p.kind.value,
                }
                for p in packets
                if p.phase == phase
            ]
            for phase in Phase
        }

    print(json.dumps(data, indent=2))


def _output_plain(proto: PacketSchema) -> None:
    """Output schema info using rich text formatting."""
    console = Console()

    for direction in Direction:
        console.print(f"[bold cyan]{direction.label}[/bold cyan]")

        table = Table(show_header=True, box=None, padding=(0, 2, 0, 0))
        table.add_column("Phase", style="dim")
        table.add_column("ID", style="green", justify="right")
        table.add_column("Name", style="white")
        table.add_column("Fields", style="yellow", justify="right")
        table.add_column("Serialize", style="dim")

        for packet in flatten(proto, direction):
            table.add_row(
                packet.phase.value,
                str(packet.id),
                packet.name,
                str(len(packet.fields)),
                packet.kind.value,
            )

        console.print(table)
        console.print()


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
