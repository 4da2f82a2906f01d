"""Tests for the generation driver."""

from pathlib import Path

import pytest

from packetgen.generator import GeneratorOptions, OutputPaths, generate, parse, render_all
from packetgen.generator.driver import BANNER, runtime, write

OPTIONS = GeneratorOptions(codec_import="wire_codec")


def describe_render_all():
    def prefixes_every_artifact_with_banner(expect, protocol):
        files = render_all(protocol, OPTIONS)
        for content in (
            files.clientbound_packets,
            files.serverbound_packets,
            files.clientbound_enum,
            files.serverbound_enum,
        ):
            expect(content.startswith(BANNER)) == True
            expect(content.count("automatically generated")) == 1

    def is_idempotent(expect, protocol):
        expect(render_all(protocol, OPTIONS)) == render_all(protocol, OPTIONS)

    def wires_configured_imports(expect, protocol):
        options = GeneratorOptions(
            codec_import="game.codec", runtime_import="game.runtime", manual_import="game.manual"
        )
        files = render_all(protocol, options)
        expect("from game.runtime import ClientState" in files.clientbound_enum) == True
        expect("from game.codec import read_varint\n" in files.serverbound_enum) == True
        expect("from game.manual import SetCompressionCodec\n" in files.clientbound_packets) == True

    def imports_packets_module_by_output_name(expect, protocol, tmp_path):
        outputs = OutputPaths(
            clientbound_packets=tmp_path / "cb_defs.py",
            serverbound_packets=tmp_path / "sb_defs.py",
            clientbound_enum=tmp_path / "cb.py",
            serverbound_enum=tmp_path / "sb.py",
        )
        files = render_all(protocol, OPTIONS, outputs)
        expect("from .cb_defs import" in files.clientbound_enum) == True
        expect("from .sb_defs import" in files.serverbound_enum) == True

    def renders_composite_annotations_that_compile(expect):
        fields = [{"name": "slots", "type": "list[int]", "read": "slot_list"}]
        proto = parse({"clientbound": {"play": [{"name": "Slots", "id": 0, "fields": fields}]}})
        content = render_all(proto, OPTIONS).clientbound_packets
        expect("slots: list[int]" in content) == True
        compile(content, "clientbound_packets.py", "exec")


def describe_generate():
    def writes_four_files(expect, protocol, tmp_path):
        outputs = OutputPaths.in_directory(tmp_path / "out")
        files = generate(protocol, outputs, OPTIONS)

        expect(outputs.clientbound_packets.read_text()) == files.clientbound_packets
        expect(outputs.serverbound_packets.read_text()) == files.serverbound_packets
        expect(outputs.clientbound_enum.read_text()) == files.clientbound_enum
        expect(outputs.serverbound_enum.read_text()) == files.serverbound_enum

    def overwrites_stale_output(expect, protocol, tmp_path):
        outputs = OutputPaths.in_directory(tmp_path)
        outputs.clientbound_enum.write_text("stale\n" * 1000)

        generate(protocol, outputs, OPTIONS)

        content = outputs.clientbound_enum.read_text()
        expect("stale" in content) == False
        expect(content.startswith(BANNER)) == True

    def regenerates_byte_identical_files(expect, protocol, tmp_path):
        outputs = OutputPaths.in_directory(tmp_path)
        generate(protocol, outputs, OPTIONS)
        first = outputs.serverbound_packets.read_bytes()
        generate(protocol, outputs, OPTIONS)
        expect(outputs.serverbound_packets.read_bytes()) == first


def describe_write():
    def creates_missing_directories(expect, protocol, tmp_path):
        outputs = OutputPaths.in_directory(tmp_path / "a" / "b")
        write(render_all(protocol, OPTIONS), outputs)
        expect(outputs.serverbound_enum.exists()) == True

    def keeps_old_output_when_a_write_fails(expect, protocol, tmp_path, monkeypatch):
        outputs = OutputPaths.in_directory(tmp_path)
        for path in (outputs.clientbound_enum, outputs.serverbound_packets):
            path.write_text("previous\n")

        real_write_text = Path.write_text
        calls = []

        def failing_write_text(self, *args, **kwargs):
            calls.append(self)
            if len(calls) == 3:
                raise OSError("disk full")
            return real_write_text(self, *args, **kwargs)

        monkeypatch.setattr(Path, "write_text", failing_write_text)
        with pytest.raises(OSError, match="disk full"):
            write(render_all(protocol, OPTIONS), outputs)
        monkeypatch.undo()

        expect(outputs.clientbound_enum.read_text()) == "previous\n"
        expect(outputs.serverbound_packets.read_text()) == "previous\n"
        expect(outputs.clientbound_packets.exists()) == False
        expect(sorted(p.name for p in tmp_path.iterdir())) == [
            "clientbound_enum.py",
            "serverbound_packets.py",
        ]


def describe_runtime():
    def returns_runtime_sources(expect):
        files = runtime()
        expect(sorted(files)) == ["__init__.py", "errors.py", "types.py"]
        expect("class ClientState" in files["types.py"]) == True
        expect("class UnknownPacketIdError" in files["errors.py"]) == True
