"""Unit tests configuration file."""

import os
import uuid
from importlib import import_module, invalidate_caches
from types import SimpleNamespace

import pytest

from packetgen.generator import GeneratorOptions, OutputPaths, generate, load

GENERATOR_DIR = os.path.join(os.path.dirname(os.path.realpath(__file__)), "generator")
PROTOCOL_FILE = os.path.join(GENERATOR_DIR, "protocol.json")


def pytest_configure(config):
    """Disable verbose output when running tests."""
    terminal = config.pluginmanager.getplugin("terminal")
    if terminal:
        terminal.TerminalReporter.showfspath = False


@pytest.fixture
def protocol():
    return load(PROTOCOL_FILE)


@pytest.fixture
def gen_package(tmp_path, monkeypatch):
    """Generate a schema into a fresh importable package and import its modules."""
    monkeypatch.syspath_prepend(GENERATOR_DIR)
    monkeypatch.syspath_prepend(str(tmp_path))

    def _gen(proto):
        package = f"generated_{uuid.uuid4().hex}"
        package_dir = tmp_path / package
        options = GeneratorOptions(codec_import="wire_codec", manual_import="manual_packets")
        generate(proto, OutputPaths.in_directory(package_dir), options)
        (package_dir / "__init__.py").write_text("")
        invalidate_caches()

        return SimpleNamespace(
            clientbound=import_module(f"{package}.clientbound_enum"),
            serverbound=import_module(f"{package}.serverbound_enum"),
            clientbound_packets=import_module(f"{package}.clientbound_packets"),
            serverbound_packets=import_module(f"{package}.serverbound_packets"),
        )

    return _gen


@pytest.fixture
def gen(gen_package, protocol):
    return gen_package(protocol)
