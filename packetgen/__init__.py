"""packetgen - Packet definition code generator for phased binary protocols."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("packetgen")
except PackageNotFoundError:
    __version__ = "(local)"
