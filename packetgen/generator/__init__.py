"""Packet definition code generator."""

from .driver import GeneratedFiles as GeneratedFiles
from .driver import GeneratorOptions as GeneratorOptions
from .driver import OutputPaths as OutputPaths
from .driver import generate as generate
from .driver import render_all as render_all
from .schema import ValidationError as ValidationError
from .schema import load as load
from .schema import loads as loads
from .schema import parse as parse
from .types import *
