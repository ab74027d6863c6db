"""Bytecode module for locating import calls in compiled Lua function prototypes."""

from .instructions import Constant, Instruction, OpCode, Prototype
from .aliasing import RegisterAliases, find_import_calls

__all__ = [
    "Constant",
    "Instruction",
    "OpCode",
    "Prototype",
    "RegisterAliases",
    "find_import_calls",
]
