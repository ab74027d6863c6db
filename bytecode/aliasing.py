"""
Register alias tracking over compiled Lua function prototypes.

Walks each prototype's instructions in order and tracks which registers
currently hold the import global and which hold a string constant. A
``CALL`` whose function register holds the global and whose single
argument register holds a string is an import of that string.

The analysis is linear and intraprocedural. It ignores jumps, so this is
reported as a literal import even though the call may not be ``require``::

    local a = require
    if math.random() < .5 then
        a = tostring
    end
    a("hello.lua")

Upvalues, parameters and return values are never assumed to hold the
global or a string.
"""

import logging
from pathlib import Path
from typing import Dict, Iterable, Optional, Set

from graph.model import Diagnostic
from scanner.calls import IMPORT_PRIMITIVE, SKIP_REASON, ScanResult
from .instructions import Instruction, OpCode, Prototype

logger = logging.getLogger(__name__)

# Opcodes that overwrite R(A) and nothing else.
_WRITES_A = frozenset({
    OpCode.LOADBOOL,
    OpCode.GETUPVAL,
    OpCode.GETTABLE,
    OpCode.NEWTABLE,
    OpCode.ADD, OpCode.SUB, OpCode.MUL, OpCode.DIV, OpCode.MOD, OpCode.POW,
    OpCode.UNM, OpCode.NOT, OpCode.LEN,
    OpCode.CONCAT,
    OpCode.TESTSET,
    OpCode.CLOSURE,
})

# Opcodes that overwrite R(A) and every register above it.
_WRITES_FROM_A = frozenset({
    OpCode.CALL,
    OpCode.TAILCALL,
    OpCode.VARARG,
})

_CALLS = frozenset({OpCode.CALL, OpCode.TAILCALL})


class RegisterAliases:
    """Which registers hold the import global or a string constant."""

    def __init__(self, global_name: str = IMPORT_PRIMITIVE):
        self.global_name = global_name
        self._global: Set[int] = set()
        self._strings: Dict[int, str] = {}

    def holds_global(self, register: int) -> bool:
        return register in self._global

    def string_in(self, register: int) -> Optional[str]:
        return self._strings.get(register)

    def clear(self, registers: Iterable[int]) -> None:
        for register in registers:
            self._global.discard(register)
            self._strings.pop(register, None)

    def clear_from(self, first: int) -> None:
        """Forget every register numbered first or higher."""
        self._global = {r for r in self._global if r < first}
        self._strings = {r: s for r, s in self._strings.items() if r < first}

    def update(self, instruction: Instruction, prototype: Prototype) -> None:
        """Apply the effect of one instruction on register contents."""
        op = instruction.op_code
        a = instruction.a

        if op is OpCode.GETGLOBAL:
            self.clear([a])
            if prototype.constants[instruction.bx] == self.global_name:
                self._global.add(a)
        elif op is OpCode.LOADK:
            self.clear([a])
            constant = prototype.constants[instruction.bx]
            if isinstance(constant, str):
                self._strings[a] = constant
        elif op is OpCode.MOVE:
            b = instruction.b
            self.clear([a])
            if b in self._global:
                self._global.add(a)
            if b in self._strings:
                self._strings[a] = self._strings[b]
        elif op is OpCode.LOADNIL:
            self.clear(range(a, instruction.b + 1))
        elif op is OpCode.SELF:
            self.clear([a, a + 1])
        elif op in (OpCode.FORPREP, OpCode.FORLOOP):
            self.clear(range(a, a + 4))
        elif op is OpCode.TFORLOOP:
            self.clear_from(a + 3)
        elif op in _WRITES_FROM_A:
            self.clear_from(a)
        elif op in _WRITES_A:
            self.clear([a])


def find_import_calls(
    prototype: Prototype,
    source_file: Path,
    global_name: str = IMPORT_PRIMITIVE,
) -> ScanResult:
    """
    Find literal import calls in a prototype and all of its nested functions.

    Args:
        prototype: The compiled main chunk.
        source_file: The file the chunk was compiled from, for diagnostics.
        global_name: Name of the import global.

    Returns:
        ScanResult with imported literals in instruction order, nested
        functions after their parent, and a diagnostic for every call of
        the global that does not pass exactly one string constant.
    """
    result = ScanResult()
    _scan_prototype(prototype, source_file, global_name, result)
    return result


def _scan_prototype(prototype: Prototype, source_file: Path, global_name: str, result: ScanResult) -> None:
    aliases = RegisterAliases(global_name)

    for pc, instruction in enumerate(prototype.instructions):
        if instruction.op_code in _CALLS and aliases.holds_global(instruction.a):
            literal = aliases.string_in(instruction.a + 1)
            if instruction.b == 2 and literal is not None:
                result.literals.append(literal)
            else:
                description = f"{global_name} call at instruction {pc} of {prototype.name}"
                logger.info("%s: skipping %s", source_file.name, description)
                result.diagnostics.append(Diagnostic(source_file, description, SKIP_REASON))
        aliases.update(instruction, prototype)

    for nested in prototype.prototypes:
        _scan_prototype(nested, source_file, global_name, result)
