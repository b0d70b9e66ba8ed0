#!/usr/bin/env python3

"""
Instruction Decoder

Splits a 16-bit instruction word into its fields and classifies it:

    family = first nibble
    x      = second nibble (register)
    y      = third nibble (register)
    n      = fourth nibble
    nn     = low byte
    nnn    = low 12 bits (address)

Classification gives each word a 'kind' tag naming the instruction it
encodes.  Words that don't encode anything get a kind of None, and it is up to
the CPU to treat those as errors.

Nothing here touches machine state, so decoding the same word always gives
the same result.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from collections import namedtuple

CPU_ENDIAN = "big"  # CHIP-8 is big-endian

Instruction = namedtuple("Instruction", ["word", "kind", "family", "x", "y", "n", "nn", "nnn"])

# Families identified by their first nibble alone
_KINDS_BY_FAMILY = {
    0x1: "JP",
    0x2: "CALL",
    0x3: "SE_BYTE",
    0x4: "SNE_BYTE",
    0x6: "LD_BYTE",
    0x7: "ADD_BYTE",
    0xA: "LD_I",
    0xB: "JP_V0",
    0xC: "RND",
    0xD: "DRW"
}

# Families that need the last nibble too (bitmask 0xF00F)
_KINDS_BY_NIBBLE = {
    0x5: {0x0: "SE_REG"},
    0x8: {
        0x0: "LD_REG",
        0x1: "OR",
        0x2: "AND",
        0x3: "XOR",
        0x4: "ADD_REG",
        0x5: "SUB",
        0x6: "SHR",
        0x7: "SUBN",
        0xE: "SHL"
    },
    0x9: {0x0: "SNE_REG"}
}

# Families that need the low byte too (bitmask 0xF0FF)
_KINDS_BY_BYTE = {
    0xE: {0x9E: "SKP", 0xA1: "SKNP"},
    0xF: {
        0x07: "LD_VX_DT",
        0x0A: "LD_VX_K",
        0x15: "LD_DT_VX",
        0x18: "LD_ST_VX",
        0x1E: "ADD_I",
        0x29: "LD_F",
        0x33: "LD_B",
        0x55: "LD_I_VX",
        0x65: "LD_VX_I"
    }
}

# Family 0 is an exact match, and anything else in it is a machine code call
_KINDS_EXACT = {0x00E0: "CLS", 0x00EE: "RET"}

KINDS = frozenset(
    ["SYS"] + list(_KINDS_EXACT.values()) + list(_KINDS_BY_FAMILY.values()) +
    [kind for kinds in _KINDS_BY_NIBBLE.values() for kind in kinds.values()] +
    [kind for kinds in _KINDS_BY_BYTE.values() for kind in kinds.values()]
)


def fetch(ram, pc):
    # Reads the two bytes at pc.  Raises a RAMError if either byte is out of range.
    return int.from_bytes(ram.read_block(pc, 2), CPU_ENDIAN, signed=False)


def classify(word):
    family = (word & 0xF000) >> 12

    if family == 0x0:
        return _KINDS_EXACT.get(word, "SYS")

    kind = _KINDS_BY_FAMILY.get(family)

    if kind is not None:
        return kind

    if family in _KINDS_BY_NIBBLE:
        return _KINDS_BY_NIBBLE[family].get(word & 0xF)

    return _KINDS_BY_BYTE[family].get(word & 0xFF)


def decode(word):
    return Instruction(
        word=word,
        kind=classify(word),
        family=(word & 0xF000) >> 12,
        x=(word & 0xF00) >> 8,
        y=(word & 0xF0) >> 4,
        n=word & 0xF,
        nn=word & 0xFF,
        nnn=word & 0xFFF
    )


# Mnemonic formats for the debugger, filled in with the decoded fields
_MNEMONICS = {
    "SYS": "SYS 0x{nnn:03x}",
    "CLS": "CLS",
    "RET": "RET",
    "JP": "JP 0x{nnn:03x}",
    "CALL": "CALL 0x{nnn:03x}",
    "SE_BYTE": "SE V{x:01x}, 0x{nn:02x}",
    "SNE_BYTE": "SNE V{x:01x}, 0x{nn:02x}",
    "SE_REG": "SE V{x:01x}, V{y:01x}",
    "LD_BYTE": "LD V{x:01x}, 0x{nn:02x}",
    "ADD_BYTE": "ADD V{x:01x}, 0x{nn:02x}",
    "LD_REG": "LD V{x:01x}, V{y:01x}",
    "OR": "OR V{x:01x}, V{y:01x}",
    "AND": "AND V{x:01x}, V{y:01x}",
    "XOR": "XOR V{x:01x}, V{y:01x}",
    "ADD_REG": "ADD V{x:01x}, V{y:01x}",
    "SUB": "SUB V{x:01x}, V{y:01x}",
    "SHR": "SHR V{x:01x}, V{y:01x}",
    "SUBN": "SUBN V{x:01x}, V{y:01x}",
    "SHL": "SHL V{x:01x}, V{y:01x}",
    "SNE_REG": "SNE V{x:01x}, V{y:01x}",
    "LD_I": "LD I, 0x{nnn:03x}",
    "JP_V0": "JP V0, 0x{nnn:03x}",
    "RND": "RND V{x:01x}, 0x{nn:02x}",
    "DRW": "DRW V{x:01x}, V{y:01x}, 0x{n:01x}",
    "SKP": "SKP V{x:01x}",
    "SKNP": "SKNP V{x:01x}",
    "LD_VX_DT": "LD V{x:01x}, DT",
    "LD_VX_K": "LD V{x:01x}, K",
    "LD_DT_VX": "LD DT, V{x:01x}",
    "LD_ST_VX": "LD ST, V{x:01x}",
    "ADD_I": "ADD I, V{x:01x}",
    "LD_F": "LD F, V{x:01x}",
    "LD_B": "LD B, V{x:01x}",
    "LD_I_VX": "LD [I], V{x:01x}",
    "LD_VX_I": "LD V{x:01x}, [I]"
}


def disassemble(instruction):
    mnemonic = _MNEMONICS.get(instruction.kind)

    if mnemonic is None:
        return "???"

    return mnemonic.format(**instruction._asdict())
