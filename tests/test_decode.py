"""Tests for instruction decoding."""

import pytest
from chip8vm import decode, nibbles, is_known_instruction


def test_decode_fields():
    decoded = decode(0xD3A7)

    assert decoded.raw == 0xD3A7
    assert decoded.opcode == 0xD
    assert decoded.x == 0x3
    assert decoded.y == 0xA
    assert decoded.n == 0x7
    assert decoded.nn == 0xA7
    assert decoded.nnn == 0x3A7


def test_nibbles_most_significant_first():
    assert nibbles(0xABCD) == (0xA, 0xB, 0xC, 0xD)
    assert nibbles(0x00E0) == (0x0, 0x0, 0xE, 0x0)


@pytest.mark.parametrize("instruction", [
    0x0000, 0x00E0, 0x00EE, 0x1234, 0x2FFF, 0x3142, 0x4142, 0x5120, 0x6AFF, 0x7A01,
    0x8120, 0x8121, 0x8122, 0x8123, 0x8124, 0x8125, 0x8126, 0x8127, 0x812E, 0x9120,
    0xA123, 0xB123, 0xC1FF, 0xD125, 0xE19E, 0xE1A1, 0xF107, 0xF10A, 0xF115, 0xF118,
    0xF11E, 0xF129, 0xF133, 0xF155, 0xF165,
])
def test_known_instructions(instruction):
    assert is_known_instruction(instruction)


@pytest.mark.parametrize("instruction", [
    0x0123, 0x00E1, 0x5121, 0x8128, 0x812F, 0x9121, 0xE19F, 0xF100, 0xF1FF,
])
def test_unknown_instructions(instruction):
    assert not is_known_instruction(instruction)
