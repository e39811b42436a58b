"""End-to-end test: a small logo ROM rendered to a known bitmap."""

import jax.numpy as jnp
from chip8vm import display_to_text
from chip8vm.rendering import text_to_display
from conftest import program

LOGO_ROM = program(
    0x00E0,  # 0x200: CLS
    0x6002,  # 0x202: V0 = 2
    0x6101,  # 0x204: V1 = 1
    0xA214,  # 0x206: I = sprite
    0xD015,  # 0x208: draw 5 rows at (V0, V1)
    0x620A,  # 0x20A: V2 = 0xA
    0xF229,  # 0x20C: I = glyph for V2
    0x600C,  # 0x20E: V0 = 12
    0xD015,  # 0x210: draw glyph at (V0, V1)
    0x1212,  # 0x212: JP 0x212
) + bytes([0x3C, 0x42, 0x81, 0x42, 0x3C])  # 0x214: ring sprite

EXPECTED_TOP_LEFT = """
....................
....####....####....
...#....#...#..#....
..#......#..####....
...#....#...#..#....
....####....#..#....
....................
"""


def test_logo_rom_golden_display(make_machine):
    machine = make_machine(LOGO_ROM)

    executed = machine.run(max_steps=40)

    assert executed == 40
    assert machine.program_counter == 0x212
    expected = text_to_display(EXPECTED_TOP_LEFT)
    assert (machine.display[:20, :7] == expected).all()
    assert machine.display.sum() == 28
    assert machine.registers[0xF] == 0


def test_logo_rom_text_dump(make_machine):
    machine = make_machine(LOGO_ROM)
    machine.run(max_steps=9)

    lines = display_to_text(machine.display).splitlines()

    assert len(lines) == 32
    assert all(len(line) == 64 for line in lines)
    assert lines[1] == "....####....####" + "." * 48
    assert set("".join(lines[7:])) == {"."}


def test_logo_rom_is_deterministic(make_machine):
    first = make_machine(LOGO_ROM)
    second = make_machine(LOGO_ROM)

    first.run(max_steps=25)
    second.run(max_steps=25)

    assert jnp.array_equal(first.display, second.display)
