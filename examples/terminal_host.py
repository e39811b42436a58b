"""Minimal host loop: run a ROM and print the display as text.

Usage: python examples/terminal_host.py path/to/rom.ch8 [steps] [held keys]

Held keys use the usual QWERTY mapping of the hex keypad, e.g. ``"qe"``
holds 4 and 6 for the whole run.
"""

import sys

from chip8vm import KEYPAD_LAYOUT, MachineConfig, display_to_text
from chip8vm.logging import MachineLogger

RESET_TERMINAL = "\x1b[2J\x1b[1;1H"
KEYBOARD_ROWS = ("1234", "qwer", "asdf", "zxcv")
KEY_MAP = {
    char: key
    for chars, keys in zip(KEYBOARD_ROWS, KEYPAD_LAYOUT)
    for char, key in zip(chars, keys)
}

if __name__ == "__main__":
    rom_path = sys.argv[1]
    max_steps = int(sys.argv[2]) if len(sys.argv) > 2 else 2000
    held = sys.argv[3] if len(sys.argv) > 3 else ""

    machine = MachineConfig().build(logger=MachineLogger(log_level="INFO"))
    machine.load_program_from_path(rom_path)
    for char in held.lower():
        machine.set_key(KEY_MAP[char])

    for step in range(max_steps):
        if not machine.step():
            break
        if step % 100 == 0:
            print(RESET_TERMINAL + display_to_text(machine.display, on="█", off=" "), flush=True)

    print(display_to_text(machine.display, on="█", off=" "))
    print(f"{machine.instruction_count} instructions, {machine.beep_count} beeps")
