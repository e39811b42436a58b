"""CHIP-8 virtual machine package."""

from chip8vm.config import MachineConfig
from chip8vm.state import EmulatorState, StackState, create_state
from chip8vm.emulator import execute, fetch, can_fetch, load_rom, load_rom_file, read_rom
from chip8vm.decode import DecodedInstruction, decode, nibbles, is_known_instruction
from chip8vm.machine import Machine
from chip8vm.errors import (
    Chip8Error, ConfigurationError, ProgramIOError, ProgramTooLargeError,
    StackError, StackOverflowError, StackUnderflowError,
)
from chip8vm.constants import (
    PROGRAM_START, FONT_START, SCREEN_WIDTH, SCREEN_HEIGHT,
    HIRES_SCREEN_WIDTH, HIRES_SCREEN_HEIGHT, KEYPAD_LAYOUT,
)
from chip8vm.rendering import display_to_text

__all__ = [
    "MachineConfig",
    "Machine",
    "EmulatorState",
    "StackState",
    "create_state",
    "fetch",
    "can_fetch",
    "execute",
    "load_rom",
    "load_rom_file",
    "read_rom",
    "DecodedInstruction",
    "decode",
    "nibbles",
    "is_known_instruction",
    "Chip8Error",
    "ConfigurationError",
    "ProgramIOError",
    "ProgramTooLargeError",
    "StackError",
    "StackOverflowError",
    "StackUnderflowError",
    "PROGRAM_START",
    "FONT_START",
    "SCREEN_WIDTH",
    "SCREEN_HEIGHT",
    "HIRES_SCREEN_WIDTH",
    "HIRES_SCREEN_HEIGHT",
    "KEYPAD_LAYOUT",
    "display_to_text",
]
