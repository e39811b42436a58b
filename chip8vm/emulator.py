"""Main CHIP-8 emulator execution engine.

Everything here is a pure function of an ``EmulatorState``. ``execute`` runs
eagerly: the stack guard inspects concrete values before dispatch.
"""

import os
from typing import Union

import jax
import jax.numpy as jnp
from chip8vm.state import EmulatorState
from chip8vm.decode import decode, is_known_instruction
from chip8vm.errors import ProgramIOError, ProgramTooLargeError
from chip8vm.stack import check_stack
from chip8vm.instructions.system import execute_system_instruction
from chip8vm.instructions.control_flow import (
    execute_jump, execute_call, execute_skip_if_equal_immediate,
    execute_skip_if_not_equal_immediate, execute_skip_if_equal_register,
    execute_skip_if_not_equal_register, execute_jump_with_offset, execute_skip_if_key
)
from chip8vm.instructions.alu import execute_alu_operation
from chip8vm.instructions.memory import execute_set, execute_add, execute_set_index, execute_random
from chip8vm.instructions.display import execute_display
from chip8vm.instructions.misc import execute_misc_instruction

INSTRUCTION_HANDLERS = [
    execute_system_instruction,
    execute_jump,
    execute_call,
    execute_skip_if_equal_immediate,
    execute_skip_if_not_equal_immediate,
    execute_skip_if_equal_register,
    execute_set,
    execute_add,
    execute_alu_operation,
    execute_skip_if_not_equal_register,
    execute_set_index,
    execute_jump_with_offset,
    execute_random,
    execute_display,
    execute_skip_if_key,
    execute_misc_instruction,
]


def execute(state: EmulatorState, instruction: int) -> EmulatorState:
    """Execute single CHIP-8 instruction.

    Unknown instructions leave the state untouched.

    Raises:
        StackOverflowError: CALL with a full stack.
        StackUnderflowError: RET with an empty stack.
    """
    instruction = int(instruction)
    if not is_known_instruction(instruction):
        return state
    check_stack(state.stack, instruction)

    decoded_instruction = decode(instruction)
    return jax.lax.switch(
        decoded_instruction.opcode,
        INSTRUCTION_HANDLERS,
        state, decoded_instruction
    )


def _pack_u16(high: jnp.uint8, low: jnp.uint8) -> jnp.uint16:
    """Pack two bytes into uint16."""
    return (high.astype(jnp.uint16) << 8) | low.astype(jnp.uint16)


def can_fetch(state: EmulatorState) -> bool:
    """Check that both bytes of the next instruction lie inside memory."""
    return int(state.pc) + 1 < state.memory_size


def fetch(state: EmulatorState) -> tuple[EmulatorState, jnp.uint16]:
    """Fetch next instruction from memory and advance pc past it."""
    instruction = _pack_u16(state.memory[state.pc], state.memory[state.pc + 1])
    return state.replace(pc=state.pc + 2), instruction


def load_rom(state: EmulatorState, rom_data: bytes) -> EmulatorState:
    """Copy program bytes into memory at the configured program start.

    Raises:
        ProgramTooLargeError: The program does not fit; memory is not touched.
    """
    start = state.config.program_start
    capacity = state.memory_size - start
    if len(rom_data) > capacity:
        raise ProgramTooLargeError(len(rom_data), capacity)
    if not rom_data:
        return state
    rom_array = jnp.array(list(rom_data), dtype=jnp.uint8)
    new_memory = state.memory.at[start:start + len(rom_data)].set(rom_array)
    return state.replace(memory=new_memory)


def read_rom(filename: Union[str, os.PathLike]) -> bytes:
    """Read raw program bytes from a file."""
    try:
        with open(filename, 'rb') as f:
            return f.read()
    except OSError as e:
        raise ProgramIOError(filename, e) from e


def load_rom_file(state: EmulatorState, filename: Union[str, os.PathLike]) -> EmulatorState:
    """Load ROM data from a file into CHIP-8 memory."""
    return load_rom(state, read_rom(filename))
