"""CHIP-8 stack operations."""

import jax.numpy as jnp

from chip8vm.constants import STACK_SIZE
from chip8vm.errors import StackOverflowError, StackUnderflowError
from chip8vm.state import StackState


def push(stack: StackState, address: jnp.ndarray) -> StackState:
    """Push address onto stack."""
    new_data = stack.data.at[stack.pointer].set(jnp.astype(address, jnp.uint32))
    return stack.replace(data=new_data, pointer=stack.pointer + 1)


def pop(stack: StackState) -> tuple[StackState, jnp.ndarray]:
    """Pop address from stack."""
    new_pointer = stack.pointer - 1
    popped_address = stack.data[new_pointer]
    new_data = stack.data.at[new_pointer].set(0)
    return stack.replace(data=new_data, pointer=new_pointer), popped_address


def check_stack(stack: StackState, instruction: int):
    """Raise if CALL or RET would leave the stack's bounds.

    Runs on concrete values, before dispatch, so a faulting step changes nothing.
    """
    depth = int(stack.pointer)
    if instruction & 0xF000 == 0x2000 and depth >= STACK_SIZE:
        raise StackOverflowError(
            f"CALL 0x{instruction & 0x0FFF:03X} with {depth} return addresses already on the stack"
        )
    if instruction == 0x00EE and depth <= 0:
        raise StackUnderflowError("RET with an empty call stack")
