"""CHIP-8 display operations."""

import jax.numpy as jnp
from chip8vm.state import EmulatorState
from chip8vm.decode import DecodedInstruction


def execute_display(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """DXYN - Draw sprite at (VX, VY) with height N.

    The anchor wraps to the display, and so does every sprite pixel. VF is
    set when any lit pixel is turned off.
    """
    width, height = state.display_size
    xx, yy = jnp.meshgrid(jnp.arange(width), jnp.arange(height), indexing='ij')

    sprite_x = jnp.astype(state.V[instruction.x], jnp.int32) % width
    sprite_y = jnp.astype(state.V[instruction.y], jnp.int32) % height

    col_offset = (xx - sprite_x) % width
    row_offset = (yy - sprite_y) % height
    in_sprite = (col_offset < 8) & (row_offset < instruction.n)

    addresses = (jnp.astype(state.I, jnp.int32) + row_offset) % state.memory_size
    sprite_bytes = jnp.astype(state.memory[addresses], jnp.int32)
    bits = (sprite_bytes >> jnp.clip(7 - col_offset, 0, 7)) & 1
    sprite = (bits == 1) & in_sprite

    return state.replace(
        display=state.display ^ sprite,
        V=state.V.at[15].set(jnp.astype(jnp.any(state.display & sprite), jnp.uint8))
    )
